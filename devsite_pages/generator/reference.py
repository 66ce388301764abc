"""Render one API reference page per flattened ``chrome.*`` namespace.

The builder consumes the records produced by
:func:`devsite_pages.namespaces.load_namespaces` and writes
``<output_dir>/<permalink>index.html`` for each. Doc comments are rendered as
Markdown (with ``{@link ...}`` references resolved to sibling pages) and member
signatures are highlighted as TypeScript.

>>> from pathlib import Path
>>> from devsite_pages.config import load_site_config
>>> from devsite_pages.generator import ReferencePageBuilder
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> ReferencePageBuilder(site).run()  # doctest: +SKIP
[PosixPath('public/en/docs/tools/reference/management/index.html'), ...]
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from devsite_pages.generator.link_rewriter import _build_link_rewriter
from devsite_pages.generator.renderer import HtmlContentRenderer
from devsite_pages.logging import get_logger
from devsite_pages.namespaces import NamespacePage, load_namespaces

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from devsite_pages.config import SiteConfig

logger = get_logger("reference")

_CALLABLE_KINDS = frozenset({"function", "method", "constructor"})
_RECORD_KINDS = frozenset({"interface", "type literal", "class"})


class ReferencePageBuilder:
    """Render API reference pages from cached namespace data."""

    def __init__(
        self,
        site_config: SiteConfig,
        *,
        templates_dir: Path | None = None,
        pages: list[NamespacePage] | None = None,
    ) -> None:
        """Initialize the builder and its Jinja environment.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed site configuration; supplies the output folder, theme and
            namespace cache location.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to the package
            ``templates`` directory.
        pages : list[NamespacePage], optional
            Pre-loaded namespace pages. When ``None`` the cache configured in
            ``site_config.namespaces`` is read (or skipped when
            ``ignore_extensions`` is set).
        """
        self.site_config = site_config
        if pages is None:
            pages = load_namespaces(
                site_config.namespaces.cache_path,
                skip=site_config.namespaces.ignore_extensions,
            )
        self.pages = pages
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        names = [str(page.reflection.get("name", "")) for page in pages]
        self.renderer = HtmlContentRenderer(link_extension=_build_link_rewriter(names))
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["markdown"] = self._markdown_filter
        self.env.filters["signature"] = self._signature_filter
        self.template = self.env.get_template("reference_page.jinja")

    def run(self) -> list[Path]:
        """Render every namespace page and return the written paths."""
        if not self.pages:
            logger.info("No namespace data loaded; skipping reference pages.")
            return []
        generated_at = dt.datetime.now(dt.UTC)
        nav = [
            {"label": page.reflection.get("shortName") or page.name, "href": f"/{page.permalink}"}
            for page in self.pages
        ]
        written: list[Path] = []
        seen: dict[str, str] = {}
        for page in self.pages:
            full_name = str(page.reflection.get("name", page.name))
            if page.permalink in seen:
                logger.warning(
                    "%s and %s share the permalink %s; the later page wins.",
                    seen[page.permalink],
                    full_name,
                    page.permalink,
                )
            seen[page.permalink] = full_name
            context = {
                "page": page,
                "namespace": page.reflection,
                "nav": nav,
                "theme": self.site_config.theme,
                "generated_at": generated_at,
                "pygments_css": self.renderer.stylesheet,
            }
            html = self.template.render(**context)
            output_path = self.site_config.output_dir / page.permalink / "index.html"
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            written.append(output_path)
        return written

    def _markdown_filter(self, text: str | None) -> Markup:
        return Markup(self.renderer.markdown(text or ""))  # noqa: S704 - renderer output

    def _signature_filter(self, member: cabc.Mapping[str, typ.Any]) -> Markup:
        return Markup(self.renderer.code_block(format_signature(member)))  # noqa: S704


def format_signature(member: cabc.Mapping[str, typ.Any]) -> str:
    """Return a TypeScript-like declaration line for a rendered member.

    Examples
    --------
    >>> format_signature({"name": "getAll", "kind": "function", "type": "void",
    ...                   "parameters": [{"name": "callback", "type": "() => void",
    ...                                   "optional": True}]})
    'function getAll(callback?: () => void): void'
    >>> format_signature({"name": "id", "kind": "property", "type": "string"})
    'id: string'
    """
    name = member.get("name", "")
    kind = member.get("kind", "")
    if kind in _CALLABLE_KINDS:
        params = ", ".join(_format_member(param) for param in member.get("parameters", []))
        return f"function {name}({params}): {member.get('type') or 'void'}"
    if kind in _RECORD_KINDS:
        body = "".join(f"  {_format_member(prop)};\n" for prop in member.get("properties", []))
        return f"interface {name} {{\n{body}}}" if body else f"interface {name} {{}}"
    if kind == "enum":
        body = "".join(f"  {value},\n" for value in member.get("values", []))
        return f"enum {name} {{\n{body}}}" if body else f"enum {name} {{}}"
    if kind == "type alias":
        return f"type {name} = {member.get('type') or 'any'}"
    return _format_member(member)


def _format_member(member: cabc.Mapping[str, typ.Any]) -> str:
    marker = "?" if member.get("optional") else ""
    return f"{member.get('name', '')}{marker}: {member.get('type') or 'any'}"


__all__ = ["ReferencePageBuilder", "format_signature"]
