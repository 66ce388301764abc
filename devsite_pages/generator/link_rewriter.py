"""Helpers for turning TypeDoc ``{@link ...}`` references into page links."""

from __future__ import annotations

import re
import typing as typ

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

from devsite_pages._constants import REFERENCE_PERMALINK_TEMPLATE, ROOT_NAMESPACE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

INLINE_LINK_PATTERN = re.compile(r"\{@link(?:code|plain)?\s+([^\s|}]+)(?:\s*\|?\s*([^}]*))?\}")


def _build_link_rewriter(namespace_names: cabc.Iterable[str]) -> Extension | None:
    """Return a ReferenceLinkExtension for the given fully-qualified names."""
    names = [name for name in namespace_names if name]
    if not names:
        return None
    return ReferenceLinkExtension(names)


class ReferenceLinkExtension(Extension):
    """Resolve ``{@link chrome.tabs.Tab}`` references to reference page URLs.

    Targets are matched against the known namespaces by longest dotted prefix;
    whatever remains becomes the page fragment. References to unknown
    namespaces are rendered as inline code so the text stays readable.
    """

    def __init__(self, namespace_names: cabc.Iterable[str]) -> None:
        super().__init__()
        self.namespace_names = frozenset(namespace_names)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the reference-link preprocessor on the Markdown instance."""
        processor = ReferenceLinkPreprocessor(md, self.namespace_names)
        md.preprocessors.register(processor, "devsite_reference_links", 25)


class ReferenceLinkPreprocessor(Preprocessor):
    """Rewrite inline link tags before Markdown parses the text."""

    def __init__(self, md: Markdown, namespace_names: frozenset[str]) -> None:
        super().__init__(md)
        self.namespace_names = namespace_names

    def run(self, lines: list[str]) -> list[str]:
        """Replace every ``{@link ...}`` tag on each line."""
        return [INLINE_LINK_PATTERN.sub(self._replace, line) for line in lines]

    def _replace(self, match: re.Match[str]) -> str:
        target = match.group(1)
        label = (match.group(2) or "").strip() or target
        href = self.resolve(target)
        if href is None:
            return f"`{label}`"
        return f"[{label}]({href})"

    def resolve(self, target: str) -> str | None:
        """Return the site URL for ``target`` or None when it is unknown."""
        if target.startswith(("http://", "https://")):
            return target
        qualified = target
        if not qualified.startswith(f"{ROOT_NAMESPACE}."):
            qualified = f"{ROOT_NAMESPACE}.{qualified}"
        parts = qualified.split(".")
        for end in range(len(parts), 1, -1):
            candidate = ".".join(parts[:end])
            if candidate in self.namespace_names:
                page = REFERENCE_PERMALINK_TEMPLATE.format(name=parts[end - 1])
                fragment = "-".join(parts[end:])
                href = f"/{page}"
                return f"{href}#{fragment}" if fragment else href
        return None


__all__ = [
    "INLINE_LINK_PATTERN",
    "ReferenceLinkExtension",
    "ReferenceLinkPreprocessor",
    "_build_link_rewriter",
]
