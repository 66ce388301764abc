"""Render the locale-filtered content listing page."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from devsite_pages.content import load_content_records
from devsite_pages.locale_filter import filter_by_locale

if typ.TYPE_CHECKING:
    from devsite_pages.config import SiteConfig
    from devsite_pages.locale_filter import ContentRecord


class ContentListingBuilder:
    """Render one listing page per locale from front-matter records."""

    def __init__(
        self,
        site_config: SiteConfig,
        *,
        locale: str | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder; ``locale`` defaults to the site default."""
        self.site_config = site_config
        self.locale = site_config.resolve_locale(locale)
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("content_listing.jinja")

    def entries(self) -> list[ContentRecord]:
        """Return the records shown on the listing, newest first."""
        records = load_content_records(
            self.site_config.content_dir,
            locales=self.site_config.locales,
            default_locale=self.site_config.default_locale,
        )
        return filter_by_locale(
            records, self.locale, default_locale=self.site_config.default_locale
        )

    def run(self) -> Path:
        """Render and write the listing HTML, returning the output path."""
        output_path = self.site_config.output_dir / self.locale / "index.html"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        context = {
            "entries": self.entries(),
            "locale": self.locale,
            "default_locale": self.site_config.default_locale,
            "theme": self.site_config.theme,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")
        return output_path


__all__ = ["ContentListingBuilder"]
