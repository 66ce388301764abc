"""Typed dataclasses describing devsite site configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import DEFAULT_LOCALE, NAMESPACES_CACHE_FILENAME


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ThemeConfig:
    """Visual theming applied to generated pages."""

    site_name: str = "Chrome Developers"
    reference_label: str = "API reference"
    listing_title: str = "Latest"


@dc.dataclass(slots=True)
class NamespacesConfig:
    """Where the flattened namespace data lives and how it is produced.

    Attributes
    ----------
    cache_path : Path
        JSON file written by ``pages types`` and read by the data loader.
    types_source : Path | None
        Declaration file handed to TypeDoc when regenerating the cache.
    ignore_extensions : bool
        Skip loading namespace data entirely; reference pages are not built.
    """

    cache_path: Path = Path("site/_data") / NAMESPACES_CACHE_FILENAME
    types_source: Path | None = None
    ignore_extensions: bool = False


@dc.dataclass(slots=True)
class SiteConfig:
    """Site-wide settings alongside the namespace data configuration."""

    default_locale: str = DEFAULT_LOCALE
    locales: list[str] = dc.field(default_factory=lambda: [DEFAULT_LOCALE])
    output_dir: Path = Path("public")
    content_dir: Path = Path("site/content")
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    namespaces: NamespacesConfig = dc.field(default_factory=NamespacesConfig)

    def resolve_locale(self, locale: str | None) -> str:
        """Return ``locale`` when configured, else the default locale."""
        if locale is None:
            return self.default_locale
        if locale not in self.locales:
            available = ", ".join(self.locales)
            msg = f"Unknown locale '{locale}'. Known locales: {available}"
            raise SiteConfigError(msg)
        return locale


__all__ = ["NamespacesConfig", "SiteConfig", "SiteConfigError", "ThemeConfig"]
