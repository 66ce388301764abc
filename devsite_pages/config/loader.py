"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import DEFAULT_LOCALE
from .helpers import (
    _as_bool,
    _build_theme_config,
    _ignore_extensions_from_env,
    _normalize_locales,
    _optional_path,
    _optional_str,
)
from .models import NamespacesConfig, SiteConfig, SiteConfigError


def load_site_config(
    path: Path, *, environ: typ.Mapping[str, str] | None = None
) -> SiteConfig:
    """Load the YAML configuration describing the site and its data sources.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).
    environ : Mapping[str, str], optional
        Environment consulted for ``ELEVENTY_IGNORE_EXTENSIONS``; defaults to
        ``os.environ``.

    Returns
    -------
    SiteConfig
        Parsed site configuration including locales, output folders, theme,
        and namespace cache settings.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the locale settings are empty or inconsistent.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from devsite_pages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.default_locale  # doctest: +SKIP
    'en'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    site_raw = raw.get("site", {}) or {}
    namespaces_raw = raw.get("namespaces", {}) or {}

    default_locale = _optional_str(site_raw.get("default_locale", DEFAULT_LOCALE))
    if not default_locale:
        msg = "site.default_locale must be a non-empty string."
        raise SiteConfigError(msg)
    locales = _normalize_locales(site_raw.get("locales")) or [default_locale]
    if default_locale not in locales:
        msg = (
            f"Default locale '{default_locale}' is missing from site.locales "
            f"({', '.join(locales)})."
        )
        raise SiteConfigError(msg)

    base = SiteConfig()
    return SiteConfig(
        default_locale=default_locale,
        locales=locales,
        output_dir=Path(site_raw.get("output_dir", base.output_dir)),
        content_dir=Path(site_raw.get("content_dir", base.content_dir)),
        theme=_build_theme_config(raw.get("theme", {}) or {}),
        namespaces=_build_namespaces_config(namespaces_raw, environ=environ),
    )


def _build_namespaces_config(
    payload: typ.Mapping[str, typ.Any],
    *,
    environ: typ.Mapping[str, str] | None,
) -> NamespacesConfig:
    """Build the namespace data settings, honouring the env skip toggle."""
    base = NamespacesConfig()
    ignore = _as_bool(payload.get("ignore_extensions", False))
    return NamespacesConfig(
        cache_path=_optional_path(payload.get("cache")) or base.cache_path,
        types_source=_optional_path(payload.get("types_source")),
        ignore_extensions=ignore or _ignore_extensions_from_env(environ),
    )


__all__ = ["load_site_config"]
