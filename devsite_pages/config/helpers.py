"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import os
import typing as typ
from pathlib import Path

from .._constants import IGNORE_EXTENSIONS_ENV
from .models import ThemeConfig

_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_path(value: object | None) -> Path | None:
    """Return a Path for non-empty values, otherwise None."""
    text = _optional_str(value)
    return Path(text) if text else None


def _normalize_locales(value: str | list[object] | None) -> list[str]:
    """Normalize locale definitions into an ordered list of unique codes."""
    match value:
        case str():
            candidates: list[object] = list(value.split())
        case list():
            candidates = value
        case _:
            return []
    locales: list[str] = []
    for candidate in candidates:
        code = str(candidate).strip()
        if code and code not in locales:
            locales.append(code)
    return locales


def _as_bool(value: object) -> bool:
    """Interpret YAML booleans and common truthy strings."""
    match value:
        case bool():
            return value
        case str() as text:
            return text.strip().lower() not in _FALSE_STRINGS
        case None:
            return False
        case _:
            return bool(value)


def _ignore_extensions_from_env(environ: typ.Mapping[str, str] | None = None) -> bool:
    """Return True when the environment asks to skip namespace data."""
    env = os.environ if environ is None else environ
    return bool(env.get(IGNORE_EXTENSIONS_ENV))


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    return ThemeConfig(
        site_name=payload.get("site_name", base.site_name),
        reference_label=payload.get("reference_label", base.reference_label),
        listing_title=payload.get("listing_title", base.listing_title),
    )


__all__ = [
    "_as_bool",
    "_build_theme_config",
    "_ignore_extensions_from_env",
    "_normalize_locales",
    "_optional_path",
    "_optional_str",
]
