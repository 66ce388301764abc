"""Load flattened namespace data for the API reference pages.

``pages types`` writes every ``chrome.*`` namespace to a JSON cache. At site
build time :func:`load_namespaces` turns that cache into one
:class:`NamespacePage` per namespace, each carrying the permalink its reference
page renders to. A missing or unreadable cache is not fatal: the build simply
has no reference pages.

Example
-------
>>> from pathlib import Path
>>> pages = load_namespaces(Path("site/_data/namespaces-source.json"))  # doctest: +SKIP
>>> pages[0].permalink  # doctest: +SKIP
'en/docs/tools/reference/management/'
"""

from __future__ import annotations

import dataclasses as dc
import json
import typing as typ

from ._constants import REFERENCE_PERMALINK_TEMPLATE
from .logging import get_logger

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = get_logger("namespaces")


@dc.dataclass(slots=True)
class NamespacePage:
    """A reference page record handed to the page builder.

    Attributes
    ----------
    name : str
        Last dotted segment of the namespace name (``"events"`` for
        ``"chrome.management.events"``).
    permalink : str
        Output path of the page relative to the site root.
    reflection : dict[str, Any]
        The flattened namespace exactly as stored in the cache.
    """

    name: str
    permalink: str
    reflection: dict[str, typ.Any]


def load_namespaces(cache_path: Path, *, skip: bool = False) -> list[NamespacePage]:
    """Return reference page records for every cached namespace.

    Parameters
    ----------
    cache_path : Path
        JSON array written by :func:`devsite_pages.typedoc.write_namespaces`.
    skip : bool, optional
        When True, return an empty list without reading the cache.

    Returns
    -------
    list[NamespacePage]
        Records in cache order; empty when skipped or when the cache is
        missing or corrupt (a warning is logged in those cases).
    """
    if skip:
        return []
    namespaces = _read_cache(cache_path)
    pages: list[NamespacePage] = []
    for api in namespaces:
        last_part = str(api["name"]).rsplit(".", 1)[-1]
        pages.append(
            NamespacePage(
                name=last_part,
                permalink=REFERENCE_PERMALINK_TEMPLATE.format(name=last_part),
                reflection=api,
            )
        )
    return pages


def _read_cache(cache_path: Path) -> list[dict[str, typ.Any]]:
    """Return the cached namespace objects, or an empty list on any failure."""
    try:
        with cache_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError) as exc:
        logger.warning(
            "Namespaces data not available (%s), try running `pages types`.", exc
        )
        return []
    if not isinstance(payload, list) or not all(
        isinstance(item, dict) and "name" in item for item in payload
    ):
        logger.warning(
            "Namespaces data in %s is not a list of namespaces, ignoring it.",
            cache_path,
        )
        return []
    return payload


__all__ = ["NamespacePage", "load_namespaces"]
