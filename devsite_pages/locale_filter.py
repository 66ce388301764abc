"""Pick one front-matter record per url for a requested locale.

Content collections hold a record per translated page, each tagged with the
``url`` it renders to, its ``locale`` and a publication ``date``. Listing pages
want a single entry per url: the translation in the reader's locale where one
exists, otherwise the default-locale original.

Example
-------
>>> import datetime as dt
>>> records = [
...     {"url": "/a", "locale": "fr", "date": dt.datetime(2021, 1, 2)},
...     {"url": "/a", "locale": "en", "date": dt.datetime(2021, 1, 1)},
... ]
>>> [r["locale"] for r in filter_by_locale(records, "fr")]
['fr']
>>> [r["locale"] for r in filter_by_locale(records, "de")]
['en']
"""

from __future__ import annotations

import typing as typ

from ._constants import DEFAULT_LOCALE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

ContentRecord = typ.Mapping[str, typ.Any]


def filter_by_locale(
    records: cabc.Iterable[ContentRecord],
    locale: str | None = None,
    *,
    default_locale: str = DEFAULT_LOCALE,
) -> list[ContentRecord]:
    """Return one record per url, preferring ``locale`` over ``default_locale``.

    Parameters
    ----------
    records : Iterable[Mapping[str, Any]]
        Front-matter records carrying at least ``url``, ``locale`` and
        ``date``. Records are returned as-is, never copied or mutated.
    locale : str, optional
        Target locale; ``None`` selects ``default_locale``.
    default_locale : str, optional
        Locale used as the fallback when no translation exists.

    Returns
    -------
    list[Mapping[str, Any]]
        Selected records sorted by ``date`` descending. Records sharing a date
        keep their first-seen order.

    Notes
    -----
    Replacement only moves towards the requested locale: a default-locale
    record stored first is replaced by a later requested-locale record, but a
    requested-locale record is never displaced by a later default-locale one.
    """
    target = locale or default_locale
    selected: dict[str, ContentRecord] = {}
    for record in records:
        url = record["url"]
        if url in selected:
            if record["locale"] == target:
                selected[url] = record
        elif record["locale"] in (target, default_locale):
            selected[url] = record
    return sorted(selected.values(), key=lambda record: record["date"], reverse=True)


__all__ = ["ContentRecord", "filter_by_locale"]
