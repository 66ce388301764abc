r"""Read Markdown front matter into locale-tagged content records.

Each page under the content directory is a Markdown file that opens with a
YAML front-matter block. Translations live under a locale directory
(``es/blog/post.md``) and share the url of their default-locale original
(``blog/post.md``), which is what lets :func:`filter_by_locale` pick one
record per url.

Example
-------
>>> from pathlib import Path
>>> records = load_content_records(Path("site/content"), locales=["en", "es"])  # doctest: +SKIP
>>> records[0]["url"], records[0]["locale"]  # doctest: +SKIP
('/blog/post/', 'es')
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_LOCALE

if typ.TYPE_CHECKING:
    import collections.abc as cabc

FRONT_MATTER_DELIMITER = "---"


class ContentError(ValueError):
    """Raised when a content file carries malformed front matter."""


def load_content_records(
    content_dir: Path,
    *,
    locales: cabc.Sequence[str] = (DEFAULT_LOCALE,),
    default_locale: str = DEFAULT_LOCALE,
) -> list[dict[str, typ.Any]]:
    """Return one front-matter record per Markdown file under ``content_dir``.

    Parameters
    ----------
    content_dir : Path
        Root of the Markdown content tree.
    locales : Sequence[str], optional
        Locale codes recognised as leading directory names.
    default_locale : str, optional
        Locale assigned to files outside any locale directory.

    Returns
    -------
    list[dict[str, Any]]
        Records holding every front-matter key plus ``url``, ``locale``,
        ``date`` (UTC datetime), ``title`` and ``source`` (path relative to
        ``content_dir``), ordered by source path.

    Raises
    ------
    FileNotFoundError
        If ``content_dir`` does not exist.
    ContentError
        If a file's front matter is unterminated, unparsable, or not a
        mapping.
    """
    if not content_dir.is_dir():
        msg = f"Content directory '{content_dir}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    records: list[dict[str, typ.Any]] = []
    for path in sorted(content_dir.rglob("*.md")):
        relative = path.relative_to(content_dir)
        front_matter = _read_front_matter(path, loader)
        path_locale, url = _locale_and_url(relative, locales)
        record: dict[str, typ.Any] = dict(front_matter)
        record["locale"] = str(front_matter.get("locale") or path_locale or default_locale)
        record["url"] = str(front_matter.get("url") or url)
        record["date"] = _parse_date(front_matter.get("date")) or _mtime(path)
        record["title"] = str(front_matter.get("title") or relative.stem)
        record["source"] = relative.as_posix()
        records.append(record)
    return records


def split_front_matter(text: str) -> tuple[str, str]:
    """Return ``(front_matter_yaml, body)``; front matter is empty when absent."""
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIMITER:
        return "", text
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONT_MATTER_DELIMITER:
            return "".join(lines[1:idx]), "".join(lines[idx + 1 :])
    msg = "front matter block is not terminated"
    raise ContentError(msg)


def _read_front_matter(path: Path, loader: YAML) -> dict[str, typ.Any]:
    try:
        raw, _body = split_front_matter(path.read_text(encoding="utf-8"))
        loaded = loader.load(raw) if raw.strip() else {}
    except ContentError as exc:
        msg = f"{path}: {exc}"
        raise ContentError(msg) from exc
    except YAMLError as exc:
        msg = f"{path}: invalid front matter ({exc})"
        raise ContentError(msg) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"{path}: front matter must be a mapping."
        raise ContentError(msg)
    return dict(loaded)


def _locale_and_url(
    relative: Path, locales: cabc.Sequence[str]
) -> tuple[str | None, str]:
    """Split a content path into its locale directory and page url."""
    parts = list(relative.with_suffix("").parts)
    locale = None
    if len(parts) > 1 and parts[0] in locales:
        locale = parts.pop(0)
    if parts and parts[-1] == "index":
        parts.pop()
    url = "/" + "".join(f"{part}/" for part in parts)
    return locale, url


def _parse_date(value: object) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def _mtime(path: Path) -> dt.datetime:
    return dt.datetime.fromtimestamp(path.stat().st_mtime, tz=dt.UTC)


__all__ = ["ContentError", "load_content_records", "split_front_matter"]
