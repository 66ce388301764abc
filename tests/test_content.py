"""Tests for reading Markdown front matter into content records."""

from __future__ import annotations

import datetime as dt
import typing as typ
from textwrap import dedent

import pytest

from devsite_pages.content import ContentError, load_content_records, split_front_matter
from devsite_pages.locale_filter import filter_by_locale

if typ.TYPE_CHECKING:
    from pathlib import Path


def _page(root: Path, relative: str, front_matter: str, body: str = "Body.\n") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{dedent(front_matter).strip()}\n---\n{body}", encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Build a content tree with an English post, its Spanish translation and a page."""
    root = tmp_path / "content"
    _page(root, "blog/mv3.md", "title: Manifest V3\ndate: 2021-03-01\ntags: [extensions]")
    _page(root, "es/blog/mv3.md", "title: Manifiesto V3\ndate: 2021-03-02")
    _page(root, "docs/index.md", "title: Docs\ndate: 2020-01-01T10:00:00Z")
    return root


def test_records_carry_url_locale_and_date(content_dir: Path) -> None:
    records = {r["source"]: r for r in load_content_records(content_dir, locales=["en", "es"])}

    english = records["blog/mv3.md"]
    assert english["url"] == "/blog/mv3/"
    assert english["locale"] == "en"
    assert english["date"] == dt.datetime(2021, 3, 1, tzinfo=dt.UTC)
    assert english["tags"] == ["extensions"]

    spanish = records["es/blog/mv3.md"]
    assert spanish["url"] == "/blog/mv3/"
    assert spanish["locale"] == "es"

    docs = records["docs/index.md"]
    assert docs["url"] == "/docs/"
    assert docs["date"] == dt.datetime(2020, 1, 1, 10, tzinfo=dt.UTC)


def test_unknown_locale_directory_is_part_of_the_url(content_dir: Path) -> None:
    records = load_content_records(content_dir, locales=["en"])
    spanish = next(r for r in records if r["source"] == "es/blog/mv3.md")
    assert spanish["url"] == "/es/blog/mv3/"
    assert spanish["locale"] == "en"


def test_front_matter_locale_overrides_path(tmp_path: Path) -> None:
    _page(tmp_path, "post.md", "locale: ja\ndate: 2021-01-01")
    (record,) = load_content_records(tmp_path, locales=["en", "ja"])
    assert record["locale"] == "ja"
    assert record["title"] == "post"


def test_missing_date_falls_back_to_mtime(tmp_path: Path) -> None:
    _page(tmp_path, "post.md", "title: Undated")
    (record,) = load_content_records(tmp_path)
    assert record["date"].tzinfo is not None


def test_records_feed_the_locale_filter(content_dir: Path) -> None:
    records = load_content_records(content_dir, locales=["en", "es"])
    result = filter_by_locale(records, "es", default_locale="en")
    assert [(r["url"], r["locale"]) for r in result] == [
        ("/blog/mv3/", "es"),
        ("/docs/", "en"),
    ]


def test_unterminated_front_matter(tmp_path: Path) -> None:
    (tmp_path / "broken.md").write_text("---\ntitle: Oops\n", encoding="utf-8")
    with pytest.raises(ContentError, match="broken.md"):
        load_content_records(tmp_path)


def test_non_mapping_front_matter(tmp_path: Path) -> None:
    _page(tmp_path, "list.md", "- a\n- b")
    with pytest.raises(ContentError, match="must be a mapping"):
        load_content_records(tmp_path)


def test_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_content_records(tmp_path / "absent")


def test_split_front_matter_without_block() -> None:
    assert split_front_matter("# Title\n") == ("", "# Title\n")
    assert split_front_matter("---\na: 1\n---\nbody") == ("a: 1\n", "body")
