"""Tests for loading the namespace cache into reference page records."""

from __future__ import annotations

import json
import logging
import typing as typ

import pytest

from devsite_pages.namespaces import NamespacePage, load_namespaces

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Write a two-namespace cache file and return its path."""
    path = tmp_path / "namespaces-source.json"
    path.write_text(
        json.dumps(
            [
                {"name": "chrome.management", "shortName": "management"},
                {"name": "chrome.devtools.network", "shortName": "devtools.network"},
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_records_use_last_name_segment(cache_path: Path) -> None:
    pages = load_namespaces(cache_path)
    assert [page.name for page in pages] == ["management", "network"]
    assert pages[1] == NamespacePage(
        name="network",
        permalink="en/docs/tools/reference/network/",
        reflection={"name": "chrome.devtools.network", "shortName": "devtools.network"},
    )


def test_skip_returns_nothing_without_reading(cache_path: Path, mocker: typ.Any) -> None:
    opener = mocker.patch.object(type(cache_path), "open")
    assert load_namespaces(cache_path, skip=True) == []
    opener.assert_not_called()


def test_missing_cache_logs_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="devsite_pages.namespaces"):
        assert load_namespaces(tmp_path / "absent.json") == []
    assert "Namespaces data not available" in caplog.text


def test_corrupt_cache_logs_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "namespaces-source.json"
    path.write_text("[{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="devsite_pages.namespaces"):
        assert load_namespaces(path) == []
    assert "Namespaces data not available" in caplog.text


@pytest.mark.parametrize("payload", [{"name": "chrome.tabs"}, ["chrome.tabs"], [{}]])
def test_unexpected_shape_is_ignored(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, payload: object
) -> None:
    path = tmp_path / "namespaces-source.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="devsite_pages.namespaces"):
        assert load_namespaces(path) == []
    assert "not a list of namespaces" in caplog.text


def test_cache_with_invalid_utf8_logs_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "namespaces-source.json"
    path.write_bytes(b'[{"name": "chrome.\xff"}]')
    with caplog.at_level(logging.WARNING, logger="devsite_pages.namespaces"):
        assert load_namespaces(path) == []
    assert "Namespaces data not available" in caplog.text
