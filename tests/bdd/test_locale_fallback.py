"""Behaviour tests for locale fallback on the content listing."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from devsite_pages.config import load_site_config
from devsite_pages.generator import ContentListingBuilder

FEATURE_FILE = Path(__file__).resolve().parents[1] / "features" / "locale_fallback.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


def _post(root: Path, relative: str, title: str, date: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\ntitle: {title}\ndate: {date}\n---\nBody.\n", encoding="utf-8")


@given("a content tree with two English posts and one Spanish translation")
def given_content_tree(tmp_path: Path, scenario_state: ScenarioState) -> None:
    content = tmp_path / "content"
    _post(content, "blog/mv3.md", "Manifest V3", "2021-03-01")
    _post(content, "blog/welcome.md", "Welcome", "2020-06-15")
    _post(content, "es/blog/mv3.md", "Manifiesto V3", "2021-03-02")
    config_path = tmp_path / "site.yaml"
    config_path.write_text(
        dedent(
            f"""
            site:
              default_locale: en
              locales: [en, es]
              output_dir: {tmp_path / "public"}
              content_dir: {content}
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    scenario_state["config_path"] = config_path


@when(parsers.parse('the listing is built for "{locale}"'))
def when_listing_built(scenario_state: ScenarioState, locale: str) -> None:
    site_config = load_site_config(scenario_state["config_path"], environ={})
    path = ContentListingBuilder(site_config, locale=locale).run()
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    scenario_state["entries"] = soup.select(".listing__entry")


@then(parsers.parse('the listing links "{href}" in "{lang}"'))
def then_listing_links(scenario_state: ScenarioState, href: str, lang: str) -> None:
    matches = [entry for entry in scenario_state["entries"] if entry.a["href"] == href]
    assert len(matches) == 1
    assert matches[0]["lang"] == lang


@then(parsers.parse('only "{href}" is marked as a fallback'))
def then_only_fallback(scenario_state: ScenarioState, href: str) -> None:
    fallbacks = [
        entry.a["href"]
        for entry in scenario_state["entries"]
        if entry.select_one(".listing__fallback") is not None
    ]
    assert fallbacks == [href]


@then(parsers.parse("the listing has {count:d} entries"))
def then_entry_count(scenario_state: ScenarioState, count: int) -> None:
    assert len(scenario_state["entries"]) == count


@then("no entry is marked as a fallback")
def then_no_fallback(scenario_state: ScenarioState) -> None:
    assert all(
        entry.select_one(".listing__fallback") is None for entry in scenario_state["entries"]
    )
