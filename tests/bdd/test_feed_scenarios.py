"""Behaviour tests for the RSS feed using pytest-bdd.

These scenarios build a blog in a temporary site, run
:class:`mdsite.generator.RssFeedGenerator`, and inspect the written
``feed.xml`` with ElementTree.
"""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from mdsite.config import GeneratorConfig
from mdsite.generator import RssFeedGenerator
from mdsite.scanner import ContentScanner

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "rss_feed.feature"
scenarios(FEATURE_FILE)

RFC1123_PATTERN = re.compile(
    r"[A-Z][a-z]{2}, \d{2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2} GMT"
)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps."""
    return {}


def _site(tmp_path: Path) -> GeneratorConfig:
    site = tmp_path / "site"
    output = site / "wwwroot"
    (output / "content" / "blog").mkdir(parents=True)
    return GeneratorConfig(
        site_path=site, output_path=output, site_url="https://example.com"
    )


@given(parsers.parse("a blog with {count:d} posts that all have frontmatter"))
def given_many_posts(tmp_path: Path, scenario_state: ScenarioState, count: int) -> None:
    """Write ``count`` dated posts with titles and publish dates."""
    config = _site(tmp_path)
    for day in range(1, count + 1):
        path = config.content_path / "blog" / f"2024-03-{day:02d}-post-{day}.md"
        path.write_text(
            f"---\ntitle: Post {day}\npublishDate: 2024-03-{day:02d}\n---\nBody.\n",
            encoding="utf-8",
        )
    scenario_state["config"] = config
    scenario_state["newest"] = f"https://example.com/blog/post-{count}"


@given("a blog with one post without a publish date")
def given_undated_post(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write a single post whose frontmatter lacks ``publishDate``."""
    config = _site(tmp_path)
    (config.content_path / "blog" / "undated.md").write_text(
        "---\ntitle: Undated\n---\nBody.\n", encoding="utf-8"
    )
    scenario_state["config"] = config


@when("I generate the RSS feed")
def when_generate_feed(scenario_state: ScenarioState) -> None:
    """Scan the blog, write ``feed.xml`` and parse it."""
    config = typ.cast("GeneratorConfig", scenario_state["config"])
    index = ContentScanner(config.content_path).scan()
    path = RssFeedGenerator(config, "https://example.com/", "Example").generate(index)
    root = ET.parse(path).getroot()  # noqa: S314 - locally generated feed
    scenario_state["items"] = root.findall("channel/item")


@then(parsers.parse("the feed contains {count:d} items"))
def then_item_count(scenario_state: ScenarioState, count: int) -> None:
    """The number of ``<item>`` elements matches."""
    items = typ.cast("list[ET.Element]", scenario_state["items"])
    assert len(items) == count


@then("the first item is the newest post")
def then_newest_first(scenario_state: ScenarioState) -> None:
    """Items start with the most recent post."""
    items = typ.cast("list[ET.Element]", scenario_state["items"])
    assert items[0].findtext("link") == scenario_state["newest"]


@then("every item has an RFC 1123 pubDate in GMT")
def then_pub_dates(scenario_state: ScenarioState) -> None:
    """Each ``pubDate`` uses the RFC 1123 layout."""
    items = typ.cast("list[ET.Element]", scenario_state["items"])
    assert items, "expected at least one item"
    for item in items:
        pub_date = item.findtext("pubDate") or ""
        assert RFC1123_PATTERN.fullmatch(pub_date), f"bad pubDate {pub_date!r}"
