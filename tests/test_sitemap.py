"""Tests for sitemap.xml and robots.txt generation."""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as ET

import pytest

from mdsite.generator import SitemapGenerator
from mdsite.scanner import ContentScanner

if typ.TYPE_CHECKING:
    from pathlib import Path

    from mdsite.config import GeneratorConfig
    from mdsite.scanner import ContentIndex

SITEMAP_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


@pytest.fixture
def content_index(generator_config: GeneratorConfig) -> ContentIndex:
    """Return the scanned index of the sample site."""
    return ContentScanner(generator_config.content_path).scan()


def _read_urls(path: Path) -> list[tuple[str, str, str]]:
    root = ET.parse(path).getroot()  # noqa: S314 - locally generated file
    return [
        (
            url.findtext("sm:loc", namespaces=SITEMAP_NS) or "",
            url.findtext("sm:lastmod", namespaces=SITEMAP_NS) or "",
            url.findtext("sm:priority", namespaces=SITEMAP_NS) or "",
        )
        for url in root.findall("sm:url", SITEMAP_NS)
    ]


def test_generate_writes_sitemap_and_robots(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """Both files are written to the output directory."""
    paths = SitemapGenerator(generator_config, "https://example.com/").generate(
        content_index
    )
    assert [path.name for path in paths] == ["sitemap.xml", "robots.txt"]
    assert all(path.parent == generator_config.output_path for path in paths)


def test_sitemap_lists_static_routes_then_content(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """Static routes lead, followed by every routed content file."""
    sitemap, _ = SitemapGenerator(generator_config, "https://example.com/").generate(
        content_index
    )
    urls = _read_urls(sitemap)
    locs = [loc for loc, _, _ in urls]

    assert locs[:4] == [
        "https://example.com",
        "https://example.com/blog",
        "https://example.com/contact",
        "https://example.com/search",
    ]
    assert "https://example.com/blog/draft" in locs, (
        "pages without frontmatter are still listed"
    )
    assert "https://example.com/project/tool" in locs
    assert "https://example.com/solutions/consulting" in locs
    assert not any("/feature/" in loc for loc in locs), "features have no pages"
    assert len(locs) == 4 + 3 + 2 + 1 + 1 + 1


def test_sitemap_urls_have_no_double_slashes(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """A trailing slash on the site URL never doubles up in locations."""
    generator = SitemapGenerator(generator_config, "https://example.com///")
    entries = generator.collect_entries(content_index)

    for entry in entries:
        assert "//" not in entry.loc.split("://", 1)[1], f"double slash in {entry.loc}"


def test_sitemap_priorities_and_lastmod(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """Priorities follow the section and lastmod is an ISO date."""
    sitemap, _ = SitemapGenerator(generator_config, "https://example.com").generate(
        content_index
    )
    by_loc = {loc: (lastmod, priority) for loc, lastmod, priority in _read_urls(sitemap)}

    assert by_loc["https://example.com"][1] == "1.0"
    assert by_loc["https://example.com/blog"][1] == "0.8"
    assert by_loc["https://example.com/search"][1] == "0.3"
    assert by_loc["https://example.com/blog/first-post"][1] == "0.6"
    assert by_loc["https://example.com/project/library"][1] == "0.7"
    assert by_loc["https://example.com/docs/intro"][1] == "0.6"
    for lastmod, _ in by_loc.values():
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", lastmod), f"bad lastmod {lastmod!r}"


def test_sitemap_escapes_locations(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """Locations are XML-escaped."""
    generator = SitemapGenerator(generator_config, "https://example.com/?a=1&b=2")
    xml = generator.render_sitemap(generator.collect_entries(content_index))

    assert "a=1&amp;b=2" in xml
    assert "a=1&b=2" not in xml


def test_robots_points_at_sitemap(generator_config: GeneratorConfig) -> None:
    """robots.txt allows crawling and names the sitemap."""
    robots = SitemapGenerator(generator_config, "https://example.com/").render_robots()

    assert robots.startswith("# robots.txt for https://example.com\n")
    assert "User-agent: *\nAllow: /\n" in robots
    assert "Sitemap: https://example.com/sitemap.xml" in robots
