"""Tests for the pre-built search index generator."""

from __future__ import annotations

import json
import threading
import typing as typ

import pytest

from mdsite.generator import SearchIndexEntry, SearchIndexGenerator
from mdsite.generator.search_index import (
    build_entry,
    build_search_entries,
    decode_search_index,
    encode_search_index,
)
from mdsite.scanner import BuildCancelledError, ContentScanner

if typ.TYPE_CHECKING:
    from mdsite.config import GeneratorConfig
    from mdsite.scanner import ContentIndex


@pytest.fixture
def content_index(generator_config: GeneratorConfig) -> ContentIndex:
    """Return the scanned index of the sample site."""
    return ContentScanner(generator_config.content_path).scan()


def test_generate_writes_compact_json(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """The index is a single line of camelCase JSON."""
    path = SearchIndexGenerator(generator_config).generate(content_index)

    assert path == generator_config.output_path / "search-index.json"
    text = path.read_text(encoding="utf-8")
    assert "\n" not in text, "search index should be written on one line"
    payload = json.loads(text)
    assert set(payload[0]) == {"title", "description", "content", "url", "type", "tags"}


def test_entries_cover_routed_sections(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """Routed sections contribute entries in scan order; features do not."""
    entries = build_search_entries(generator_config.content_path, content_index)
    urls = [entry.url for entry in entries]

    assert urls == [
        "/blog/second-post",
        "/blog/first-post",
        "/project/tool",
        "/project/library",
        "/article/guide",
        "/docs/intro",
        "/solutions/consulting",
    ], "files without frontmatter and unrouted sections are skipped"


def test_entry_fields(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """Summary beats description and tags are carried through."""
    entries = {
        entry.url: entry
        for entry in build_search_entries(generator_config.content_path, content_index)
    }

    second = entries["/blog/second-post"]
    assert second.description == "Summary wins"
    assert second.type == "blog"
    assert second.content == "Second body mentions blazor."

    first = entries["/blog/first-post"]
    assert first.title == "First Post"
    assert first.description == "The first post"
    assert first.tags == ["intro", "news"]
    assert first.content == "First\nHello world."


def test_build_entry_falls_back_to_slug_and_truncates() -> None:
    """Untitled pages use their slug and long content is cut."""
    entry = build_entry("---\nauthor: x\n---\n" + "a" * 50, "01-intro.md", "docs", 10)

    assert entry is not None
    assert entry.title == "intro"
    assert entry.description == ""
    assert entry.content == "a" * 10 + "..."
    assert entry.tags == []


def test_build_entry_without_frontmatter() -> None:
    """Files without a frontmatter block have no entry."""
    assert build_entry("Just text.", "x.md", "blog", 100) is None


def test_unreadable_files_are_skipped(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """Binary files that fail to decode are logged and skipped."""
    bad = generator_config.content_path / "articles" / "01-guide.md"
    bad.write_bytes(b"\xff\xfe\x00broken")

    entries = build_search_entries(generator_config.content_path, content_index)

    assert "/article/guide" not in [entry.url for entry in entries]
    assert len(entries) == 6


def test_invalid_frontmatter_date_skips_only_that_file(
    generator_config: GeneratorConfig, write_file: typ.Callable[..., object]
) -> None:
    """An impossible publish date drops one file and keeps its siblings."""
    write_file(
        generator_config.content_path / "blog" / "2024-01-12-bad-date.md",
        "Broken date.",
        title="Bad Date",
        publishDate="2024-13-45",
    )
    index = ContentScanner(generator_config.content_path).scan()

    path = SearchIndexGenerator(generator_config).generate(index)

    urls = [entry.url for entry in decode_search_index(path.read_bytes())]
    assert "/blog/bad-date" not in urls
    assert "/blog/second-post" in urls
    assert "/blog/first-post" in urls
    assert len(urls) == 7


def test_configured_max_length_applies(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """The generator truncates content to the configured length."""
    generator_config.search_content_max_length = 5
    path = SearchIndexGenerator(generator_config).generate(content_index)

    entries = decode_search_index(path.read_bytes())
    assert entries[0].content == "Secon..."


def test_generate_honours_cancellation(
    generator_config: GeneratorConfig, content_index: ContentIndex
) -> None:
    """A set cancel event stops the build before files are read."""
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(BuildCancelledError):
        SearchIndexGenerator(generator_config).generate(content_index, cancel)
    assert not (generator_config.output_path / "search-index.json").exists()


def test_encoding_uses_camel_case_keys() -> None:
    """Entries serialise in field order with camelCase names."""
    entry = SearchIndexEntry(title="T", url="/blog/t", type="blog", tags=["a"])
    assert encode_search_index([entry]) == (
        b'[{"title":"T","description":"","content":"","url":"/blog/t",'
        b'"type":"blog","tags":["a"]}]'
    )
