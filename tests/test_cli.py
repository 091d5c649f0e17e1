"""Tests for the ``mdsite`` command-line interface."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from mdsite import cli
from mdsite.logging_config import setup_logging

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture


@pytest.fixture(autouse=True)
def quiet_logging(mocker: MockerFixture) -> typ.Any:
    """Keep commands from reconfiguring the root logger during tests."""
    return mocker.patch.object(cli, "setup_logging")


def test_generate_prints_written_paths(
    site_tree: Path, capsys: pytest.CaptureFixture[str], quiet_logging: typ.Any
) -> None:
    """Every written artifact is reported on stdout."""
    cli.generate(site_path=site_tree, site_url="https://example.com", verbose=True)

    lines = capsys.readouterr().out.splitlines()
    assert all(line.startswith("wrote ") for line in lines), lines
    names = [line.rsplit("/", 1)[-1] for line in lines]
    assert names == [
        "search-index.json",
        "sitemap.xml",
        "robots.txt",
        "feed.xml",
        "_headers",
        "_redirects",
    ]
    quiet_logging.assert_called_once_with(True)  # noqa: FBT003


def test_generate_skip_flags_and_provider(
    site_tree: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Skip switches and the hosting provider reach the pipeline."""
    output = tmp_path / "public"
    (output / "content").mkdir(parents=True)
    cli.generate(
        site_path=site_tree,
        output_path=output,
        skip_sitemap=True,
        skip_rss=True,
        hosting_provider="vercel",
    )

    out = capsys.readouterr().out
    assert "search-index.json" in out
    assert "vercel.json" in out
    assert "sitemap.xml" not in out
    assert (output / "vercel.json").is_file()


def test_generate_missing_site_exits_with_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A missing site path exits with status 1 and an error message."""
    with pytest.raises(SystemExit) as excinfo:
        cli.generate(site_path=tmp_path / "missing")

    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("error: Site path")


def test_scan_lists_sections(
    site_tree: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Sections are printed with counts and indented file names."""
    cli.scan(content_path=site_tree / "wwwroot" / "content")

    lines = capsys.readouterr().out.splitlines()
    assert lines[:4] == [
        "blog: 3",
        "  2024-01-15-second-post.md",
        "  2024-01-10-draft.md",
        "  2024-01-01-first-post.md",
    ]
    assert "solutions: 1" in lines
    assert "  01-tool/index.md" in lines


def test_search_reads_local_index(
    site_tree: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A local index file is searched without any network access."""
    cli.generate(site_path=site_tree, site_url="https://example.com")
    capsys.readouterr()

    cli.search("blazor", index=str(site_tree / "wwwroot" / "search-index.json"))

    assert capsys.readouterr().out.splitlines() == ["1\t/blog/second-post\tSecond Post"]


def test_search_builds_from_content_when_index_missing(
    site_tree: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Without an index file the content tree is scanned instead."""
    cli.search(
        "guide",
        index=str(tmp_path / "absent.json"),
        content_path=site_tree / "wwwroot" / "content",
    )

    assert capsys.readouterr().out.splitlines() == ["11\t/article/guide\tGuide"]


def test_search_fetches_remote_index(
    mocker: MockerFixture, capsys: pytest.CaptureFixture[str]
) -> None:
    """HTTP index locations are downloaded by the search service."""
    service = mocker.patch.object(cli, "SearchService")
    service.return_value.search.return_value = []

    cli.search("term", index="https://example.com/search-index.json")

    args, kwargs = service.call_args
    assert args == ("https://example.com/search-index.json",)
    assert callable(kwargs["fallback"])
    assert capsys.readouterr().out == ""


def test_setup_logging_levels() -> None:
    """Verbose runs log at INFO; quiet runs only show warnings."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        setup_logging(verbose=True)
        assert root.level == logging.INFO
        setup_logging()
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
