"""Cyclopts CLI entrypoint for building and querying mdsite artifacts.

The ``mdsite`` console script defined here scans a site's content tree and
writes the static artifacts served alongside it (``search-index.json``,
``sitemap.xml``, ``robots.txt``, ``feed.xml`` and hosting configs). Typical
usage involves running ``mdsite generate --site-path site`` locally or in CI
after editing content, ``mdsite scan`` to inspect what the scanner sees, and
``mdsite search`` to try queries against a built index.

Examples
--------
Generate every artifact for a site:

>>> from mdsite.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory for a Netlify deploy:

>>> from mdsite.cli import app
>>> app(
...     ["generate", "--site-path", "site", "--hosting-provider", "netlify"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_SEARCH_CONTENT_MAX_LENGTH, SEARCH_INDEX_FILENAME
from .config import GeneratorConfig
from .generator import ContentGenerator, GeneratorSetupError, SearchIndexEntry
from .generator.search_index import build_search_entries, decode_search_index
from .logging_config import setup_logging
from .scanner import ContentScanner
from .search import SearchService

DEFAULT_SITE_PATH = Path()
DEFAULT_OUTPUT_FOLDER = "wwwroot"

app = App(name="mdsite", config=cyclopts.config.Env("MDSITE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_output(site_path: Path, output_path: Path | None) -> Path:
    return output_path or site_path / DEFAULT_OUTPUT_FOLDER


@app.command(help="Generate search index, sitemap, RSS feed and hosting files.")
def generate(
    *,
    site_path: typ.Annotated[
        Path, Parameter(help="Path to the site project", env_var="MDSITE_SITE_PATH")
    ] = DEFAULT_SITE_PATH,
    output_path: typ.Annotated[
        Path | None,
        Parameter(
            help="Output folder (defaults to <site>/wwwroot)",
            env_var="MDSITE_OUTPUT_PATH",
        ),
    ] = None,
    site_url: typ.Annotated[
        str | None,
        Parameter(
            help="Absolute site URL (defaults to baseUrl in site.config.json)",
            env_var="MDSITE_SITE_URL",
        ),
    ] = None,
    skip_sitemap: typ.Annotated[
        bool, Parameter(help="Skip sitemap.xml and robots.txt")
    ] = False,
    skip_search: typ.Annotated[bool, Parameter(help="Skip search-index.json")] = False,
    skip_rss: typ.Annotated[bool, Parameter(help="Skip feed.xml")] = False,
    hosting_provider: typ.Annotated[
        str,
        Parameter(
            help="cloudflare, netlify, vercel, github or none",
            env_var="MDSITE_HOSTING_PROVIDER",
        ),
    ] = "cloudflare",
    search_content_max_length: typ.Annotated[
        int, Parameter(help="Characters of page text kept per search entry")
    ] = DEFAULT_SEARCH_CONTENT_MAX_LENGTH,
    verbose: typ.Annotated[bool, Parameter(help="Log progress to stderr")] = False,
) -> None:
    """Build every enabled artifact for the site at ``site_path``.

    Parameters
    ----------
    site_path : Path, optional
        Site project directory (overridable via ``MDSITE_SITE_PATH``).
    output_path : Path or None, optional
        Artifact directory; content is read from its ``content`` folder.
        Defaults to ``<site_path>/wwwroot``.
    site_url : str or None, optional
        Absolute URL used in the sitemap and feed. Both are skipped when no
        absolute URL is available here or in ``site.config.json``.
    hosting_provider : str, optional
        Provider whose config files are written; ``none`` writes nothing.

    Raises
    ------
    SystemExit
        With status 1 when the site path does not exist.
    """
    setup_logging(verbose)
    config = GeneratorConfig(
        site_path=site_path,
        output_path=_resolve_output(site_path, output_path),
        site_url=site_url,
        generate_sitemap=not skip_sitemap,
        generate_search_index=not skip_search,
        generate_rss_feed=not skip_rss,
        hosting_provider=hosting_provider,
        search_content_max_length=search_content_max_length,
    )
    try:
        written = ContentGenerator(config).run()
    except GeneratorSetupError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="List the content files found in each section.")
def scan(
    *,
    content_path: typ.Annotated[
        Path,
        Parameter(help="Content folder to scan", env_var="MDSITE_CONTENT_PATH"),
    ] = Path(DEFAULT_OUTPUT_FOLDER) / "content",
    site_config: typ.Annotated[
        Path | None,
        Parameter(help="Path to site.config.json (defaults next to the content)"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log progress to stderr")] = False,
) -> None:
    """Print each section followed by its files, one per indented line."""
    setup_logging(verbose)
    index = ContentScanner(content_path, site_config).scan()
    for descriptor, files in index.iter_sections():
        print(f"{descriptor.folder}: {len(files)}")
        for name in files:
            print(f"  {name}")


@app.command(help="Search a built search-index.json.")
def search(
    query: str,
    *,
    index: typ.Annotated[
        str,
        Parameter(
            help="URL or local path of search-index.json",
            env_var="MDSITE_SEARCH_INDEX",
        ),
    ] = str(Path(DEFAULT_OUTPUT_FOLDER) / SEARCH_INDEX_FILENAME),
    content_path: typ.Annotated[
        Path | None,
        Parameter(help="Content folder used when the index is unavailable"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Log progress to stderr")] = False,
) -> None:
    """Print ranked results as ``score<TAB>url<TAB>title`` lines.

    Parameters
    ----------
    query : str
        Whitespace-separated search terms.
    index : str, optional
        ``http(s)://`` URL or local file holding the pre-built index.
    content_path : Path or None, optional
        Content folder scanned to build entries when the index cannot be
        loaded.
    """
    setup_logging(verbose)
    index_url: str | None = index
    local_index: Path | None = None
    if not index.lower().startswith(("http://", "https://")):
        index_url = None
        local_index = Path(index)

    def _fallback() -> list[SearchIndexEntry]:
        if local_index is not None and local_index.is_file():
            return decode_search_index(local_index.read_bytes())
        if content_path is not None:
            content_index = ContentScanner(content_path).scan()
            return build_search_entries(content_path, content_index)
        return []

    service = SearchService(index_url, fallback=_fallback)
    for result in service.search(query):
        print(f"{result.score}\t{result.url}\t{result.title}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``mdsite`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
