"""High-level orchestration for a full content build.

This module coordinates one build of the site's static artifacts: it checks
the site layout, loads ``site.config.json``, scans the content tree, and runs
the search index, sitemap, RSS and hosting generators in sequence. It exposes
:class:`ContentGenerator`, which consumes a
:class:`~mdsite.config.GeneratorConfig` and returns the paths it wrote.

Example
-------
>>> from pathlib import Path
>>> from mdsite.config import GeneratorConfig
>>> from mdsite.generator import ContentGenerator
>>> config = GeneratorConfig(
...     site_path=Path("site"),
...     output_path=Path("site/wwwroot"),
...     site_url="https://example.com",
... )
>>> ContentGenerator(config).run()  # doctest: +SKIP
[PosixPath('site/wwwroot/search-index.json'), ...]
"""

from __future__ import annotations

import logging
import typing as typ

from mdsite.config import SiteConfig, try_load_site_config
from mdsite.scanner import ContentIndex, ContentScanner, check_cancelled

from .hosting import HostingConfigGenerator
from .rss_feed import RssFeedGenerator
from .search_index import SearchIndexGenerator
from .sitemap import SitemapGenerator

if typ.TYPE_CHECKING:
    import threading
    from pathlib import Path

    from mdsite.config import GeneratorConfig

logger = logging.getLogger(__name__)

ABSOLUTE_URL_PREFIXES = ("http://", "https://")


class GeneratorSetupError(RuntimeError):
    """Raised when the site layout prevents a build from starting."""


class ContentGenerator:
    """Run every enabled artifact generator for one site."""

    def __init__(
        self,
        config: GeneratorConfig,
        *,
        templates_dir: Path | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        """Initialize the build with configuration and cancellation hook.

        Parameters
        ----------
        config : GeneratorConfig
            Site paths, site URL and generator switches.
        templates_dir : Path, optional
            Directory containing artifact templates; defaults to the package
            templates.
        cancel_event : threading.Event, optional
            When set, the build stops before the next file read or write.
        """
        self.config = config
        self.templates_dir = templates_dir
        self.cancel_event = cancel_event
        self.site_config: SiteConfig | None = None

    def run(self) -> list[Path]:
        """Build every enabled artifact and return the written paths.

        Returns
        -------
        list[Path]
            Paths in generation order: search index, sitemap and robots,
            feed, hosting files.

        Raises
        ------
        GeneratorSetupError
            If the site path does not exist.
        BuildCancelledError
            If the cancel event is set during the build.
        """
        if not self.config.site_path.is_dir():
            msg = f"Site path '{self.config.site_path}' does not exist."
            raise GeneratorSetupError(msg)
        self.config.output_path.mkdir(parents=True, exist_ok=True)

        self.site_config = self._load_site_config()
        site_url = self.resolve_site_url()
        index = self.scan()

        written: list[Path] = []
        if self.config.generate_search_index:
            written.append(self._generate_search_index(index))
        if self.config.generate_sitemap:
            written.extend(self._generate_sitemap(index, site_url))
        if self.config.generate_rss_feed:
            written.extend(self._generate_rss_feed(index, site_url))
        written.extend(
            HostingConfigGenerator(
                self.config, templates_dir=self.templates_dir
            ).generate(self.cancel_event)
        )
        return written

    def _load_site_config(self) -> SiteConfig | None:
        path = self.config.site_config_path
        if not path.exists():
            logger.warning("site.config.json not found at %s", path)
            return None
        return try_load_site_config(path)

    def resolve_site_url(self) -> str | None:
        """Return the absolute site URL from options, then ``baseUrl``."""
        candidates = [self.config.site_url]
        if self.site_config is not None:
            candidates.append(self.site_config.base_url)
        for candidate in candidates:
            if candidate and candidate.strip().lower().startswith(ABSOLUTE_URL_PREFIXES):
                return candidate.strip()
        return None

    def scan(self) -> ContentIndex:
        """Scan the content tree using the loaded site configuration."""
        check_cancelled(self.cancel_event)
        scanner = ContentScanner(
            self.config.content_path,
            self.config.site_config_path,
            site_config=self.site_config,
        )
        index = scanner.scan(self.cancel_event)
        logger.info(
            "Scanned %d blog posts, %d projects, %d articles, %d docs, %d custom sections",
            len(index.blog),
            len(index.projects),
            len(index.articles),
            len(index.docs),
            len(index.sections),
        )
        return index

    def _generate_search_index(self, index: ContentIndex) -> Path:
        return SearchIndexGenerator(self.config).generate(index, self.cancel_event)

    def _generate_sitemap(self, index: ContentIndex, site_url: str | None) -> list[Path]:
        if site_url is None:
            logger.warning("Skipping sitemap: no absolute site URL configured")
            return []
        generator = SitemapGenerator(
            self.config, site_url, templates_dir=self.templates_dir
        )
        return generator.generate(index, self.cancel_event)

    def _generate_rss_feed(self, index: ContentIndex, site_url: str | None) -> list[Path]:
        if site_url is None:
            logger.warning("Skipping RSS feed: no absolute site URL configured")
            return []
        site_name = (
            self.site_config.site_name if self.site_config else ""
        ) or self.config.site_path.resolve().name
        generator = RssFeedGenerator(
            self.config, site_url, site_name, templates_dir=self.templates_dir
        )
        return [generator.generate(index, self.cancel_event)]


__all__ = ["ContentGenerator", "GeneratorSetupError"]
