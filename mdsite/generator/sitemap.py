"""Write ``sitemap.xml`` and ``robots.txt`` for the published site."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from mdsite._constants import ROBOTS_FILENAME, SITEMAP_FILENAME
from mdsite.content_helpers import get_slug_from_path

from .artifacts import (
    build_template_environment,
    file_modified_at,
    normalize_site_url,
    utc_now,
    write_artifact,
)

if typ.TYPE_CHECKING:
    import threading
    from pathlib import Path

    from mdsite.config import GeneratorConfig
    from mdsite.scanner import ContentIndex

logger = logging.getLogger(__name__)

LASTMOD_FORMAT = "%Y-%m-%d"
STATIC_ROUTES: tuple[tuple[str, float], ...] = (
    ("", 1.0),
    ("/blog", 0.8),
    ("/contact", 0.5),
    ("/search", 0.3),
)


@dc.dataclass(slots=True)
class SitemapEntry:
    """One ``<url>`` element of the sitemap."""

    loc: str
    lastmod: str
    priority: float


class SitemapGenerator:
    """Render the sitemap and robots file for an absolute site URL.

    Parameters
    ----------
    config : GeneratorConfig
        Paths for content input and artifact output.
    site_url : str
        Absolute site URL; trailing slashes are removed so generated
        locations never contain ``//`` before a path segment.
    templates_dir : Path, optional
        Directory containing ``sitemap.xml`` and ``robots.txt`` templates.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        site_url: str,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        self.config = config
        self.site_url = normalize_site_url(site_url)
        self.env = build_template_environment(templates_dir)

    def collect_entries(self, index: ContentIndex) -> list[SitemapEntry]:
        """Return static routes followed by one entry per routed content file."""
        today = utc_now().strftime(LASTMOD_FORMAT)
        entries = [
            SitemapEntry(loc=f"{self.site_url}{route}", lastmod=today, priority=priority)
            for route, priority in STATIC_ROUTES
        ]
        for descriptor, files in index.iter_sections():
            if not descriptor.routed:
                continue
            section_path = self.config.content_path / descriptor.folder
            for relative_path in files:
                slug = get_slug_from_path(relative_path)
                modified = file_modified_at(section_path / relative_path)
                entries.append(
                    SitemapEntry(
                        loc=f"{self.site_url}/{descriptor.route_type}/{slug}",
                        lastmod=modified.strftime(LASTMOD_FORMAT) if modified else today,
                        priority=descriptor.priority,
                    )
                )
        return entries

    def render_sitemap(self, entries: typ.Sequence[SitemapEntry]) -> str:
        """Render the sitemap XML for ``entries``."""
        return self.env.get_template(SITEMAP_FILENAME).render(entries=entries)

    def render_robots(self) -> str:
        """Render ``robots.txt`` pointing crawlers at the sitemap."""
        return self.env.get_template(ROBOTS_FILENAME).render(site_url=self.site_url)

    def generate(
        self, index: ContentIndex, cancel_event: threading.Event | None = None
    ) -> list[Path]:
        """Write ``sitemap.xml`` and ``robots.txt``.

        Returns
        -------
        list[Path]
            The sitemap path followed by the robots path.
        """
        entries = self.collect_entries(index)
        sitemap_path = write_artifact(
            self.config.output_path / SITEMAP_FILENAME,
            self.render_sitemap(entries),
            cancel_event,
        )
        logger.info("Created %s (%d URLs)", sitemap_path, len(entries))
        robots_path = write_artifact(
            self.config.output_path / ROBOTS_FILENAME,
            self.render_robots(),
            cancel_event,
        )
        logger.info("Created %s", robots_path)
        return [sitemap_path, robots_path]


__all__ = ["SitemapEntry", "SitemapGenerator"]
