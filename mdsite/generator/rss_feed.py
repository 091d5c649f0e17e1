"""Write the RSS 2.0 ``feed.xml`` for the newest blog posts."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from mdsite._constants import BLOG_FOLDER, FEED_FILENAME, MAX_FEED_ITEMS
from mdsite.content_helpers import extract_frontmatter, get_slug_from_path

from .artifacts import (
    build_template_environment,
    file_modified_at,
    format_rfc1123,
    normalize_site_url,
    read_content,
    utc_now,
    write_artifact,
)

if typ.TYPE_CHECKING:
    import threading
    from pathlib import Path

    from mdsite.config import GeneratorConfig
    from mdsite.scanner import ContentIndex

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class RssItem:
    """One ``<item>`` of the feed; ``link`` doubles as the permalink guid."""

    title: str
    link: str
    description: str
    pub_date: str
    author: str = ""


class RssFeedGenerator:
    """Render ``feed.xml`` from the blog section.

    Only the first :data:`~mdsite._constants.MAX_FEED_ITEMS` blog files are
    considered; the scanner orders them newest first. Files without
    frontmatter are skipped, so the feed may hold fewer items.

    Parameters
    ----------
    config : GeneratorConfig
        Paths for content input and artifact output.
    site_url : str
        Absolute site URL; trailing slashes are removed.
    site_name : str
        Channel title.
    site_description : str, optional
        Channel description; defaults to ``"Latest posts from {site_name}"``.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        site_url: str,
        site_name: str,
        site_description: str | None = None,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        self.config = config
        self.site_url = normalize_site_url(site_url)
        self.site_name = site_name
        self.site_description = site_description or f"Latest posts from {site_name}"
        self.env = build_template_environment(templates_dir)

    def _parse_post(
        self, path: Path, relative_path: str, cancel_event: threading.Event | None
    ) -> RssItem | None:
        if not path.is_file():
            return None
        try:
            markdown = read_content(path, cancel_event)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to parse blog post %s: %s", path, exc)
            return None
        frontmatter, _ = extract_frontmatter(markdown)
        if frontmatter is None:
            return None

        slug = get_slug_from_path(relative_path)
        published = frontmatter.publish_date or file_modified_at(path) or utc_now()
        link = f"{self.site_url}/blog/{slug}"
        return RssItem(
            title=frontmatter.title or slug,
            link=link,
            description=frontmatter.summary or frontmatter.description or "",
            pub_date=format_rfc1123(published),
            author=frontmatter.author or "",
        )

    def collect_items(
        self, index: ContentIndex, cancel_event: threading.Event | None = None
    ) -> list[RssItem]:
        """Return feed items for the newest blog posts."""
        blog_path = self.config.content_path / BLOG_FOLDER
        items: list[RssItem] = []
        for relative_path in index.blog[:MAX_FEED_ITEMS]:
            item = self._parse_post(blog_path / relative_path, relative_path, cancel_event)
            if item is not None:
                items.append(item)
        return items

    def render(self, items: typ.Sequence[RssItem]) -> str:
        """Render the feed XML for ``items``."""
        return self.env.get_template(FEED_FILENAME).render(
            site_name=self.site_name,
            site_url=self.site_url,
            site_description=self.site_description,
            last_build_date=format_rfc1123(utc_now()),
            items=items,
        )

    def generate(
        self, index: ContentIndex, cancel_event: threading.Event | None = None
    ) -> Path:
        """Write ``feed.xml`` and return its path."""
        items = self.collect_items(index, cancel_event)
        path = write_artifact(
            self.config.output_path / FEED_FILENAME, self.render(items), cancel_event
        )
        logger.info("Created %s (%d items)", path, len(items))
        return path


__all__ = ["RssFeedGenerator", "RssItem"]
