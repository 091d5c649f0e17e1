"""Typed dataclasses describing site and generator configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from mdsite._constants import (
    DEFAULT_SEARCH_CONTENT_MAX_LENGTH,
    SITE_CONFIG_FILENAME,
)


class SiteConfigError(ValueError):
    """Raised when ``site.config.json`` is invalid or incomplete."""


@dc.dataclass(slots=True)
class SearchConfig:
    """Search box settings exposed to the site UI."""

    enabled: bool = True
    placeholder: str = "Search..."


@dc.dataclass(slots=True)
class SeoConfig:
    """Defaults for social cards and meta tags."""

    default_image: str = "/images/social-card.png"
    twitter_handle: str | None = None
    facebook_app_id: str | None = None


@dc.dataclass(slots=True)
class ContentSectionConfig:
    """A custom content section such as ``solutions`` or ``products``.

    Attributes
    ----------
    folder : str
        Folder name below the content root.
    route : str
        URL route prefix used by the site UI.
    menu_title : str
        Label shown in navigation.
    type : str
        ``"article"`` (pages with a table of contents) or ``"doc"`` (pages
        with previous/next navigation).
    """

    folder: str = ""
    route: str = ""
    menu_title: str = ""
    type: str = "article"


@dc.dataclass(slots=True)
class SiteConfig:
    """Site-wide settings read from ``site.config.json``."""

    site_name: str = ""
    base_url: str = ""
    logo_light: str = "/images/logo-light.svg"
    logo_dark: str = "/images/logo-dark.svg"
    default_theme: str = "dark"
    search: SearchConfig = dc.field(default_factory=SearchConfig)
    seo: SeoConfig = dc.field(default_factory=SeoConfig)
    content_sections: list[ContentSectionConfig] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class GeneratorConfig:
    """Inputs and switches for one generator run.

    Attributes
    ----------
    site_path : Path
        Site project directory; must exist for a build to start.
    output_path : Path
        Directory receiving artifacts; content is read from its ``content``
        folder.
    site_url : str or None
        Absolute site URL; falls back to ``baseUrl`` from the site config.
    hosting_provider : str
        ``cloudflare``, ``netlify``, ``vercel``, ``github`` or anything else
        to skip hosting files.
    search_content_max_length : int
        Characters of plain text kept per search entry before truncation.
    """

    site_path: Path
    output_path: Path
    site_url: str | None = None
    generate_sitemap: bool = True
    generate_search_index: bool = True
    generate_rss_feed: bool = True
    hosting_provider: str = "cloudflare"
    search_content_max_length: int = DEFAULT_SEARCH_CONTENT_MAX_LENGTH

    @property
    def content_path(self) -> Path:
        """Return the content folder inside the output directory."""
        return self.output_path / "content"

    @property
    def site_config_path(self) -> Path:
        """Return the ``site.config.json`` path inside the output directory."""
        return self.output_path / SITE_CONFIG_FILENAME


@dc.dataclass(frozen=True, slots=True)
class SectionDescriptor:
    """Describe how one content section is scanned, indexed and routed.

    Attributes
    ----------
    folder : str
        Folder name below the content root.
    route_type : str
        First URL segment for pages in the section (``/{route_type}/{slug}``).
    descending : bool
        Sort file names in reverse order, newest first for dated posts.
    priority : float
        Sitemap priority for the section's pages.
    layout : str
        ``"flat"`` for a folder of Markdown files or ``"projects"`` for
        top-level files plus folders holding an ``index.md``.
    routed : bool
        Whether the section has public pages that belong in the search index
        and sitemap.
    """

    folder: str
    route_type: str
    descending: bool = False
    priority: float = 0.6
    layout: typ.Literal["flat", "projects"] = "flat"
    routed: bool = True


__all__ = [
    "ContentSectionConfig",
    "GeneratorConfig",
    "SearchConfig",
    "SectionDescriptor",
    "SeoConfig",
    "SiteConfig",
    "SiteConfigError",
]
