"""Render Markdown and generate the static artifacts served with the site."""

from .hosting import HostingConfigGenerator
from .models import SearchIndexEntry, SearchResult
from .pipeline import ContentGenerator, GeneratorSetupError
from .renderer import MarkdownService
from .rss_feed import RssFeedGenerator
from .search_index import SearchIndexGenerator, build_search_entries
from .sitemap import SitemapGenerator
from .tasklist import TaskListExtension

__all__ = [
    "ContentGenerator",
    "GeneratorSetupError",
    "HostingConfigGenerator",
    "MarkdownService",
    "RssFeedGenerator",
    "SearchIndexEntry",
    "SearchIndexGenerator",
    "SearchResult",
    "SitemapGenerator",
    "TaskListExtension",
    "build_search_entries",
]
