"""Shared records produced by the artifact generators and search service."""

from __future__ import annotations

import dataclasses as dc

import msgspec


class SearchIndexEntry(msgspec.Struct, rename="camel", kw_only=True):
    """One page in ``search-index.json``.

    Attributes
    ----------
    title : str
        Frontmatter title, or the slug when the title is missing.
    description : str
        Summary, then description, then an empty string.
    content : str
        Plain text of the page, truncated for size.
    url : str
        Site-relative URL ``/{type}/{slug}``.
    type : str
        Route type of the page's section, for example ``"blog"``.
    tags : list[str]
        Frontmatter tags.
    """

    title: str
    description: str = ""
    content: str = ""
    url: str
    type: str
    tags: list[str] = msgspec.field(default_factory=list)


@dc.dataclass(slots=True)
class SearchResult:
    """A scored match returned by :class:`mdsite.search.SearchService`."""

    title: str
    description: str
    url: str
    content_type: str
    score: int
    matched_terms: list[str] = dc.field(default_factory=list)


__all__ = ["SearchIndexEntry", "SearchResult"]
