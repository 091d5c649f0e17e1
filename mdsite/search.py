"""Query a pre-built search index with simple term scoring.

:class:`SearchService` downloads ``search-index.json`` once, falling back to
building entries on the fly when the file is unavailable, and ranks entries
by where each query term appears.

Example
-------
>>> from mdsite.search import SearchService
>>> service = SearchService("https://example.com/search-index.json")
>>> results = service.search("blazor components")  # doctest: +SKIP
>>> results[0].url  # doctest: +SKIP
'/blog/blazor-components'
"""

from __future__ import annotations

import logging
import threading
import typing as typ
from http import HTTPStatus

import msgspec
import requests

from .generator.models import SearchIndexEntry, SearchResult
from .generator.search_index import decode_search_index, encode_search_index

logger = logging.getLogger(__name__)

TITLE_WEIGHT = 10
TAGS_WEIGHT = 5
DESCRIPTION_WEIGHT = 3
CONTENT_WEIGHT = 1
MAX_RESULTS = 20
EXCERPT_LENGTH = 200
EXCERPT_LEAD = 50

SearchIndexFallback = typ.Callable[[], list[SearchIndexEntry]]


def _truncate_with_ellipsis(text: str, max_length: int) -> str:
    if not text or len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


def score_entry(entry: SearchIndexEntry, terms: typ.Sequence[str]) -> int:
    """Return the relevance score of ``entry`` for lower-cased ``terms``."""
    title = entry.title.lower()
    tags = " ".join(entry.tags).lower()
    description = entry.description.lower()
    content = entry.content.lower()
    score = 0
    for term in terms:
        if term in title:
            score += TITLE_WEIGHT
        if term in tags:
            score += TAGS_WEIGHT
        if term in description:
            score += DESCRIPTION_WEIGHT
        if term in content:
            score += CONTENT_WEIGHT
    return score


def build_excerpt(description: str, content: str, terms: typ.Sequence[str]) -> str:
    """Return a short excerpt showing where ``terms`` matched.

    A description containing any term wins. Otherwise the excerpt is a window
    of content starting shortly before the first matching term, with ``...``
    marking cut ends. Without any match the description, or failing that the
    content, is truncated.
    """
    description_lower = description.lower()
    if any(term in description_lower for term in terms):
        return _truncate_with_ellipsis(description, EXCERPT_LENGTH)

    content_lower = content.lower()
    for term in terms:
        position = content_lower.find(term)
        if position < 0:
            continue
        start = max(0, position - EXCERPT_LEAD)
        end = min(len(content), start + EXCERPT_LENGTH)
        excerpt = content[start:end]
        if start > 0:
            excerpt = f"...{excerpt}"
        if end < len(content):
            excerpt = f"{excerpt}..."
        return excerpt

    if description:
        return _truncate_with_ellipsis(description, EXCERPT_LENGTH)
    return _truncate_with_ellipsis(content, EXCERPT_LENGTH)


class SearchService:
    """Lazily load a search index and answer ranked queries.

    The index is loaded at most once, even with concurrent callers; after
    that the cached entries are only read. Safe to share across threads when
    the provided session is thread-safe.
    """

    def __init__(
        self,
        index_url: str | None,
        *,
        session: requests.Session | None = None,
        fallback: SearchIndexFallback | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialise the service with an index location and fallback.

        Parameters
        ----------
        index_url : str or None
            URL of ``search-index.json``; ``None`` goes straight to the
            fallback.
        session : requests.Session, optional
            Session used for the download. Defaults to a new session.
        fallback : callable, optional
            Builds entries when the download fails or yields no entries,
            for example :func:`mdsite.generator.build_search_entries` bound
            to a local content tree.
        timeout : float, optional
            Request timeout in seconds. Defaults to ``10.0``.
        """
        self.index_url = index_url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._fallback = fallback
        self._entries: list[SearchIndexEntry] | None = None
        self._lock = threading.Lock()

    def get_search_index(self) -> list[SearchIndexEntry]:
        """Return the cached index, loading it on first use."""
        entries = self._entries
        if entries is not None:
            return entries
        with self._lock:
            if self._entries is None:
                self._entries = self._load()
            return self._entries

    def invalidate(self) -> None:
        """Drop the cached index so the next call reloads it."""
        with self._lock:
            self._entries = None

    def _load(self) -> list[SearchIndexEntry]:
        entries = self._fetch_prebuilt()
        if entries:
            logger.info("Loaded pre-built search index with %d entries", len(entries))
            return entries
        if self._fallback is None:
            return []
        logger.info("Pre-built search index not available, building locally")
        return list(self._fallback())

    def _fetch_prebuilt(self) -> list[SearchIndexEntry] | None:
        if not self.index_url:
            return None
        try:
            response = self._session.get(self.index_url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Failed to fetch search index %s: %s", self.index_url, exc)
            return None
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            logger.warning(
                "Search index %s returned status %d", self.index_url, response.status_code
            )
            return None
        try:
            return decode_search_index(response.content)
        except msgspec.DecodeError as exc:
            logger.warning("Search index %s is not valid: %s", self.index_url, exc)
            return None

    def search(self, query: str) -> list[SearchResult]:
        """Return up to twenty results ranked by descending score.

        Parameters
        ----------
        query : str
            Free text; split on whitespace into case-insensitive terms.

        Returns
        -------
        list[SearchResult]
            Matches with a positive score. Ties keep index order. A blank
            query yields an empty list.
        """
        terms = query.lower().split()
        if not terms:
            return []
        results: list[SearchResult] = []
        for entry in self.get_search_index():
            score = score_entry(entry, terms)
            if score <= 0:
                continue
            results.append(
                SearchResult(
                    title=entry.title,
                    description=build_excerpt(entry.description, entry.content, terms),
                    url=entry.url,
                    content_type=entry.type,
                    score=score,
                    matched_terms=list(terms),
                )
            )
        results.sort(key=lambda result: result.score, reverse=True)
        return results[:MAX_RESULTS]

    def export_index_as_json(self) -> str:
        """Return the loaded index as compact camelCase JSON."""
        return encode_search_index(self.get_search_index()).decode("utf-8")


__all__ = [
    "SearchService",
    "build_excerpt",
    "score_entry",
]
