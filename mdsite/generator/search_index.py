"""Build the pre-rendered ``search-index.json`` consumed by the site search.

Every routed section contributes one entry per content file that carries
frontmatter. Entries hold the page's plain text, truncated to keep the index
small, and are serialised as a single compact JSON line with camelCase keys.

Example
-------
>>> from pathlib import Path
>>> from mdsite.config import GeneratorConfig
>>> from mdsite.generator.search_index import SearchIndexGenerator
>>> from mdsite.scanner import ContentScanner
>>> config = GeneratorConfig(site_path=Path("."), output_path=Path("wwwroot"))
>>> index = ContentScanner(config.content_path).scan()  # doctest: +SKIP
>>> SearchIndexGenerator(config).generate(index)  # doctest: +SKIP
PosixPath('wwwroot/search-index.json')
"""

from __future__ import annotations

import logging
import typing as typ

import msgspec

from mdsite._constants import DEFAULT_SEARCH_CONTENT_MAX_LENGTH, SEARCH_INDEX_FILENAME
from mdsite.content_helpers import (
    extract_frontmatter,
    extract_plain_text,
    get_slug_from_path,
    truncate_text,
)

from .artifacts import read_content, write_artifact
from .models import SearchIndexEntry

if typ.TYPE_CHECKING:
    import threading
    from pathlib import Path

    from mdsite.config import GeneratorConfig
    from mdsite.scanner import ContentIndex

logger = logging.getLogger(__name__)

_ENCODER = msgspec.json.Encoder()
_DECODER = msgspec.json.Decoder(list[SearchIndexEntry])


def encode_search_index(entries: typ.Sequence[SearchIndexEntry]) -> bytes:
    """Serialise ``entries`` as compact camelCase JSON."""
    return _ENCODER.encode(list(entries))


def decode_search_index(payload: bytes | str) -> list[SearchIndexEntry]:
    """Parse a ``search-index.json`` payload.

    Raises
    ------
    msgspec.DecodeError
        If the payload is not a JSON list of entries.
    """
    return _DECODER.decode(payload)


def build_entry(
    markdown: str, relative_path: str, content_type: str, max_length: int
) -> SearchIndexEntry | None:
    """Return the search entry for one content file, or ``None`` without frontmatter."""
    frontmatter, body = extract_frontmatter(markdown)
    if frontmatter is None:
        return None
    slug = get_slug_from_path(relative_path)
    return SearchIndexEntry(
        title=frontmatter.title or slug,
        description=frontmatter.summary or frontmatter.description or "",
        content=truncate_text(extract_plain_text(body), max_length),
        url=f"/{content_type}/{slug}",
        type=content_type,
        tags=list(frontmatter.tags or []),
    )


def build_search_entries(
    content_path: Path,
    index: ContentIndex,
    *,
    max_length: int = DEFAULT_SEARCH_CONTENT_MAX_LENGTH,
    cancel_event: threading.Event | None = None,
) -> list[SearchIndexEntry]:
    """Return search entries for every routed section of ``index``.

    Files that cannot be read or have no frontmatter are skipped; read
    failures are logged.

    Raises
    ------
    BuildCancelledError
        If ``cancel_event`` is set before a file is read.
    """
    entries: list[SearchIndexEntry] = []
    for descriptor, files in index.iter_sections():
        if not descriptor.routed:
            continue
        section_path = content_path / descriptor.folder
        for relative_path in files:
            path = section_path / relative_path
            if not path.is_file():
                continue
            try:
                markdown = read_content(path, cancel_event)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Failed to parse %s: %s", path, exc)
                continue
            entry = build_entry(
                markdown, relative_path, descriptor.route_type, max_length
            )
            if entry is not None:
                entries.append(entry)
    return entries


class SearchIndexGenerator:
    """Write ``search-index.json`` for a scanned content tree."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config

    def generate(
        self, index: ContentIndex, cancel_event: threading.Event | None = None
    ) -> Path:
        """Build the index and write it to the output directory.

        Returns
        -------
        Path
            Location of the written ``search-index.json``.
        """
        entries = build_search_entries(
            self.config.content_path,
            index,
            max_length=self.config.search_content_max_length,
            cancel_event=cancel_event,
        )
        payload = encode_search_index(entries)
        path = write_artifact(
            self.config.output_path / SEARCH_INDEX_FILENAME,
            payload.decode("utf-8"),
            cancel_event,
        )
        logger.info(
            "Created %s (%d entries, %.1f KB)", path, len(entries), len(payload) / 1024
        )
        return path


__all__ = [
    "SearchIndexGenerator",
    "build_entry",
    "build_search_entries",
    "decode_search_index",
    "encode_search_index",
]
