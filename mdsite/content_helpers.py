"""Helpers shared by the artifact generators.

Generators must keep going when one content file is broken, so
:func:`extract_frontmatter` reports malformed metadata as absent rather than
raising. :func:`escape_xml` backs the ``xml_escape`` template filter.
"""

from __future__ import annotations

import logging
import typing as typ

from .frontmatter import FrontmatterData, FrontmatterError, parse_frontmatter
from .markdown_parser import extract_plain_text
from .slugs import get_slug_from_filename

logger = logging.getLogger(__name__)

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}


def extract_frontmatter(content: str) -> tuple[FrontmatterData | None, str]:
    """Return ``(frontmatter, body)`` without raising on bad metadata.

    Files without a frontmatter block, and files whose block fails to parse,
    yield ``(None, content)`` with the original text untouched.
    """
    try:
        frontmatter, body = parse_frontmatter(content)
    except FrontmatterError as exc:
        logger.debug("Ignoring malformed frontmatter: %s", exc)
        return None, content
    if frontmatter is None:
        return None, content
    return frontmatter, body


def get_slug_from_path(path: str) -> str:
    """Return the page slug for a content path relative to its section."""
    return get_slug_from_filename(path.replace("\\", "/"))


def escape_xml(text: typ.Any) -> str:
    """Escape ``text`` for XML, including apostrophes as ``&apos;``."""
    if text is None:
        return ""
    return "".join(_XML_ESCAPES.get(char, char) for char in str(text))


def truncate_text(text: str, max_length: int) -> str:
    """Return ``text`` cut to ``max_length`` characters plus ``...`` when longer."""
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}..."


__all__ = [
    "escape_xml",
    "extract_frontmatter",
    "extract_plain_text",
    "get_slug_from_path",
    "truncate_text",
]
