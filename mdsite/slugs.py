r"""Derive URL-safe identifiers from heading text and content filenames.

Heading slugs follow the same algorithm the renderer uses for heading ``id``
attributes, so table-of-contents anchors and rendered headings always agree.
Filename helpers understand the content conventions used by the scanner:
``NN-`` order prefixes, ``YYYY-MM-DD-`` date prefixes, and folders holding an
``index.md`` file.

Example
-------
>>> from mdsite.slugs import generate_slug, get_slug_from_filename
>>> generate_slug("Blazor vs. Native")
'blazor-vs.native'
>>> get_slug_from_filename("2024-01-15-my-post.md")
'my-post'
>>> get_slug_from_filename("01-biography/index.md")
'biography'
"""

from __future__ import annotations

import re

WHITESPACE_PATTERN = re.compile(r"[\s_]+")
INVALID_CHARS_PATTERN = re.compile(r"[^a-z0-9\-.]")
MULTIPLE_DASHES_PATTERN = re.compile(r"-+")
INDEX_FILENAMES = frozenset({"index.md", "index.mdx"})
DIGITS = frozenset("0123456789")


def generate_slug(text: str | None) -> str:
    """Return the URL-safe slug for ``text``.

    Parameters
    ----------
    text : str or None
        Heading or title text. ``None`` and whitespace-only strings yield an
        empty slug.

    Returns
    -------
    str
        Lower-case slug containing only ``a-z``, ``0-9``, ``-`` and ``.``,
        with no hyphen next to a dot and no leading or trailing hyphen.
    """
    if text is None or not text.strip():
        return ""
    slug = text.lower()
    slug = WHITESPACE_PATTERN.sub("-", slug)
    slug = INVALID_CHARS_PATTERN.sub("", slug)
    slug = MULTIPLE_DASHES_PATTERN.sub("-", slug)
    slug = slug.replace("-.", ".").replace(".-", ".")
    return slug.strip("-")


def _base_name(filename: str) -> str:
    """Return the extension-less name that identifies a content file."""
    name = filename
    if "/" in name or "\\" in name:
        parts = re.split(r"[/\\]", name)
        if len(parts) >= 2 and parts[-1].lower() in INDEX_FILENAMES:
            name = parts[-2]
        else:
            name = parts[-1]

    lowered = name.lower()
    if lowered.endswith(".mdx"):
        return name[:-4]
    if lowered.endswith(".md"):
        return name[:-3]
    return name


def _has_order_prefix(name: str) -> bool:
    return len(name) > 3 and name[0] in DIGITS and name[1] in DIGITS and name[2] == "-"


def _has_date_prefix(name: str) -> bool:
    # Only the first character is checked for a digit; the separators carry
    # the rest of the recognition.
    return (
        len(name) > 11
        and name[0] in DIGITS
        and name[4] == "-"
        and name[7] == "-"
        and name[10] == "-"
    )


def get_slug_from_filename(filename: str) -> str:
    """Return the page slug for a content filename or relative path.

    Parameters
    ----------
    filename : str
        Filename such as ``"2024-01-15-my-post.md"``, ``"01-intro.md"`` or a
        folder-based path like ``"01-biography/index.md"``.

    Returns
    -------
    str
        The name with extension removed and either a date prefix or an order
        prefix stripped. The date prefix is checked first and only one of the
        two is removed.
    """
    name = _base_name(filename)
    if _has_date_prefix(name):
        return name[11:]
    if _has_order_prefix(name):
        return name[3:]
    return name


def get_order_and_slug_from_filename(filename: str) -> tuple[int, str]:
    """Return ``(order, slug)`` for a filename carrying an ``NN-`` prefix.

    Date-prefixed names are not treated as ordered: ``"2024-01-15-post.md"``
    yields ``(0, "2024-01-15-post")``.
    """
    name = _base_name(filename)
    if _has_order_prefix(name):
        return int(name[:2]), name[3:]
    return 0, name


__all__ = [
    "generate_slug",
    "get_order_and_slug_from_filename",
    "get_slug_from_filename",
]
