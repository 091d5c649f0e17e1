r"""Derive plain text, reading time, and headings from Markdown sources.

These helpers operate on raw Markdown without rendering it, so generators can
build search entries and page outlines cheaply. Heading ids use
:func:`mdsite.slugs.generate_slug`, the same algorithm the renderer applies to
heading ``id`` attributes.

Example
-------
>>> from mdsite.markdown_parser import extract_table_of_contents
>>> toc = extract_table_of_contents("# Intro\n## Setup\n## Usage")
>>> [child.id for child in toc[0].children]
['setup', 'usage']
"""

from __future__ import annotations

import dataclasses as dc
import math
import re

from .frontmatter import split_frontmatter
from .slugs import generate_slug

DEFAULT_WORDS_PER_MINUTE = 200

HEADING_PATTERN = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$")
FENCE_PATTERN = re.compile(r"^[ ]{0,3}(`{3,}|~{3,})")
HTML_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
COMPONENT_TAG_PATTERN = re.compile(r"\[\[/?\w+[^\]]*\]\]")
HTML_TAG_PATTERN = re.compile(r"</?[A-Za-z][^>]*>")
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
LINK_PATTERN = re.compile(r"\[([^\]]*)\]\([^)]*\)")
HEADING_MARKER_PATTERN = re.compile(r"^#{1,6}[ \t]*", re.MULTILINE)
HORIZONTAL_SPACE_PATTERN = re.compile(r"[ \t]+")
BLANK_LINES_PATTERN = re.compile(r"\n(?:[ \t]*\n)+")


@dc.dataclass(slots=True)
class TocItem:
    """Heading entry in a table of contents.

    Attributes
    ----------
    level : int
        Heading level from 1 to 6.
    id : str
        Anchor id matching the rendered heading.
    text : str
        Heading text as written.
    children : list[TocItem]
        Headings nested below this one.
    """

    level: int
    id: str
    text: str
    children: list[TocItem] = dc.field(default_factory=list)


def extract_plain_text(markdown: str) -> str:
    """Return ``markdown`` with formatting syntax removed.

    Frontmatter, HTML tags and comments, and ``[[Component]]`` directives are
    dropped. Heading markers, emphasis asterisks, and backticks are removed,
    links and images collapse to their text and alt text, runs of spaces become
    a single space, and blank-line runs become a single newline.
    """
    if not markdown or not markdown.strip():
        return ""
    _, text = split_frontmatter(markdown)
    text = HTML_COMMENT_PATTERN.sub("", text)
    text = COMPONENT_TAG_PATTERN.sub("", text)
    text = HTML_TAG_PATTERN.sub("", text)
    text = IMAGE_PATTERN.sub(r"\1", text)
    text = LINK_PATTERN.sub(r"\1", text)
    text = HEADING_MARKER_PATTERN.sub("", text)
    text = text.replace("**", "").replace("*", "").replace("`", "")
    text = HORIZONTAL_SPACE_PATTERN.sub(" ", text)
    text = BLANK_LINES_PATTERN.sub("\n", text)
    return text.strip()


def calculate_reading_time(
    markdown: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
) -> int:
    """Return the estimated reading time in whole minutes, never below one.

    Raises
    ------
    ValueError
        If ``words_per_minute`` is not positive.
    """
    if words_per_minute <= 0:
        msg = "words_per_minute must be positive."
        raise ValueError(msg)
    words = len(extract_plain_text(markdown).split())
    return max(1, math.ceil(words / words_per_minute))


def _iter_headings(markdown: str) -> list[tuple[int, str]]:
    """Return ``(level, text)`` for ATX headings outside fenced code."""
    headings: list[tuple[int, str]] = []
    fence: str | None = None
    for line in markdown.splitlines():
        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
            continue
        if fence is not None:
            continue
        match = HEADING_PATTERN.match(line)
        if match:
            headings.append((len(match.group(1)), match.group(2).strip()))
    return headings


def extract_table_of_contents(markdown: str) -> list[TocItem]:
    """Build a nested outline from the ATX headings in ``markdown``.

    Parameters
    ----------
    markdown : str
        Markdown body; frontmatter should already be removed.

    Returns
    -------
    list[TocItem]
        Top-level entries. Each heading nests under the closest preceding
        heading of a lower level; duplicate ids are kept as written.
    """
    roots: list[TocItem] = []
    stack: list[TocItem] = []
    for level, text in _iter_headings(markdown):
        item = TocItem(level=level, id=generate_slug(text), text=text)
        while stack and stack[-1].level >= level:
            stack.pop()
        if stack:
            stack[-1].children.append(item)
        else:
            roots.append(item)
        stack.append(item)
    return roots


__all__ = [
    "DEFAULT_WORDS_PER_MINUTE",
    "TocItem",
    "calculate_reading_time",
    "extract_plain_text",
    "extract_table_of_contents",
]
