"""Render Markdown content into HTML and derived page views."""

from __future__ import annotations

import re
import typing as typ

from markdown import Markdown

from mdsite.frontmatter import FrontmatterData, parse_frontmatter
from mdsite.markdown_parser import (
    DEFAULT_WORDS_PER_MINUTE,
    TocItem,
    calculate_reading_time,
    extract_plain_text,
    extract_table_of_contents,
)
from mdsite.slugs import generate_slug

from .tasklist import TaskListExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)


def _slugify_heading(value: str, separator: str) -> str:  # noqa: ARG001
    """Adapt :func:`generate_slug` to the ``toc`` extension's slugify hook."""
    return generate_slug(value)


class MarkdownService:
    """Render Markdown with the extensions used across the site.

    Each call builds a fresh ``markdown.Markdown`` instance, so one service
    can be shared between threads.
    """

    def __init__(self, extra_extensions: typ.Sequence[Extension] = ()) -> None:
        """Initialize the service with optional additional extensions.

        Parameters
        ----------
        extra_extensions : Sequence[Extension], optional
            Extensions appended after the built-in set, for example link
            rewriters supplied by a theme.
        """
        self._extra_extensions = tuple(extra_extensions)

    def _build_markdown(self) -> Markdown:
        extensions: list[Extension | str] = [
            "fenced_code",
            "tables",
            "sane_lists",
            "toc",
            TaskListExtension(),
            *self._extra_extensions,
        ]
        return Markdown(
            extensions=extensions,
            extension_configs={
                "fenced_code": {"lang_prefix": "language-"},
                "toc": {"slugify": _slugify_heading, "permalink": False},
            },
        )

    def to_html(self, markdown: str) -> str:
        """Render ``markdown`` into HTML; blank input yields ``""``."""
        if not markdown or not markdown.strip():
            return ""
        normalized = self._normalize_fenced_blocks(markdown)
        return self._build_markdown().convert(normalized)

    def parse_with_frontmatter(
        self, markdown: str, model: type[typ.Any] = FrontmatterData
    ) -> tuple[typ.Any | None, str]:
        """Parse frontmatter and render the remaining body.

        Parameters
        ----------
        markdown : str
            Full content file text, optionally opening with a ``---`` block.
        model : type, optional
            Frontmatter model exposing ``from_mapping``.

        Returns
        -------
        tuple[object or None, str]
            Parsed frontmatter (``None`` when absent) and the body HTML.

        Raises
        ------
        FrontmatterError
            If the frontmatter block holds malformed YAML.
        """
        frontmatter, body = parse_frontmatter(markdown, model)
        return frontmatter, self.to_html(body)

    @staticmethod
    def calculate_reading_time(
        markdown: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE
    ) -> int:
        """Return the estimated reading time in minutes."""
        return calculate_reading_time(markdown, words_per_minute)

    @staticmethod
    def extract_plain_text(markdown: str) -> str:
        """Return ``markdown`` stripped of formatting syntax."""
        return extract_plain_text(markdown)

    @staticmethod
    def extract_table_of_contents(markdown: str) -> list[TocItem]:
        """Return the nested heading outline of ``markdown``."""
        return extract_table_of_contents(markdown)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


__all__ = ["MarkdownService"]
