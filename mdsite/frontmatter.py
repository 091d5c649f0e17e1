r"""Parse the YAML frontmatter block at the top of content files.

Content files may open with a ``---`` fenced YAML block carrying page
metadata. Keys are written in camelCase by content authors (``publishDate``,
``featuredImage``) but are matched case-insensitively, and the snake_case
spelling is accepted as well.

Example
-------
>>> from mdsite.frontmatter import parse_frontmatter
>>> data, body = parse_frontmatter("---\ntitle: Hello\ntags: [a, b]\n---\n# Body\n")
>>> data.title, data.tags
('Hello', ['a', 'b'])
>>> body
'# Body\n'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

FRONTMATTER_PATTERN = re.compile(
    r"\A\s*---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*(?:\r?\n|\Z)(?P<body>.*)\Z",
    re.DOTALL | re.MULTILINE,
)

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})
_FALSE_STRINGS = frozenset({"false", "no", "off", "0"})


class FrontmatterError(ValueError):
    """Raised when a frontmatter block cannot be parsed."""


def _normalize_key(key: object) -> str:
    return str(key).replace("_", "").replace("-", "").lower()


def _optional_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_bool(value: object | None, *, default: bool) -> bool:
    match value:
        case None:
            return default
        case bool():
            return value
        case str() if value.strip().lower() in _TRUE_STRINGS:
            return True
        case str() if value.strip().lower() in _FALSE_STRINGS:
            return False
        case int():
            return bool(value)
        case _:
            msg = f"Expected a boolean, got {value!r}."
            raise FrontmatterError(msg)


def _coerce_datetime(value: object | None) -> dt.datetime | None:
    """Return ``value`` as an aware datetime; naive values are taken as UTC."""
    match value:
        case None:
            return None
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() if value.strip():
            try:
                parsed = dt.datetime.fromisoformat(value.strip())
            except ValueError as exc:
                msg = f"Invalid date {value!r}."
                raise FrontmatterError(msg) from exc
        case str():
            return None
        case _:
            msg = f"Expected a date, got {value!r}."
            raise FrontmatterError(msg)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.UTC)
    return parsed


def _coerce_tags(value: object | None) -> list[str] | None:
    match value:
        case None:
            return None
        case list() | tuple():
            return [str(tag).strip() for tag in value if str(tag).strip()]
        case str():
            return [value.strip()] if value.strip() else []
        case _:
            msg = f"Expected a list of tags, got {value!r}."
            raise FrontmatterError(msg)


@dc.dataclass(slots=True)
class FrontmatterData:
    """Metadata parsed from a content file's frontmatter block.

    Attributes
    ----------
    title : str or None
        Page title; generators fall back to the slug when missing.
    description : str or None
        Short description used in search results and feeds.
    summary : str or None
        Preferred over ``description`` for feed and search excerpts.
    publish_date : datetime or None
        Timezone-aware publication timestamp.
    tags : list[str] or None
        Tags in authoring order; duplicates are kept.
    show_in_menu : bool
        Whether the page appears in generated menus.
    show_in_header : bool
        Whether the page is promoted to the site header.
    is_first_project : bool
        Marks the project shown first on project listings.
    """

    title: str | None = None
    description: str | None = None
    summary: str | None = None
    publish_date: dt.datetime | None = None
    tags: list[str] | None = None
    featured_image: str | None = None
    author: str | None = None
    url: str | None = None
    menu_title: str | None = None
    show_in_menu: bool = True
    show_in_header: bool = False
    is_first_project: bool = False
    parent: str | None = None
    icon: str | None = None

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[typ.Any, typ.Any]) -> FrontmatterData:
        """Build frontmatter from a YAML mapping with loosely matched keys.

        Raises
        ------
        FrontmatterError
            If a recognised key holds a value of the wrong shape.
        """
        raw = {_normalize_key(key): value for key, value in payload.items()}
        return cls(
            title=_optional_str(raw.get("title")),
            description=_optional_str(raw.get("description")),
            summary=_optional_str(raw.get("summary")),
            publish_date=_coerce_datetime(raw.get("publishdate")),
            tags=_coerce_tags(raw.get("tags")),
            featured_image=_optional_str(raw.get("featuredimage")),
            author=_optional_str(raw.get("author")),
            url=_optional_str(raw.get("url")),
            menu_title=_optional_str(raw.get("menutitle")),
            show_in_menu=_coerce_bool(raw.get("showinmenu"), default=True),
            show_in_header=_coerce_bool(raw.get("showinheader"), default=False),
            is_first_project=_coerce_bool(raw.get("isfirstproject"), default=False),
            parent=_optional_str(raw.get("parent")),
            icon=_optional_str(raw.get("icon")),
        )


class FrontmatterModel(typ.Protocol):
    """Anything constructible from a frontmatter mapping."""

    @classmethod
    def from_mapping(cls, payload: typ.Mapping[typ.Any, typ.Any]) -> typ.Any: ...


def split_frontmatter(markdown: str) -> tuple[str | None, str]:
    """Return ``(yaml_text, body)``; ``yaml_text`` is ``None`` without a block."""
    match = FRONTMATTER_PATTERN.match(markdown)
    if match is None:
        return None, markdown
    return match.group("yaml"), match.group("body")


def _load_yaml(text: str) -> typ.Any:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        return loader.load(text)
    except (YAMLError, ValueError) as exc:
        # Date-shaped scalars such as ``2024-13-45`` fail with ValueError.
        msg = f"Malformed frontmatter YAML: {exc}"
        raise FrontmatterError(msg) from exc


def parse_frontmatter(
    markdown: str, model: type[typ.Any] = FrontmatterData
) -> tuple[typ.Any | None, str]:
    """Parse the leading frontmatter block of ``markdown``.

    Parameters
    ----------
    markdown : str
        Full content file text.
    model : type, optional
        Class exposing ``from_mapping``; defaults to :class:`FrontmatterData`.

    Returns
    -------
    tuple[object or None, str]
        The parsed model (``None`` when the file has no frontmatter block) and
        the remaining Markdown body.

    Raises
    ------
    FrontmatterError
        If the YAML is malformed or is not a mapping.
    """
    yaml_text, body = split_frontmatter(markdown)
    if yaml_text is None:
        return None, markdown
    loaded = _load_yaml(yaml_text)
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = "Frontmatter must be a YAML mapping."
        raise FrontmatterError(msg)
    return model.from_mapping(loaded), body


__all__ = [
    "FRONTMATTER_PATTERN",
    "FrontmatterData",
    "FrontmatterError",
    "FrontmatterModel",
    "parse_frontmatter",
    "split_frontmatter",
]
