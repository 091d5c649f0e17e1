r"""Extract embedded ``[[Component ...]]`` directives from Markdown content.

Content authors embed rich widgets with a small inline syntax::

    [[YouTube videoId="abc123"]]
    [[FloatingImage src="./photo.jpg" position=right]]
    text that wraps around the image
    [[/FloatingImage]]

This module turns those directives into :class:`EmbeddedComponent` records and
swaps each one for an HTML comment placeholder that survives Markdown
rendering. The UI layer later replaces every ``<!--component:comp_N-->``
marker with the rendered widget.

Example
-------
>>> from mdsite.components import transform
>>> content, components = transform('# Title\n\n[[Gallery images="a,b"]]\n')
>>> components[0].type, components[0].parameters["IMAGES"]
('Gallery', 'a,b')
>>> "<!--component:comp_0-->" in content
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import itertools
import re

from ._constants import PLACEHOLDER_TEMPLATE

BLOCK_COMPONENT_PATTERN = re.compile(
    r"\[\[(?P<type>\w+)(?P<params>[^\]]*)\]\](?P<inner>[\s\S]*?)\[\[/(?P=type)\]\]",
    re.IGNORECASE,
)
SELF_CLOSING_COMPONENT_PATTERN = re.compile(
    r"\[\[(?P<type>\w+)(?P<params>[^\]]*?)/??\]\]", re.IGNORECASE
)
PARAMETER_PATTERN = re.compile(
    r"""(?P<name>\w+)\s*=\s*(?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<uq>\S+))"""
)
IMPORT_STATEMENT_PATTERN = re.compile(r"^\s*import\s+.*?;\s*$", re.MULTILINE)


class ParameterMap(cabc.MutableMapping[str, str]):
    """Mapping of component parameters with case-insensitive keys.

    Keys are normalised to lower case on insert and lookup, so ``videoId`` and
    ``VIDEOID`` address the same entry. Iteration yields the spelling used by
    the most recent write.
    """

    __slots__ = ("_data",)

    def __init__(self, items: cabc.Iterable[tuple[str, str]] = ()) -> None:
        self._data: dict[str, tuple[str, str]] = {}
        for key, value in items:
            self[key] = value

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()][1]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key.lower()] = (key, value)

    def __delitem__(self, key: str) -> None:
        del self._data[key.lower()]

    def __iter__(self) -> cabc.Iterator[str]:
        return (original for original, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParameterMap):
            return {k: v for k, (_, v) in self._data.items()} == {
                k: v for k, (_, v) in other._data.items()
            }
        if isinstance(other, cabc.Mapping):
            return self == ParameterMap(other.items())
        return NotImplemented

    def __repr__(self) -> str:
        return f"ParameterMap({dict(self.items())!r})"


@dc.dataclass(frozen=True, slots=True)
class EmbeddedComponent:
    """A ``[[Type ...]]`` directive extracted from content.

    Attributes
    ----------
    type : str
        Component type name as written (for example ``"YouTube"``).
    parameters : ParameterMap
        Parsed ``name=value`` pairs with case-insensitive keys. Compared for
        equality but left out of the hash.
    inner_content : str or None
        Trimmed text between the opening and closing tags for block
        components; ``None`` for self-closing components.
    position : int
        Offset of the first character of ``original_text`` in the content the
        component was extracted from.
    original_text : str
        Exact matched source text, replaced by the placeholder.
    placeholder_id : str
        ``comp_N`` identifier, unique within one extraction call.
    base_path : str
        Folder used by the UI layer to resolve relative media URLs.
    """

    type: str
    parameters: ParameterMap = dc.field(hash=False)
    position: int
    original_text: str
    placeholder_id: str
    inner_content: str | None = None
    base_path: str = ""

    @property
    def placeholder(self) -> str:
        """Return the HTML comment marker that stands in for this component."""
        return PLACEHOLDER_TEMPLATE.format(placeholder_id=self.placeholder_id)


def parse_parameters(params: str | None) -> ParameterMap:
    """Parse ``name="v" name='v' name=v`` tokens into a :class:`ParameterMap`.

    Parameters
    ----------
    params : str or None
        The parameter segment of a component tag. Blank input yields an empty
        map.

    Returns
    -------
    ParameterMap
        Parameters keyed case-insensitively; the last occurrence of a
        duplicated name wins.
    """
    result = ParameterMap()
    if params is None or not params.strip():
        return result
    for match in PARAMETER_PATTERN.finditer(params):
        if match.group("dq") is not None:
            value = match.group("dq")
        elif match.group("sq") is not None:
            value = match.group("sq")
        else:
            value = match.group("uq")
        result[match.group("name")] = value
    return result


def _build_component(
    match: re.Match[str], placeholder_id: str, base_path: str, *, block: bool
) -> EmbeddedComponent | None:
    type_name = match.group("type")
    if not type_name:
        return None
    return EmbeddedComponent(
        type=type_name,
        parameters=parse_parameters(match.group("params")),
        position=match.start(),
        original_text=match.group(0),
        placeholder_id=placeholder_id,
        inner_content=match.group("inner").strip() if block else None,
        base_path=base_path,
    )


def extract_components(content: str, *, base_path: str = "") -> list[EmbeddedComponent]:
    """Return every embedded component in ``content`` ordered by position.

    Block components (``[[Type]]...[[/Type]]``) are discovered first, then
    self-closing ones; a self-closing match starting where a block component
    starts is skipped. Placeholder ids follow discovery order, so after the
    final sort by position they are not necessarily ascending.

    Parameters
    ----------
    content : str
        Markdown source, usually with import statements already removed.
    base_path : str, optional
        Folder recorded on every component for relative URL resolution.

    Returns
    -------
    list[EmbeddedComponent]
        Components sorted ascending by ``position``; empty when the content
        holds no directives.
    """
    counter = itertools.count()
    components: list[EmbeddedComponent] = []

    for match in BLOCK_COMPONENT_PATTERN.finditer(content):
        component = _build_component(
            match, f"comp_{next(counter)}", base_path, block=True
        )
        if component is not None:
            components.append(component)

    block_starts = {component.position for component in components}
    for match in SELF_CLOSING_COMPONENT_PATTERN.finditer(content):
        if match.start() in block_starts:
            continue
        component = _build_component(
            match, f"comp_{next(counter)}", base_path, block=False
        )
        if component is not None:
            components.append(component)

    return sorted(components, key=lambda component: component.position)


def replace_with_placeholders(
    content: str, components: cabc.Iterable[EmbeddedComponent]
) -> str:
    """Replace each component's source span with its placeholder comment.

    Spans are spliced from the highest position down so offsets of the
    remaining components stay valid.
    """
    for component in sorted(
        components, key=lambda component: component.position, reverse=True
    ):
        start = component.position
        end = start + len(component.original_text)
        content = f"{content[:start]}{component.placeholder}{content[end:]}"
    return content


def remove_import_statements(content: str) -> str:
    """Strip JS-module ``import ...;`` lines left over from MDX sources."""
    return IMPORT_STATEMENT_PATTERN.sub("", content)


def transform(
    content: str, *, base_path: str = ""
) -> tuple[str, list[EmbeddedComponent]]:
    """Remove imports, extract components, and substitute placeholders.

    Imports are stripped first so component positions refer to the
    import-free content that the placeholders are spliced into.
    """
    content = remove_import_statements(content)
    components = extract_components(content, base_path=base_path)
    return replace_with_placeholders(content, components), components


class ContentParser:
    """Stateless facade over the component parsing functions.

    The parser keeps no per-call state, so one instance can be shared across
    threads and reused for any number of documents.
    """

    def __init__(self, *, base_path: str = "") -> None:
        self.base_path = base_path

    def extract_components(self, content: str) -> list[EmbeddedComponent]:
        """Return the components found in ``content``."""
        return extract_components(content, base_path=self.base_path)

    def replace_with_placeholders(
        self, content: str, components: cabc.Iterable[EmbeddedComponent]
    ) -> str:
        """Replace component spans in ``content`` with placeholder comments."""
        return replace_with_placeholders(content, components)

    def remove_import_statements(self, content: str) -> str:
        """Strip ``import ...;`` lines from ``content``."""
        return remove_import_statements(content)

    def transform(self, content: str) -> tuple[str, list[EmbeddedComponent]]:
        """Return placeholder content and the extracted components."""
        return transform(content, base_path=self.base_path)

    def parse_parameters(self, params: str | None) -> ParameterMap:
        """Parse a component tag's parameter segment."""
        return parse_parameters(params)


__all__ = [
    "BLOCK_COMPONENT_PATTERN",
    "ContentParser",
    "EmbeddedComponent",
    "ParameterMap",
    "SELF_CLOSING_COMPONENT_PATTERN",
    "extract_components",
    "parse_parameters",
    "remove_import_statements",
    "replace_with_placeholders",
    "transform",
]
