"""Render GitHub-style ``- [ ]`` task list items as disabled checkboxes."""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

TASK_MARKER_PATTERN = re.compile(r"^\s*\[(?P<state>[ xX])\][ \t]+")
TASK_ITEM_CLASS = "task-list-item"


class TaskListExtension(Extension):
    """Turn list items starting with ``[ ]`` or ``[x]`` into checkbox items.

    The checkbox is rendered ``disabled`` so the output stays read-only, and
    both ``x`` and ``X`` mark an item as checked.
    """

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the task-list treeprocessor after inline processing."""
        md.treeprocessors.register(TaskListTreeprocessor(md), "mdsite_tasklist", 15)


class TaskListTreeprocessor(Treeprocessor):
    """Insert checkbox inputs into list items carrying a task marker."""

    def run(self, root: Element) -> Element:
        """Rewrite every ``li`` whose text opens with a task marker."""
        for item in root.iter("li"):
            target = self._text_holder(item)
            match = TASK_MARKER_PATTERN.match(target.text or "")
            if match is None:
                continue
            checkbox = etree.Element("input", {"type": "checkbox", "disabled": "disabled"})
            if match.group("state") in "xX":
                checkbox.set("checked", "checked")
            checkbox.tail = (target.text or "")[match.end() :]
            target.text = None
            target.insert(0, checkbox)
            item.set("class", TASK_ITEM_CLASS)
        return root

    @staticmethod
    def _text_holder(item: Element) -> Element:
        """Return the element holding the item's leading text.

        Loose lists wrap item text in a ``<p>``; tight lists keep it on the
        ``<li>`` itself.
        """
        if (item.text is None or not item.text.strip()) and len(item) and item[0].tag == "p":
            return item[0]
        return item


__all__ = ["TASK_ITEM_CLASS", "TaskListExtension", "TaskListTreeprocessor"]
