"""Scan the content tree and build the index of content files per section.

The content root holds five built-in sections (``blog``, ``projects``,
``features``, ``articles``, ``docs``) plus any custom sections declared under
``contentSections`` in ``site.config.json``. Each section becomes a sorted list
of paths relative to its folder.

Example
-------
>>> from pathlib import Path
>>> from mdsite.scanner import ContentScanner
>>> index = ContentScanner(Path("wwwroot/content")).scan()  # doctest: +SKIP
>>> index.blog[:1]  # doctest: +SKIP
['2024-01-15-newest-post.md']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from ._constants import (
    CONTENT_FILE_SUFFIXES,
    CONTENT_GLOB,
    PROJECT_INDEX_FILE,
    SITE_CONFIG_FILENAME,
)
from .config import (
    HARDCODED_SECTION_DESCRIPTORS,
    SectionDescriptor,
    SiteConfig,
    dynamic_section_descriptors,
    is_hardcoded_section,
    try_load_site_config,
)

if typ.TYPE_CHECKING:
    import threading
    from pathlib import Path

logger = logging.getLogger(__name__)


class BuildCancelledError(RuntimeError):
    """Raised when a scan or build is cancelled before completion."""


def check_cancelled(cancel_event: threading.Event | None) -> None:
    """Raise :class:`BuildCancelledError` if ``cancel_event`` is set."""
    if cancel_event is not None and cancel_event.is_set():
        msg = "Build cancelled."
        raise BuildCancelledError(msg)


@dc.dataclass(slots=True)
class ContentIndex:
    """Relative content paths for every section, in scan order.

    Attributes
    ----------
    blog : list[str]
        Blog post filenames, newest first.
    projects : list[str]
        Project filenames and ``"{folder}/index.md"`` entries.
    features, articles, docs : list[str]
        Filenames sorted ascending.
    sections : dict[str, list[str]]
        Custom sections keyed by folder; never holds a built-in name.
    """

    blog: list[str] = dc.field(default_factory=list)
    projects: list[str] = dc.field(default_factory=list)
    features: list[str] = dc.field(default_factory=list)
    articles: list[str] = dc.field(default_factory=list)
    docs: list[str] = dc.field(default_factory=list)
    sections: dict[str, list[str]] = dc.field(default_factory=dict)

    def files_for(self, descriptor: SectionDescriptor) -> list[str]:
        """Return the scanned paths for the section ``descriptor`` describes."""
        if is_hardcoded_section(descriptor.folder):
            return getattr(self, descriptor.folder.lower())
        return self.sections.get(descriptor.folder, [])

    def descriptors(self) -> list[SectionDescriptor]:
        """Return descriptors for the built-in sections and scanned custom ones."""
        return [
            *HARDCODED_SECTION_DESCRIPTORS,
            *(SectionDescriptor(folder=folder, route_type=folder) for folder in self.sections),
        ]

    def iter_sections(self) -> typ.Iterator[tuple[SectionDescriptor, list[str]]]:
        """Yield ``(descriptor, files)`` for every section in the index."""
        for descriptor in self.descriptors():
            yield descriptor, self.files_for(descriptor)


class ContentScanner:
    """Build a :class:`ContentIndex` from a content directory.

    Parameters
    ----------
    content_path : Path
        Content root holding the section folders.
    site_config_path : Path, optional
        ``site.config.json`` declaring custom sections; defaults to the file
        next to the content root.
    site_config : SiteConfig, optional
        Already loaded configuration; skips reading ``site_config_path``.
    """

    def __init__(
        self,
        content_path: Path,
        site_config_path: Path | None = None,
        *,
        site_config: SiteConfig | None = None,
    ) -> None:
        self.content_path = content_path
        self.site_config_path = site_config_path or (
            content_path.parent / SITE_CONFIG_FILENAME
        )
        self._site_config = site_config

    def scan(self, cancel_event: threading.Event | None = None) -> ContentIndex:
        """Scan every section and return a fresh index.

        Missing folders yield empty lists. A missing or malformed site
        configuration only disables custom sections.

        Raises
        ------
        BuildCancelledError
            If ``cancel_event`` is set before a section is listed.
        """
        index = ContentIndex()
        for descriptor in HARDCODED_SECTION_DESCRIPTORS:
            check_cancelled(cancel_event)
            setattr(index, descriptor.folder, self._scan_section(descriptor))

        site_config = self._load_site_config()
        if site_config is not None:
            for descriptor in dynamic_section_descriptors(site_config.content_sections):
                check_cancelled(cancel_event)
                if (self.content_path / descriptor.folder).is_dir():
                    index.sections[descriptor.folder] = self._scan_section(descriptor)
        return index

    def _load_site_config(self) -> SiteConfig | None:
        if self._site_config is not None:
            return self._site_config
        if not self.site_config_path.exists():
            return None
        return try_load_site_config(self.site_config_path)

    def _scan_section(self, descriptor: SectionDescriptor) -> list[str]:
        path = self.content_path / descriptor.folder
        if not path.is_dir():
            return []
        try:
            if descriptor.layout == "projects":
                return self._scan_projects_folder(path)
            return self._scan_folder(path, descending=descriptor.descending)
        except OSError as exc:
            logger.warning("Failed to scan %s: %s", path, exc)
            return []

    @staticmethod
    def _scan_folder(path: Path, *, descending: bool) -> list[str]:
        names = [
            entry.name
            for entry in path.glob(CONTENT_GLOB)
            if entry.is_file() and entry.suffix in CONTENT_FILE_SUFFIXES
        ]
        return sorted(names, reverse=descending)

    @staticmethod
    def _scan_projects_folder(path: Path) -> list[str]:
        results: list[str] = []
        for entry in sorted(path.iterdir(), key=lambda item: item.name):
            if entry.is_dir():
                if (entry / PROJECT_INDEX_FILE).is_file():
                    results.append(f"{entry.name}/{PROJECT_INDEX_FILE}")
            elif entry.name.lower().endswith(".md"):
                results.append(entry.name)
        return results


__all__ = [
    "BuildCancelledError",
    "ContentIndex",
    "ContentScanner",
    "check_cancelled",
]
