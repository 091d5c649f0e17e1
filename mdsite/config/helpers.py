"""Utility helpers shared by the site configuration loader and scanners."""

from __future__ import annotations

import typing as typ

from mdsite._constants import (
    ARTICLES_FOLDER,
    BLOG_FOLDER,
    DOCS_FOLDER,
    FEATURES_FOLDER,
    HARDCODED_SECTIONS,
    PROJECTS_FOLDER,
)

from .models import (
    ContentSectionConfig,
    SearchConfig,
    SectionDescriptor,
    SeoConfig,
    SiteConfig,
    SiteConfigError,
)

BLOG_SECTION = SectionDescriptor(
    folder=BLOG_FOLDER, route_type="blog", descending=True, priority=0.6
)
PROJECTS_SECTION = SectionDescriptor(
    folder=PROJECTS_FOLDER, route_type="project", priority=0.7, layout="projects"
)
FEATURES_SECTION = SectionDescriptor(
    folder=FEATURES_FOLDER, route_type="feature", priority=0.0, routed=False
)
ARTICLES_SECTION = SectionDescriptor(folder=ARTICLES_FOLDER, route_type="article")
DOCS_SECTION = SectionDescriptor(folder=DOCS_FOLDER, route_type="docs")
HARDCODED_SECTION_DESCRIPTORS: tuple[SectionDescriptor, ...] = (
    BLOG_SECTION,
    PROJECTS_SECTION,
    FEATURES_SECTION,
    ARTICLES_SECTION,
    DOCS_SECTION,
)


def _lower_keys(payload: typ.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Return ``payload`` keyed by lower-cased names for loose lookups."""
    return {str(key).lower(): value for key, value in payload.items()}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _str_field(raw: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        msg = f"'{key}' must be a string, got {type(value).__name__}."
        raise SiteConfigError(msg)
    return value


def _mapping_field(raw: typ.Mapping[str, typ.Any], key: str) -> dict[str, typ.Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{key}' must be an object."
        raise SiteConfigError(msg)
    return _lower_keys(value)


def _build_search_config(raw: typ.Mapping[str, typ.Any]) -> SearchConfig:
    base = SearchConfig()
    enabled = raw.get("enabled", base.enabled)
    if not isinstance(enabled, bool):
        msg = "'search.enabled' must be a boolean."
        raise SiteConfigError(msg)
    return SearchConfig(
        enabled=enabled,
        placeholder=_str_field(raw, "placeholder", base.placeholder),
    )


def _build_seo_config(raw: typ.Mapping[str, typ.Any]) -> SeoConfig:
    base = SeoConfig()
    return SeoConfig(
        default_image=_str_field(raw, "defaultimage", base.default_image),
        twitter_handle=_optional_str(raw.get("twitterhandle")),
        facebook_app_id=_optional_str(raw.get("facebookappid")),
    )


def _build_content_sections(value: object | None) -> list[ContentSectionConfig]:
    if value is None:
        return []
    if not isinstance(value, list):
        msg = "'contentSections' must be a list."
        raise SiteConfigError(msg)
    sections: list[ContentSectionConfig] = []
    for entry in value:
        match entry:
            case dict():
                raw = _lower_keys(entry)
                sections.append(
                    ContentSectionConfig(
                        folder=_str_field(raw, "folder", ""),
                        route=_str_field(raw, "route", ""),
                        menu_title=_str_field(raw, "menutitle", ""),
                        type=_str_field(raw, "type", "article"),
                    )
                )
            case _:
                msg = "Each 'contentSections' entry must be an object."
                raise SiteConfigError(msg)
    return sections


def _build_site_config(payload: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Build a SiteConfig from a decoded JSON object with loosely cased keys."""
    raw = _lower_keys(payload)
    base = SiteConfig()
    return SiteConfig(
        site_name=_str_field(raw, "sitename", base.site_name),
        base_url=_str_field(raw, "baseurl", base.base_url),
        logo_light=_str_field(raw, "logolight", base.logo_light),
        logo_dark=_str_field(raw, "logodark", base.logo_dark),
        default_theme=_str_field(raw, "defaulttheme", base.default_theme),
        search=_build_search_config(_mapping_field(raw, "search")),
        seo=_build_seo_config(_mapping_field(raw, "seo")),
        content_sections=_build_content_sections(raw.get("contentsections")),
    )


def is_hardcoded_section(folder: str) -> bool:
    """Return True when ``folder`` names a built-in section, ignoring case."""
    return folder.lower() in HARDCODED_SECTIONS


def dynamic_section_descriptors(
    sections: typ.Iterable[ContentSectionConfig],
) -> list[SectionDescriptor]:
    """Return descriptors for configured sections that are not built in."""
    return [
        SectionDescriptor(folder=section.folder, route_type=section.folder)
        for section in sections
        if section.folder.strip() and not is_hardcoded_section(section.folder)
    ]


__all__ = [
    "ARTICLES_SECTION",
    "BLOG_SECTION",
    "DOCS_SECTION",
    "FEATURES_SECTION",
    "HARDCODED_SECTION_DESCRIPTORS",
    "PROJECTS_SECTION",
    "dynamic_section_descriptors",
    "is_hardcoded_section",
]
