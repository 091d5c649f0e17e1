"""Load and validate ``site.config.json`` and generator settings.

This subpackage parses the site's JSON configuration into typed dataclasses
(:class:`SiteConfig`, :class:`ContentSectionConfig`, etc.), describes the
content sections the scanner and generators walk (:class:`SectionDescriptor`),
and carries the per-run :class:`GeneratorConfig`. The primary entry point is
:func:`load_site_config`; :func:`try_load_site_config` is the non-fatal variant
used during builds.

Examples
--------
>>> from pathlib import Path
>>> from mdsite.config import GeneratorConfig
>>> config = GeneratorConfig(site_path=Path("site"), output_path=Path("wwwroot"))
>>> config.content_path.as_posix()
'wwwroot/content'
"""

from .helpers import (
    HARDCODED_SECTION_DESCRIPTORS,
    dynamic_section_descriptors,
    is_hardcoded_section,
)
from .loader import load_site_config, load_site_config_or_default, try_load_site_config
from .models import (
    ContentSectionConfig,
    GeneratorConfig,
    SearchConfig,
    SectionDescriptor,
    SeoConfig,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "HARDCODED_SECTION_DESCRIPTORS",
    "ContentSectionConfig",
    "GeneratorConfig",
    "SearchConfig",
    "SectionDescriptor",
    "SeoConfig",
    "SiteConfig",
    "SiteConfigError",
    "dynamic_section_descriptors",
    "is_hardcoded_section",
    "load_site_config",
    "load_site_config_or_default",
    "try_load_site_config",
]
