"""Load ``site.config.json`` into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ

import msgspec

from .helpers import _build_site_config
from .models import SiteConfig, SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def load_site_config(path: Path) -> SiteConfig:
    """Load the JSON file describing site-wide settings.

    Parameters
    ----------
    path : Path
        Filesystem path to ``site.config.json``.

    Returns
    -------
    SiteConfig
        Parsed configuration. Keys are matched case-insensitively, so
        ``siteName`` and ``SiteName`` both populate ``site_name``.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the file is not valid JSON, its top level is not an object, or a
        field holds a value of the wrong type.

    Examples
    --------
    >>> from pathlib import Path
    >>> from mdsite.config import load_site_config
    >>> config = load_site_config(Path("wwwroot/site.config.json"))  # doctest: +SKIP
    >>> [section.folder for section in config.content_sections]  # doctest: +SKIP
    ['solutions']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    try:
        loaded = msgspec.json.decode(path.read_bytes())
    except msgspec.DecodeError as exc:
        msg = f"Configuration file '{path}' is not valid JSON: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level JSON structure must be an object."
        raise SiteConfigError(msg)
    return _build_site_config(loaded)


def try_load_site_config(path: Path) -> SiteConfig | None:
    """Return the site configuration, or ``None`` when it cannot be loaded.

    Missing and malformed files are logged as warnings; builds continue
    without site-level settings.
    """
    try:
        return load_site_config(path)
    except FileNotFoundError:
        logger.warning("site.config.json not found at %s", path)
    except (OSError, SiteConfigError) as exc:
        logger.warning("Failed to load site.config.json: %s", exc)
    return None


def load_site_config_or_default(path: Path) -> SiteConfig:
    """Return the site configuration, or a default one when loading fails."""
    return try_load_site_config(path) or SiteConfig()


__all__ = ["load_site_config", "load_site_config_or_default", "try_load_site_config"]
