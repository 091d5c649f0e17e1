"""Template environment and file helpers shared by the artifact generators."""

from __future__ import annotations

import datetime as dt
import typing as typ
from email.utils import format_datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from mdsite.content_helpers import escape_xml
from mdsite.scanner import check_cancelled

if typ.TYPE_CHECKING:
    import threading

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def build_template_environment(templates_dir: Path | None = None) -> Environment:
    """Return the Jinja environment used to render artifacts.

    Only ``.html`` templates are autoescaped; XML templates escape values
    explicitly with the ``xml_escape`` filter so apostrophes become
    ``&apos;``.
    """
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or DEFAULT_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["xml_escape"] = escape_xml
    return env


def normalize_site_url(site_url: str) -> str:
    """Return ``site_url`` without trailing slashes."""
    return site_url.rstrip("/")


def utc_now() -> dt.datetime:
    """Return the current time in UTC."""
    return dt.datetime.now(dt.UTC)


def format_rfc1123(moment: dt.datetime) -> str:
    """Format ``moment`` as an RFC 1123 date in GMT, as RSS expects."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.UTC)
    return format_datetime(moment.astimezone(dt.UTC), usegmt=True)


def file_modified_at(path: Path) -> dt.datetime | None:
    """Return the file's modification time in UTC, or ``None`` if missing."""
    try:
        return dt.datetime.fromtimestamp(path.stat().st_mtime, tz=dt.UTC)
    except OSError:
        return None


def read_content(path: Path, cancel_event: threading.Event | None = None) -> str:
    """Read a content file after checking for cancellation."""
    check_cancelled(cancel_event)
    return path.read_text(encoding="utf-8")


def write_artifact(
    path: Path, text: str, cancel_event: threading.Event | None = None
) -> Path:
    """Write ``text`` to ``path`` after checking for cancellation."""
    check_cancelled(cancel_event)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


__all__ = [
    "DEFAULT_TEMPLATES_DIR",
    "build_template_environment",
    "file_modified_at",
    "format_rfc1123",
    "normalize_site_url",
    "read_content",
    "utc_now",
    "write_artifact",
]
