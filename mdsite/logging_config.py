"""Route library log records to stderr for command-line runs."""

from __future__ import annotations

import logging
import sys


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr; INFO with ``verbose``, WARNING otherwise."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


__all__ = ["setup_logging"]
