"""Content pipeline for Markdown-driven static sites.

This package scans a content tree of Markdown/MDX files, parses frontmatter
and embedded ``[[Component]]`` directives, renders HTML, and writes the build
artifacts a static host serves next to the site (``search-index.json``,
``sitemap.xml``, ``robots.txt``, ``feed.xml`` and hosting configs).

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from mdsite import main
>>> main()  # doctest: +SKIP
>>> from mdsite import app
>>> app.name[0]
'mdsite'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
