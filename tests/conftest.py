"""Shared fixtures that lay out a small site content tree on disk."""

from __future__ import annotations

import json
import typing as typ

import pytest

from mdsite.config import GeneratorConfig

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def write_content(
    path: Path, body: str = "Body text.", **frontmatter: object
) -> Path:
    """Write a content file with optional YAML frontmatter built from kwargs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if frontmatter:
        lines = [f"{key}: {value}" for key, value in frontmatter.items()]
        text = "---\n" + "\n".join(lines) + "\n---\n\n" + body + "\n"
    else:
        text = body + "\n"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_file() -> cabc.Callable[..., Path]:
    """Expose :func:`write_content` to tests that add files to a tree."""
    return write_content


@pytest.fixture
def site_config_payload() -> dict[str, typ.Any]:
    """Return a site.config.json payload declaring one custom section."""
    return {
        "siteName": "Example Site",
        "baseUrl": "https://example.com/",
        "contentSections": [
            {"folder": "solutions", "route": "solutions", "menuTitle": "Solutions"},
            {"folder": "Blog", "route": "blog", "menuTitle": "Duplicate"},
            {"folder": "ghost", "route": "ghost", "menuTitle": "Missing"},
        ],
    }


@pytest.fixture
def site_tree(tmp_path: Path, site_config_payload: dict[str, typ.Any]) -> Path:
    """Create ``site/wwwroot`` with content in every section.

    Returns the site project directory; content lives under
    ``site/wwwroot/content``.
    """
    site = tmp_path / "site"
    output = site / "wwwroot"
    content = output / "content"

    write_content(
        content / "blog" / "2024-01-01-first-post.md",
        "# First\n\nHello **world**.",
        title="First Post",
        description="The first post",
        publishDate="2024-01-01",
        tags="[intro, news]",
        author="Ada",
    )
    write_content(
        content / "blog" / "2024-01-15-second-post.md",
        "Second body mentions blazor.",
        title="Second Post",
        summary="Summary wins",
        description="Ignored description",
    )
    write_content(content / "blog" / "2024-01-10-draft.md", "No frontmatter here.")
    (content / "blog" / "2024-01-15-second-post.md.gz").write_bytes(b"\x1f\x8b")
    (content / "blog" / "2024-01-15-second-post.md.br").write_bytes(b"br")

    write_content(
        content / "projects" / "01-tool" / "index.md", "Tool body.", title="Tool"
    )
    write_content(content / "projects" / "02-library.md", "Library body.", title="Lib")
    (content / "projects" / "03-empty").mkdir(parents=True)
    write_content(content / "projects" / "01-tool" / "notes.md", "Nested notes.")

    write_content(content / "features" / "01-fast.md", "Fast.", title="Fast")
    write_content(content / "articles" / "01-guide.md", "Guide.", title="Guide")
    write_content(content / "docs" / "01-intro.md", "Intro.", title="Intro")
    write_content(
        content / "solutions" / "01-consulting.md", "Consulting.", title="Consulting"
    )

    (output / "site.config.json").write_text(
        json.dumps(site_config_payload), encoding="utf-8"
    )
    return site


@pytest.fixture
def generator_config(site_tree: Path) -> GeneratorConfig:
    """Return a GeneratorConfig pointing at ``site_tree``."""
    return GeneratorConfig(
        site_path=site_tree,
        output_path=site_tree / "wwwroot",
        site_url="https://example.com/",
    )
