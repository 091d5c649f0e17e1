"""Unit tests for slug generation and filename conventions."""

from __future__ import annotations

import pytest

from mdsite.slugs import (
    generate_slug,
    get_order_and_slug_from_filename,
    get_slug_from_filename,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello World", "hello-world"),
        ("Blazor vs. Native", "blazor-vs.native"),
        ("  C# & .NET  ", "c.net"),
        ("snake_case_name", "snake-case-name"),
        ("Multiple   ---   dashes", "multiple-dashes"),
        ("Version 2.0 Release", "version-2.0-release"),
    ],
)
def test_generate_slug(text: str, expected: str) -> None:
    """Slugs are lower-case with only letters, digits, hyphens and dots."""
    actual = generate_slug(text)
    assert actual == expected, f"expected {expected!r} for {text!r}, got {actual!r}"


@pytest.mark.parametrize("text", [None, "", "   \t"])
def test_generate_slug_blank_input(text: str | None) -> None:
    """Blank input yields an empty slug."""
    assert generate_slug(text) == "", "expected empty slug for blank input"


@pytest.mark.parametrize(
    "text", ["Hello World", "Blazor vs. Native", "  -Edge- _case_ .dots. ", "Ünïcödé"]
)
def test_generate_slug_is_idempotent(text: str) -> None:
    """Slugging a slug returns it unchanged."""
    once = generate_slug(text)
    assert generate_slug(once) == once, f"slug of {once!r} changed on second pass"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("2024-01-15-my-post.md", "my-post"),
        ("01-introduction.md", "introduction"),
        ("01-biography/index.md", "biography"),
        ("projects\\02-tool\\INDEX.MD", "tool"),
        ("about.md", "about"),
        ("notes.MDX", "notes"),
        ("1-x.md", "1-x"),
        ("12-.md", "12-"),
    ],
)
def test_get_slug_from_filename(filename: str, expected: str) -> None:
    """Extensions and one date or order prefix are stripped."""
    actual = get_slug_from_filename(filename)
    assert actual == expected, f"expected {expected!r} for {filename!r}, got {actual!r}"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("03-setup.md", (3, "setup")),
        ("10-advanced/index.mdx", (10, "advanced")),
        ("2024-01-15-post.md", (0, "2024-01-15-post")),
        ("readme.md", (0, "readme")),
    ],
)
def test_get_order_and_slug_from_filename(
    filename: str, expected: tuple[int, str]
) -> None:
    """Only the two-digit order prefix yields a non-zero order."""
    actual = get_order_and_slug_from_filename(filename)
    assert actual == expected, f"expected {expected!r} for {filename!r}, got {actual!r}"
