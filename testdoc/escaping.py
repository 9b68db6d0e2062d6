"""Character escaping for HTML and Markdown output."""

from __future__ import annotations

# Order matters: "&" goes first so entities produced later are not re-escaped.
HTML_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
)

# Backslash goes first for the same reason.
MARKDOWN_SUBSTITUTIONS: tuple[tuple[str, str], ...] = tuple(
    (char, "\\" + char) for char in "\\`*_{}[]()#+-.!"
)


def escape_html(content: str) -> str:
    """Escape the characters HTML reserves (``& < > "``)."""
    for char, replacement in HTML_SUBSTITUTIONS:
        content = content.replace(char, replacement)
    return content


def escape_markdown(content: str) -> str:
    """Backslash-escape every character Markdown treats as formatting."""
    for char, replacement in MARKDOWN_SUBSTITUTIONS:
        content = content.replace(char, replacement)
    return content


def slugify(title: str) -> str:
    """Build the anchor a Markdown viewer generates for a heading.

    Args:
        title: Heading text

    Returns:
        Lowercase title with commas and periods dropped and spaces turned into hyphens
    """
    return title.lower().replace(",", "").replace(".", "").replace(" ", "-")
