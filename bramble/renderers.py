"""Content renderers for Bramble.

This module converts a deliberately small subset of Markdown into HTML:
``#``/``##``/``###`` headings, paragraphs, flat unordered lists, and the
inline ``**bold**``, ``*italic*`` and ``[text](url)`` spans. It is not a
CommonMark implementation. Source HTML is passed through unescaped.

Key functions and classes:
- format_inline: Applies the inline substitutions to one line.
- render_markdown: Converts a body into a newline-joined HTML fragment.
- MarkdownRenderer: ContentRenderer implementation for ``.md`` files.
"""

from __future__ import annotations

import enum
import re
from pathlib import Path

BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
ITALIC_RE = re.compile(r"\*(.+?)\*")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

# Checked in order; ### must precede ## and #.
HEADING_RES = (
    (3, re.compile(r"^###\s+")),
    (2, re.compile(r"^##\s+")),
    (1, re.compile(r"^#\s+")),
)
LIST_ITEM_RE = re.compile(r"^[-*]\s+")
LINE_SPLIT_RE = re.compile(r"\r?\n")


class ListState(enum.Enum):
    """Block context while walking the lines of a body."""

    PARAGRAPH = "paragraph"
    LIST = "list"


def format_inline(text: str) -> str:
    """Apply bold, italic and link substitutions to a single line.

    The passes run in a fixed order, each over the output of the previous
    one, and none of them recurse into what it captured.

    Args:
        text: One line of Markdown.

    Returns:
        The line with inline markup replaced by HTML tags.

    Examples:
        >>> format_inline("**a** and *b*")
        '<strong>a</strong> and <em>b</em>'

        >>> format_inline("[site](http://x)")
        '<a href="http://x">site</a>'
    """
    result = BOLD_RE.sub(r"<strong>\1</strong>", text)
    result = ITALIC_RE.sub(r"<em>\1</em>", result)
    return LINK_RE.sub(r'<a href="\2">\1</a>', result)


def render_markdown(body: str) -> str:
    """Convert a Markdown body to an HTML fragment.

    Each source line becomes at most one element. Blank lines only separate
    paragraphs and never show up in the output.

    Args:
        body: Markdown text without front matter.

    Returns:
        HTML elements joined by newlines.
    """
    elements: list[str] = []
    state = ListState.PARAGRAPH

    def close_list() -> None:
        nonlocal state
        if state is ListState.LIST:
            elements.append("</ul>")
            state = ListState.PARAGRAPH

    for line in LINE_SPLIT_RE.split(body):
        heading = _match_heading(line)
        if heading is not None:
            level, text = heading
            close_list()
            elements.append(f"<h{level}>{text}</h{level}>")
            continue

        item = LIST_ITEM_RE.match(line)
        if item:
            if state is ListState.PARAGRAPH:
                elements.append("<ul>")
                state = ListState.LIST
            elements.append(f"<li>{format_inline(line[item.end():])}</li>")
            continue

        close_list()
        if line.strip():
            elements.append(f"<p>{format_inline(line)}</p>")
        else:
            # paragraph separator
            elements.append("")

    close_list()
    return "\n".join(element for element in elements if element)


def _match_heading(line: str) -> tuple[int, str] | None:
    """Return the heading level and verbatim text for a heading line."""
    for level, pattern in HEADING_RES:
        match = pattern.match(line)
        if match:
            return level, line[match.end() :]
    return None


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    This renderer handles Markdown files using the restricted converter
    in this module.
    """

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "markdown"

    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if the file is a Markdown file.
        """
        return path.suffix.lower() == ".md"

    def render(self, content: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.

        Returns:
            Rendered HTML fragment.
        """
        return render_markdown(content)


default_renderer = MarkdownRenderer()
