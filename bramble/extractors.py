"""Metadata extractors for Bramble.

This module contains the front matter parser and the implementations of the
MetadataExtractor protocol used when building pages. Each extractor derives a
single piece of page metadata.

Key classes:
- FrontmatterExtractor: Splits the ``---`` block from the body.
- SlugExtractor: Derives the output slug from front matter or filename.
- TitleExtractor: Derives the title, falling back to the slug.
- DateExtractor: Reads the raw date string.
- SummaryExtractor: Reads the summary or cuts one from the body.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from .protocols import MetadataExtractor

FRONTMATTER_RE = re.compile(r"^---\n(.*?)\n---\n", re.DOTALL)

SUMMARY_LENGTH = 120


def extract_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Split ``key: value`` front matter from the rest of a document.

    The block must open the document: a ``---`` line, the metadata lines,
    then a closing ``---`` line followed by a newline. Anything else is
    treated as having no front matter at all.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (metadata dict, remaining body). Without a block the
        metadata is empty and the body is ``text`` unchanged.

    Examples:
        >>> extract_frontmatter("---\\ntitle: X\\n---\\nBody")
        ({'title': 'X'}, 'Body')
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    metadata: dict[str, str] = {}
    for line in match.group(1).split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        metadata[key.strip()] = value.strip()
    return metadata, text[match.end() :]


def summarize(body: str, limit: int = SUMMARY_LENGTH) -> str:
    """Cut a listing summary from the first line of a body."""
    return body.split("\n")[0][:limit] + "..."


class FrontmatterExtractor:
    """Extracts front matter and body from content."""

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        """Extract front matter from content.

        Args:
            content: Source content with potential front matter.
            path: Path to the source file (unused).
            found: Metadata extracted so far (unused).

        Returns:
            Dictionary with 'frontmatter' and 'body' keys.
        """
        frontmatter, body = extract_frontmatter(content)
        return {"frontmatter": frontmatter, "body": body}


class SlugExtractor:
    """Uses the ``slug`` field, falling back to the filename stem."""

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        frontmatter = found.get("frontmatter", {})
        return {"slug": frontmatter.get("slug") or path.stem}


class TitleExtractor:
    """Uses the ``title`` field, falling back to the slug."""

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        frontmatter = found.get("frontmatter", {})
        return {"title": frontmatter.get("title") or found.get("slug", path.stem)}


class DateExtractor:
    """Reads the ``date`` field as written; missing dates become ``""``."""

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        frontmatter = found.get("frontmatter", {})
        return {"date": frontmatter.get("date") or ""}


class SummaryExtractor:
    """Extracts the listing summary for a page.

    Uses the ``summary`` field when present, otherwise the first line of the
    body truncated to ``limit`` characters with a trailing ellipsis.
    """

    def __init__(self, limit: int = SUMMARY_LENGTH):
        self.limit = limit

    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        frontmatter = found.get("frontmatter", {})
        summary = frontmatter.get("summary")
        if not summary:
            summary = summarize(found.get("body", content), self.limit)
        return {"summary": summary}


class CompositeMetadataExtractor:
    """Combines multiple metadata extractors.

    Extractors run in order and each one sees the metadata merged so far,
    so later extractors can build on earlier results.
    """

    def __init__(
        self,
        extractors: list[MetadataExtractor] | None = None,
        summary_length: int = SUMMARY_LENGTH,
    ):
        """Initialize with a list of extractors.

        Args:
            extractors: List of MetadataExtractor implementations.
                       If None, uses default extractors.
            summary_length: Summary cut-off for the default SummaryExtractor.
        """
        if extractors is None:
            self._extractors = [
                FrontmatterExtractor(),
                SlugExtractor(),
                TitleExtractor(),
                DateExtractor(),
                SummaryExtractor(summary_length),
            ]
        else:
            self._extractors = list(extractors)

    def add_extractor(self, extractor: MetadataExtractor) -> None:
        """Add an extractor to the composite.

        Args:
            extractor: A MetadataExtractor implementation.
        """
        self._extractors.append(extractor)

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract all metadata from content.

        Args:
            content: Source content.
            path: Path to the source file.

        Returns:
            Dictionary with all extracted metadata.
        """
        result: dict[str, Any] = {}
        for extractor in self._extractors:
            result.update(extractor.extract(content, path, result))
        return result


# Default composite extractor instance
default_metadata_extractor = CompositeMetadataExtractor()
