"""Protocol definitions for Bramble.

This module defines the interfaces used between the content pipeline's
components, so alternative renderers, extractors or loaders can be passed to
the page builder without subclassing.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for rendering a page body to HTML."""

    @abstractmethod
    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if this renderer can process the file.
        """
        ...

    @abstractmethod
    def render(self, content: str) -> str:
        """Render a body (front matter already removed) to an HTML fragment."""
        ...

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the source type identifier (e.g., 'markdown')."""
        ...


@runtime_checkable
class MetadataExtractor(Protocol):
    """Protocol for extracting one piece of page metadata.

    ``found`` holds everything extracted by earlier extractors in the chain.
    """

    @abstractmethod
    def extract(self, content: str, path: Path, found: dict[str, Any]) -> dict[str, Any]:
        ...


@runtime_checkable
class ContentLoader(Protocol):
    """Protocol for discovering the source files of a collection."""

    @abstractmethod
    def iter_files(self) -> list[Path]:
        """Return the source files to build, in build order."""
        ...
