"""Content processing for Bramble.

This module handles loading of Markdown content files. It extracts metadata,
renders the body, and creates Page objects representing site pages.

Key classes:
- Page: Dataclass representing a rendered page and its listing metadata.
- FileContentLoader: Discovers the Markdown files of a collection folder.
- DefaultPageBuilder: Builds a Page from one source file.
- ContentProcessor: Facade loading every page of a collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .errors import BuildError, format_error_message
from .extractors import CompositeMetadataExtractor, default_metadata_extractor
from .protocols import ContentLoader, ContentRenderer
from .renderers import default_renderer


@dataclass
class Page:
    """Represents a site page with all its metadata and content.

    Attributes:
        title: Page title, defaulting to the slug.
        date: Date string as written in front matter, or empty.
        slug: Output file name without the ``.html`` suffix.
        summary: Text shown on listing cards.
        content: Rendered HTML fragment.
        body: Markdown body with front matter removed.
        collection: Collection the page belongs to (e.g. 'posts'), or empty.
        path: Path to the source file.
        frontmatter: All front matter fields.
    """

    title: str
    date: str
    slug: str
    summary: str
    content: str
    body: str
    collection: str
    path: Path
    frontmatter: dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        """Site-absolute URL of the generated page."""
        if self.collection:
            return f"/{self.collection}/{self.slug}.html"
        return f"/{self.slug}.html"


class FileContentLoader:
    """Finds the Markdown files of a content folder.

    Only files directly inside the folder are considered. Files are returned
    sorted by name so builds are reproducible.

    Attributes:
        folder: Directory to scan.
    """

    def __init__(self, folder: Path, renderer: ContentRenderer | None = None):
        self.folder = folder
        self.renderer = renderer or default_renderer

    def iter_files(self) -> list[Path]:
        """List the renderable files in the folder.

        Returns:
            Sorted list of paths; empty when the folder does not exist.
        """
        if not self.folder.is_dir():
            return []
        return sorted(
            path
            for path in self.folder.iterdir()
            if path.is_file() and self.renderer.can_render(path)
        )


class DefaultPageBuilder:
    """Builds Page objects from source files.

    Attributes:
        renderer: Markdown renderer for page bodies.
        metadata_extractor: Composite metadata extractor.
    """

    def __init__(
        self,
        renderer: ContentRenderer | None = None,
        metadata_extractor: CompositeMetadataExtractor | None = None,
    ):
        self.renderer = renderer or default_renderer
        self.metadata_extractor = metadata_extractor or default_metadata_extractor

    def build(self, path: Path, collection: str = "") -> Page:
        """Build a Page object from a source file.

        Args:
            path: Path to the source file.
            collection: Name of the collection the page belongs to.

        Returns:
            Page object.

        Raises:
            BuildError: If the file cannot be read as UTF-8 text.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise BuildError(path, format_error_message(exc), exc) from exc
        return self.build_from_text(raw, path, collection)

    def build_from_text(self, raw: str, path: Path, collection: str = "") -> Page:
        """Build a Page from already loaded text."""
        metadata = self.metadata_extractor.extract(raw, path)
        body = metadata.get("body", raw)
        return Page(
            title=metadata["title"],
            date=metadata["date"],
            slug=metadata["slug"],
            summary=metadata["summary"],
            content=self.renderer.render(body),
            body=body,
            collection=collection,
            path=path,
            frontmatter=metadata.get("frontmatter", {}),
        )


class ContentProcessor:
    """Loads every page of one content collection.

    Attributes:
        folder: Directory holding the collection's Markdown files.
        collection: Collection name, used for output paths and URLs.
    """

    def __init__(
        self,
        folder: Path,
        collection: str,
        content_loader: ContentLoader | None = None,
        page_builder: DefaultPageBuilder | None = None,
    ):
        self.folder = folder
        self.collection = collection
        self._content_loader = content_loader or FileContentLoader(folder)
        self._page_builder = page_builder or DefaultPageBuilder()

    def load(self) -> list[Page]:
        """Load all content files and create Page objects.

        Returns:
            List of Page objects in file name order.
        """
        return [
            self._page_builder.build(path, self.collection)
            for path in self._content_loader.iter_files()
        ]


def load_page(path: Path, page_builder: DefaultPageBuilder | None = None) -> Page | None:
    """Load a standalone page such as ``about.md``.

    Args:
        path: Path to the Markdown file.
        page_builder: Optional custom page builder.

    Returns:
        The page, or None when the file does not exist.
    """
    if not path.is_file():
        return None
    return (page_builder or DefaultPageBuilder()).build(path)
