"""Site building functionality for Bramble.

This module contains the logic for building a static site from a project
folder. It loads configuration, renders every content collection, writes the
listing, home and standalone pages, and copies static files.

Key functions:
- build_site: Main function to build the entire site.
- load_config: Loads site configuration from bramble.yaml.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .assets import AssetPipeline
from .collections import PageCollection
from .content import ContentProcessor, DefaultPageBuilder, Page, load_page
from .errors import BuildError
from .extractors import CompositeMetadataExtractor
from .templates import PartialRenderer, TemplateEngine, TemplateNotFoundError
from .utils import ensure_clean_dir, titleize

CONFIG_FILENAME = "bramble.yaml"

POST_TEMPLATE = "post.html"
LAYOUT_TEMPLATE = "layout.html"


DEFAULT_CONFIG: dict[str, Any] = {
    "content_dir": "content",
    "output_dir": "public",
    "templates_dir": "templates",
    "static_dir": "static",
    "admin_dir": "admin",
    "clean_output": False,
    "port": 4000,
    "summary_length": 120,
    "home_title": "Home",
    "intro": "",
    "hero_image": "",
    "hero_alt": "",
    "latest_collection": "posts",
    "latest_heading": "Latest Updates",
    "latest_count": 3,
    "about_title": "About",
    "about_default": "",
    "about_emblem": "",
    "about_emblem_alt": "",
    "collections": {
        "posts": {
            "page": "news.html",
            "title": "News",
            "heading": "Latest News",
            "search": "Search news...",
        },
        "announcements": {
            "page": "announcements.html",
            "title": "Announcements",
            "heading": "Announcements",
            "search": "Search announcements...",
        },
    },
    # Optional pages rendered only when content/<name>.md exists.
    "pages": ["contact", "gallery"],
}


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Every page rendered from Markdown.
        output_dir: Directory where the site was built.
        written: Every file written, generated pages and copied files alike.
    """

    pages: list[Page]
    output_dir: Path
    written: list[Path]


@dataclass
class BuildContext:
    """State carried through one build.

    Attributes:
        project_root: Root directory of the project.
        output_dir: Directory the site is written to.
        config: Configuration with defaults applied.
        templates: Engine for the project's page templates.
        partials: Renderer for the bundled HTML fragments.
        page_builder: Builds Page objects from Markdown files.
        collections: Sorted pages per collection name.
        pages: Every page rendered so far.
        written: Every file written so far.
    """

    project_root: Path
    output_dir: Path
    config: dict[str, Any]
    templates: TemplateEngine
    partials: PartialRenderer
    page_builder: DefaultPageBuilder
    collections: dict[str, PageCollection] = field(default_factory=dict)
    pages: list[Page] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def content_dir(self) -> Path:
        return self.project_root / self.config["content_dir"]

    def write(self, relative: str, html: str) -> Path:
        """Write a generated file below the output directory."""
        target = self.output_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        self.written.append(target)
        return target

    def render(self, name: str, values: Mapping[str, Any]) -> str:
        """Render a project template, reporting a missing one as a BuildError."""
        try:
            return self.templates.render(name, values)
        except TemplateNotFoundError as exc:
            raise BuildError(
                self.templates.templates_dir / name, "Template not found", exc
            ) from exc


def load_config(project_root: Path) -> dict[str, Any]:
    """Load site configuration from bramble.yaml.

    Top-level keys in the file replace the defaults wholesale, so a
    ``collections`` mapping in the file replaces both default collections.
    Keys left empty in the file keep their defaults, and an empty collection
    entry gets the default listing settings.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
            if isinstance(loaded, dict):
                config.update({k: v for k, v in loaded.items() if v is not None})
    config["collections"] = {
        name: settings or {} for name, settings in config["collections"].items()
    }
    return config


def build_site(
    project_root: Path,
    output_dir_override: Path | None = None,
    clean_output: bool | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        output_dir_override: Optional path to write the build output instead of config output_dir.
        clean_output: Whether to wipe the output directory first. Defaults
            to the ``clean_output`` config value.

    Returns:
        BuildResult containing all pages, the output directory and written files.
    """
    config = load_config(project_root)
    output_dir = output_dir_override or (project_root / config["output_dir"])
    if clean_output is None:
        clean_output = bool(config.get("clean_output"))
    if clean_output:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)

    extractor = CompositeMetadataExtractor(summary_length=int(config["summary_length"]))
    ctx = BuildContext(
        project_root=project_root,
        output_dir=output_dir,
        config=config,
        templates=TemplateEngine(project_root / config["templates_dir"]),
        partials=PartialRenderer(),
        page_builder=DefaultPageBuilder(metadata_extractor=extractor),
    )

    for name in config["collections"]:
        (output_dir / name).mkdir(parents=True, exist_ok=True)
        ctx.collections[name] = _build_collection(ctx, name)

    for name, settings in config["collections"].items():
        _write_listing(ctx, name, settings)
    _write_home(ctx)
    _write_about(ctx)
    for name in config["pages"]:
        _write_optional_page(ctx, name)

    pipeline = AssetPipeline(
        project_root, output_dir, config["static_dir"], config["admin_dir"]
    )
    ctx.written.extend(pipeline.run())
    return BuildResult(pages=ctx.pages, output_dir=output_dir, written=ctx.written)


def _build_collection(ctx: BuildContext, name: str) -> PageCollection:
    """Render every page of a collection and return them newest first."""
    processor = ContentProcessor(
        ctx.content_dir / name, name, page_builder=ctx.page_builder
    )
    pages = processor.load()
    for page in pages:
        rendered = ctx.render(
            POST_TEMPLATE,
            {"title": page.title, "date": page.date, "content": page.content},
        )
        ctx.write(f"{name}/{page.slug}.html", rendered)
    ctx.pages.extend(pages)
    return PageCollection(pages).sorted()


def _write_listing(ctx: BuildContext, name: str, settings: Mapping[str, Any]) -> None:
    """Write the listing page of a collection."""
    content = ctx.partials.listing(
        heading=settings.get("heading", titleize(name)),
        placeholder=settings.get("search", "Search..."),
        pages=ctx.collections[name],
    )
    html = ctx.render(
        LAYOUT_TEMPLATE,
        {"title": settings.get("title", titleize(name)), "content": content},
    )
    ctx.write(settings.get("page", f"{name}.html"), html)


def _write_home(ctx: BuildContext) -> None:
    """Write index.html with the intro and the latest pages."""
    config = ctx.config
    source = config["latest_collection"]
    latest = ctx.collections.get(source, PageCollection([])).latest(
        int(config["latest_count"])
    )
    content = ctx.partials.home(
        intro=config["intro"],
        hero_image=config["hero_image"] or None,
        hero_alt=config["hero_alt"],
        latest=latest,
        latest_heading=config["latest_heading"],
    )
    html = ctx.render(LAYOUT_TEMPLATE, {"title": config["home_title"], "content": content})
    ctx.write("index.html", html)


def _write_about(ctx: BuildContext) -> None:
    """Write about.html from about.md, or from the configured default."""
    config = ctx.config
    content = config["about_default"]
    page = load_page(ctx.content_dir / "about.md", ctx.page_builder)
    if page is not None:
        ctx.pages.append(page)
        content = page.content
    if config["about_emblem"]:
        content += ctx.partials.image(
            config["about_emblem"], config["about_emblem_alt"], "about-emblem"
        )
    html = ctx.render(LAYOUT_TEMPLATE, {"title": config["about_title"], "content": content})
    ctx.write("about.html", html)


def _write_optional_page(ctx: BuildContext, name: str) -> None:
    """Write <name>.html when content/<name>.md exists."""
    path = ctx.content_dir / f"{name}.md"
    page = load_page(path, ctx.page_builder)
    if page is None:
        return
    ctx.pages.append(page)
    title = page.frontmatter.get("title") or titleize(path.name)
    html = ctx.render(LAYOUT_TEMPLATE, {"title": title, "content": page.content})
    ctx.write(f"{name}.html", html)
