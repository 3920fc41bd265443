"""Template rendering for Bramble.

Page templates are plain HTML files with ``{{ name }}`` placeholders. They are
filled by a single regex pass: known names are substituted, unknown ones are
left in the output untouched, and substituted values are never re-scanned.

The HTML fragments Bramble generates itself (listing cards, the search box,
the home page intro) come from Jinja2 partials bundled with the package.

Key functions and classes:
- render_template: Substitutes placeholders in a template string.
- TemplateEngine: Loads named templates from a project directory.
- PartialRenderer: Renders the bundled Jinja2 partials.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .content import Page

__all__ = [
    "PARTIALS_DIR",
    "PartialRenderer",
    "TemplateEngine",
    "TemplateNotFoundError",
    "render_template",
]

PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")

PARTIALS_DIR = Path(__file__).parent / "templates" / "partials"


class TemplateNotFoundError(FileNotFoundError):
    """Raised when a named template does not exist in the templates directory."""

    def __init__(self, name: str, templates_dir: Path):
        self.name = name
        self.templates_dir = templates_dir
        super().__init__(f"Template {name!r} not found in {templates_dir}")


def render_template(template: str, values: Mapping[str, Any]) -> str:
    """Replace ``{{ name }}`` placeholders with values from a mapping.

    Args:
        template: Template text.
        values: Substitution values; each is converted with ``str()``.

    Returns:
        The rendered text. Placeholders whose name is missing from
        ``values`` are kept verbatim.

    Examples:
        >>> render_template("Hi {{ name }}!", {"name": "Bob"})
        'Hi Bob!'

        >>> render_template("Hi {{ name }}!", {})
        'Hi {{ name }}!'
    """

    def repl(match: re.Match) -> str:
        name = match.group(1)
        if name not in values:
            return match.group(0)
        return str(values[name])

    return PLACEHOLDER_RE.sub(repl, template)


class TemplateEngine:
    """Loads and renders named templates from a directory.

    Template text is read once per name and cached for the lifetime of the
    engine.

    Attributes:
        templates_dir: Directory holding the template files.
    """

    def __init__(self, templates_dir: Path):
        self.templates_dir = templates_dir
        self._cache: dict[str, str] = {}

    def get_template(self, name: str) -> str:
        """Return the raw text of a template.

        Args:
            name: File name relative to the templates directory.

        Returns:
            Template text.

        Raises:
            TemplateNotFoundError: If the file does not exist.
        """
        if name not in self._cache:
            path = self.templates_dir / name
            if not path.is_file():
                raise TemplateNotFoundError(name, self.templates_dir)
            self._cache[name] = path.read_text(encoding="utf-8")
        return self._cache[name]

    def render(self, name: str, values: Mapping[str, Any]) -> str:
        """Render a named template with the given values."""
        return render_template(self.get_template(name), values)


class PartialRenderer:
    """Renders the Jinja2 partials used for generated page fragments.

    Page titles, dates and summaries are autoescaped. HTML supplied by the
    site configuration (the home page intro) is passed through as Markup.
    """

    def __init__(self, partials_dir: Path | None = None):
        self.env = Environment(
            loader=FileSystemLoader(str(partials_dir or PARTIALS_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=False,
        )

    def cards(self, pages: Iterable[Page]) -> str:
        """Render one card per page, linking to the page URL."""
        template = self.env.get_template("card.html")
        return "\n".join(template.render(page=page) for page in pages)

    def search(self, placeholder: str) -> str:
        """Render the client-side search box."""
        return self.env.get_template("search.html").render(placeholder=placeholder)

    def listing(self, heading: str, placeholder: str, pages: Iterable[Page]) -> str:
        """Render a collection listing: heading, search box and cards."""
        return self.env.get_template("listing.html").render(
            heading=heading,
            search=Markup(self.search(placeholder)),
            cards=Markup(self.cards(pages)),
        )

    def home(
        self,
        intro: str,
        hero_image: str | None,
        latest: Iterable[Page],
        latest_heading: str,
        hero_alt: str = "",
    ) -> str:
        """Render the home page body: hero, intro HTML and latest cards."""
        return self.env.get_template("home.html").render(
            hero_image=hero_image,
            hero_alt=hero_alt,
            intro=Markup(intro),
            latest_heading=latest_heading,
            cards=Markup(self.cards(latest)),
        )

    def image(self, src: str, alt: str, css_class: str) -> str:
        """Render a wrapped image, as used for the about page emblem."""
        return self.env.get_template("image.html").render(
            src=src, alt=alt, css_class=css_class
        )
