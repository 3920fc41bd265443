"""Bramble static site generator.

This package turns a folder of Markdown files with ``---`` front matter into a
deployable site tree. Content is rendered by a small, restricted Markdown
converter and assembled with ``{{ name }}`` string templates.

The core (front matter parsing, Markdown rendering, template substitution) is
pure and works on in-memory strings. The build, asset copying, preview server
and CLI modules drive the core against the file system.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
