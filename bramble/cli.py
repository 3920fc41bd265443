"""Command-line interface for Bramble.

This module defines the CLI commands using Click framework.
It provides commands for creating new projects, building sites, and previewing them.

Commands:
- new: Scaffold a new Bramble project.
- build: Build the site into the output directory.
- serve: Build the site and serve it locally.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import click

from . import __version__

# Path to the starter project
_STARTER_DIR = Path(__file__).parent / "templates" / "starter"


@click.group()
@click.version_option(version=__version__, prog_name="bramble")
def cli():
    """Bramble static site generator."""


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Bramble project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Bramble site created at {target}")


@cli.command()
@click.option("--clean", is_flag=True, help="Empty the output directory first")
def build(clean: bool):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site

    try:
        result = build_site(project_root, clean_output=True if clean else None)
    except BuildError as exc:
        _report_build_error(exc, project_root)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


@cli.command()
@click.option(
    "--port",
    type=int,
    required=False,
    help="Port to run the preview server (overrides bramble.yaml)",
)
def serve(port: int | None):
    """Build the site and serve it locally."""
    project_root = Path.cwd()
    from .build import BuildError
    from .server import PreviewServer

    server = PreviewServer(project_root, http_port=port)
    click.echo(f"Serving {server.output_dir} at http://localhost:{server.http_port}")
    try:
        server.start()
    except BuildError as exc:
        _report_build_error(exc, project_root)
        raise SystemExit(1) from None


def _report_build_error(exc, project_root: Path) -> None:
    """Print a build failure with the offending file."""
    try:
        rel_path = exc.source_path.relative_to(project_root)
    except ValueError:
        rel_path = exc.source_path
    click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
    click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Bramble project.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _STARTER_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_STARTER_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
