"""Static file copying for Bramble.

Bramble does not process assets. It copies two trees into the output as they
are: the project's static directory (images, stylesheets, scripts) into the
output root, and the CMS admin directory into ``<output>/admin``.

Key components:
- AssetPipeline: Copies the configured trees into the output directory.
"""

from __future__ import annotations

from pathlib import Path

from .utils import copy_tree


class AssetPipeline:
    """Copies static and admin files into the built site.

    Attributes:
        project_root (Path): Root directory of the project.
        output_dir (Path): Directory where the site is written.
        static_dir (Path): Source of files copied into the output root.
        admin_dir (Path): Source of files copied into ``output/admin``.
    """

    def __init__(
        self,
        project_root: Path,
        output_dir: Path,
        static_dir: str = "static",
        admin_dir: str = "admin",
    ):
        """Initialize the asset pipeline.

        Args:
            project_root: Root directory of the Bramble project.
            output_dir: Directory where built files will be placed.
            static_dir: Static directory name, relative to the project root.
            admin_dir: Admin directory name, relative to the project root.
        """
        self.project_root = project_root
        self.output_dir = output_dir
        self.static_dir = project_root / static_dir
        self.admin_dir = project_root / admin_dir

    def run(self) -> list[Path]:
        """Copy every configured tree that exists.

        Returns:
            Paths of all files written to the output directory.
        """
        copied: list[Path] = []
        if self.static_dir.is_dir():
            copied.extend(copy_tree(self.static_dir, self.output_dir))
        if self.admin_dir.is_dir():
            copied.extend(copy_tree(self.admin_dir, self.output_dir / "admin"))
        return copied
