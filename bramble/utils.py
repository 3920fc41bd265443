"""Utility functions for Bramble.

This module contains helpers shared by the build, content and asset modules:
date parsing for sorting, directory preparation, and tree copying.

Key functions:
    parse_date: Parse a front matter date string for sorting.
    ensure_clean_dir: Ensure a directory exists and is empty.
    copy_tree: Copy a directory tree, merging into the destination.
    titleize: Convert a filename to a human-readable title.
"""

from __future__ import annotations

import re
import shutil
from datetime import datetime, timezone
from pathlib import Path

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)


def parse_date(value: str) -> datetime | None:
    """Parse a date string from front matter.

    Accepts ISO 8601 dates and datetimes plus a few common written forms.
    Timezone-aware values are converted to naive UTC so all results compare.

    Args:
        value: Raw date string.

    Returns:
        datetime object, or None if the value is empty or not understood.

    Examples:
        >>> parse_date("2024-01-15")
        datetime.datetime(2024, 1, 15, 0, 0)

        >>> parse_date("soon") is None
        True
    """
    value = value.strip()
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def titleize(filename: str) -> str:
    """Convert a filename to a human-readable title.

    Examples:
        >>> titleize("getting-started.md")
        'Getting Started'
    """
    base = Path(filename).stem
    words = re.split(r"[\s\-_]+", base)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def copy_tree(source: Path, dest: Path) -> list[Path]:
    """Copy every file under ``source`` into ``dest``.

    Existing files in ``dest`` are overwritten, other files are left alone.

    Args:
        source: Directory to copy from.
        dest: Directory to copy into; created when missing.

    Returns:
        Destination paths of the copied files.
    """
    copied: list[Path] = []
    for item in sorted(source.rglob("*")):
        if item.is_dir():
            continue
        target = dest / item.relative_to(source)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(item, target)
        copied.append(target)
    return copied
