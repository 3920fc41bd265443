"""Page collections for Bramble.

PageCollection wraps a list of pages and orders them newest first for
listing and home pages.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime

from .content import Page
from .utils import parse_date


class PageCollection(Sequence[Page]):
    """Lightweight helper for working with lists of Pages in the build."""

    def __init__(self, pages: Iterable[Page]):
        self._pages = list(pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __getitem__(self, item):
        return self._pages[item]

    def sorted(self, reverse: bool = True) -> PageCollection:
        """Sort pages by their front matter date.

        Pages with a parseable date come first, newest first by default.
        Pages without one keep their original relative order after them.

        Args:
            reverse: If True (default), newest first. If False, oldest first.

        Returns:
            A new PageCollection with sorted pages.
        """
        dated: list[tuple[datetime, Page]] = []
        undated: list[Page] = []
        for page in self._pages:
            date = parse_date(page.date)
            if date is None:
                undated.append(page)
            else:
                dated.append((date, page))
        dated.sort(key=lambda pair: pair[0], reverse=reverse)
        return PageCollection([page for _, page in dated] + undated)

    def latest(self, count: int = 3) -> PageCollection:
        return PageCollection(self.sorted()[:count])

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PageCollection({len(self._pages)} pages)"
