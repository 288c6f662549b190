from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .content import ContentItem


class PostCollection(Sequence[ContentItem]):
    """Lightweight helper for working with lists of content items."""

    def __init__(self, items: Iterable[ContentItem]):
        self._items = list(items)

    def __iter__(self) -> Iterator[ContentItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, item):
        return self._items[item]

    def sorted(self, reverse: bool = True) -> PostCollection:
        """Sort by publication date, then by slug.

        Args:
            reverse: If True (default), newest first.

        Returns:
            A new PostCollection with sorted items.
        """
        ordered = sorted(self._items, key=lambda p: p.slug)
        ordered.sort(key=lambda p: p.pub_date, reverse=reverse)
        return PostCollection(ordered)

    def latest(self, count: int = 6) -> PostCollection:
        return PostCollection(self.sorted()[:count])

    def by_year(self) -> dict[int, PostCollection]:
        """Group items by publication year, newest year first."""
        years: dict[int, list[ContentItem]] = {}
        for item in self.sorted():
            years.setdefault(item.pub_date.year, []).append(item)
        return {year: PostCollection(items) for year, items in years.items()}

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._items)} posts)"
