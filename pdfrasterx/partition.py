"""Split a page window into contiguous chunks for concurrent workers."""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidPageRangeError


@dataclass(frozen=True)
class PageRange:
    """Represents an inclusive, 1-based page range."""

    first: int
    last: int

    def __post_init__(self) -> None:
        if self.first < 1 or self.first > self.last:
            raise InvalidPageRangeError(self.first, self.last)

    @property
    def page_count(self) -> int:
        return self.last - self.first + 1

    def label(self) -> str:
        """Return a human-readable label for the range."""

        if self.first == self.last:
            return f"page {self.first}"
        return f"pages {self.first}-{self.last}"


def partition_pages(first: int, last: int, concurrency: int) -> list[PageRange]:
    """Distribute pages ``first..last`` over at most *concurrency* ranges.

    The first ``total % workers`` ranges receive one extra page so sizes
    never differ by more than one. Ranges are contiguous and ordered.
    """

    if first < 1 or first > last:
        raise InvalidPageRangeError(first, last)

    total = last - first + 1
    workers = min(max(concurrency, 1), total)
    base, remainder = divmod(total, workers)

    ranges: list[PageRange] = []
    current = first
    for index in range(workers):
        size = base + (1 if index < remainder else 0)
        ranges.append(PageRange(current, current + size - 1))
        current += size
    return ranges


__all__ = ["PageRange", "partition_pages"]
