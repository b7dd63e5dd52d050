"""
Domain service for ordering position tokens.

Wraps a comparison primitive (structural xpoint ordering by default, or a
document's DOM-order comparator) and adds the anchor-equality and stable
sorting rules used for bookmarks and highlights.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import IntEnum
from functools import cmp_to_key
from typing import Protocol, TypeVar

import structlog

from readmark.domain.common.value_objects.xpoint import XPoint
from readmark.domain.reading.entities.bookmark import Bookmark
from readmark.domain.reading.entities.highlight import Highlight
from readmark.exceptions import ReadmarkError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Ordering(IntEnum):
    """Relative order of two positions."""

    BEFORE = -1
    SAME = 0
    AFTER = 1

    @classmethod
    def from_int(cls, value: int) -> Ordering:
        if value < 0:
            return cls.BEFORE
        if value > 0:
            return cls.AFTER
        return cls.SAME


class PositionComparator(Protocol):
    """Comparison primitive supplied by whatever understands the tokens."""

    def compare(self, first: str, second: str) -> int:
        """Negative, zero or positive as first is before, at or after second.

        Raises:
            ReadmarkError: If the two tokens cannot be ordered.
        """
        ...

    def section_index(self, position: str) -> int:
        """1-based index of the section holding the position."""
        ...


class XPointComparator:
    """Structural comparator over xpoint tokens. Needs no document access."""

    def compare(self, first: str, second: str) -> int:
        return XPoint.parse(first).compare_to(XPoint.parse(second))

    def section_index(self, position: str) -> int:
        return XPoint.parse(position).section_index


class PositionOrdering:
    """Ordering rules over position tokens."""

    def __init__(self, comparator: PositionComparator | None = None) -> None:
        self.comparator: PositionComparator = comparator or XPointComparator()

    def compare(self, first: str, second: str) -> Ordering:
        """
        Order two positions.

        Raises:
            ReadmarkError: If the comparator cannot order the tokens. Callers
                treat this as "cannot order".
        """
        return Ordering.from_int(self.comparator.compare(first, second))

    def same_anchor(self, first: str, second: str) -> bool:
        """
        True iff both tokens sit in the same section at the same position.

        This is exact-position equality, not proximity: positions that differ
        only by reflow rounding are distinct.
        """
        if first == second:
            return True

        try:
            if self.comparator.section_index(first) != self.comparator.section_index(second):
                return False
            return self.compare(first, second) is Ordering.SAME
        except ReadmarkError as e:
            logger.debug("positions_not_comparable", first=first, second=second, error=str(e))
            return False

    def sort_descending_by_position(
        self, items: Iterable[T], extract_position: Callable[[T], str]
    ) -> list[T]:
        """
        Stable sort putting the most advanced position first.

        Items whose positions cannot be ordered against each other are treated
        as equal and keep their original relative order.
        """

        def descending(first: T, second: T) -> int:
            try:
                return -self.comparator.compare(extract_position(first), extract_position(second))
            except ReadmarkError:
                return 0

        return sorted(items, key=cmp_to_key(descending))

    def sort_ascending_by_position(
        self, items: Iterable[T], extract_position: Callable[[T], str]
    ) -> list[T]:
        """Stable sort putting the earliest position first."""

        def ascending(first: T, second: T) -> int:
            try:
                return self.comparator.compare(extract_position(first), extract_position(second))
            except ReadmarkError:
                return 0

        return sorted(items, key=cmp_to_key(ascending))


def sort_bookmarks_by_position(
    bookmarks: Iterable[Bookmark], ordering: PositionOrdering | None = None
) -> list[Bookmark]:
    """Bookmarks ordered most-advanced-in-book first."""
    ordering = ordering or PositionOrdering()
    return ordering.sort_descending_by_position(bookmarks, lambda b: b.position)


def sort_highlights_by_position(
    highlights: Iterable[Highlight], ordering: PositionOrdering | None = None
) -> list[Highlight]:
    """Highlights ordered most-advanced-in-book first, by range start."""
    ordering = ordering or PositionOrdering()
    return ordering.sort_descending_by_position(highlights, lambda h: h.position_range.start)


def is_location_bookmarked(
    position: str | None,
    bookmarks: Sequence[Bookmark],
    ordering: PositionOrdering | None = None,
) -> Bookmark | None:
    """Return the bookmark sitting exactly at position, if any."""
    if not position:
        return None

    ordering = ordering or PositionOrdering()
    for bookmark in bookmarks:
        if ordering.same_anchor(position, bookmark.position):
            return bookmark
    return None
