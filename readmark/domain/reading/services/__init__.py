from .position_ordering import (
    Ordering,
    PositionComparator,
    PositionOrdering,
    XPointComparator,
    is_location_bookmarked,
    sort_bookmarks_by_position,
    sort_highlights_by_position,
)

__all__ = [
    "Ordering",
    "PositionComparator",
    "PositionOrdering",
    "XPointComparator",
    "is_location_bookmarked",
    "sort_bookmarks_by_position",
    "sort_highlights_by_position",
]
