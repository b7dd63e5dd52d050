"""Common value objects shared across all domain modules."""

from .highlight_color import HIGHLIGHT_FILLS, HighlightColor
from .ids import BookId, BookmarkId, HighlightId
from .xpoint import PositionRange, XPoint

__all__ = [
    # IDs
    "BookId",
    "BookmarkId",
    "HighlightId",
    # Style
    "HIGHLIGHT_FILLS",
    "HighlightColor",
    # Positions
    "PositionRange",
    "XPoint",
]
