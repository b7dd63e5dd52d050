"""Reading module domain layer."""

from .entities import Bookmark, Highlight
from .services import PositionOrdering

__all__ = [
    "Bookmark",
    "Highlight",
    "PositionOrdering",
]
