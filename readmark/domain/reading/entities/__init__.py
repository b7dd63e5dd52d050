"""Reading module entities."""

from .bookmark import Bookmark
from .highlight import Highlight

__all__ = ["Bookmark", "Highlight"]
