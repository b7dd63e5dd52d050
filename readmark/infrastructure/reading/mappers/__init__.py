from .bookmark_mapper import BookmarkMapper
from .highlight_mapper import HighlightMapper

__all__ = ["BookmarkMapper", "HighlightMapper"]
