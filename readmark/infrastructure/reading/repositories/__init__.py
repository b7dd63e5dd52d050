from .bookmark_repository import BookmarkRepository
from .highlight_repository import HighlightRepository

__all__ = ["BookmarkRepository", "HighlightRepository"]
