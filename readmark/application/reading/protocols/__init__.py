from .bookmark_repository import BookmarkRepositoryProtocol
from .highlight_repository import HighlightRepositoryProtocol
from .overlay import OVERLAY_KIND_HIGHLIGHT, OverlayProtocol, SelectionProtocol

__all__ = [
    "OVERLAY_KIND_HIGHLIGHT",
    "BookmarkRepositoryProtocol",
    "HighlightRepositoryProtocol",
    "OverlayProtocol",
    "SelectionProtocol",
]
