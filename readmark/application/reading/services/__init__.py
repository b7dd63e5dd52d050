from .annotation_store import AnnotationStore
from .bookmark_service import BookmarkService
from .highlight_session import (
    ColorPicking,
    Editing,
    HighlightClicked,
    HighlightSession,
    Idle,
    SessionState,
)

__all__ = [
    "AnnotationStore",
    "BookmarkService",
    "ColorPicking",
    "Editing",
    "HighlightClicked",
    "HighlightSession",
    "Idle",
    "SessionState",
]
