"""Reading module domain exceptions."""

from readmark.domain.common.exceptions import EntityNotFoundError


class HighlightNotFoundError(EntityNotFoundError):
    """Raised when a highlight cannot be found."""

    def __init__(self, highlight_id: int) -> None:
        super().__init__("Highlight", highlight_id)


class BookmarkNotFoundError(EntityNotFoundError):
    """Raised when a bookmark cannot be found."""

    def __init__(self, bookmark_id: int) -> None:
        super().__init__("Bookmark", bookmark_id)
