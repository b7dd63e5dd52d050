"""Application service for toggling and listing bookmarks."""

import structlog

from readmark.application.reading.services.annotation_store import AnnotationStore
from readmark.config import get_settings
from readmark.domain.reading.entities.bookmark import Bookmark
from readmark.domain.reading.entities.highlight import Highlight
from readmark.domain.reading.services.position_ordering import (
    PositionComparator,
    PositionOrdering,
    is_location_bookmarked,
    sort_bookmarks_by_position,
    sort_highlights_by_position,
)

logger = structlog.get_logger(__name__)


class BookmarkService:
    """
    Bookmark toggle and position-sorted listings on top of the store.

    With an open document, positions are ordered as they appear in the book.
    Without one, the structural xpoint order is used.
    """

    def __init__(
        self,
        store: AnnotationStore,
        document: PositionComparator | None = None,
        ordering: PositionOrdering | None = None,
        excerpt_max_length: int | None = None,
    ) -> None:
        self.store = store
        self.ordering = ordering or PositionOrdering(document)
        self.excerpt_max_length = (
            excerpt_max_length
            if excerpt_max_length is not None
            else get_settings().BOOKMARK_EXCERPT_MAX_LENGTH
        )

    def toggle_bookmark(
        self, book_id: int, position: str | None, excerpt: str = ""
    ) -> Bookmark | None:
        """
        Bookmark the current location, or remove the bookmark already there.

        Args:
            book_id: ID of the book
            position: Current reading position, None before the first render
            excerpt: Text near the position, trimmed to the excerpt limit

        Returns:
            The created bookmark, or None when one was removed or there is no
            current position
        """
        if position is None:
            logger.debug("toggle_bookmark_without_position", book_id=book_id)
            return None

        existing = is_location_bookmarked(
            position, self.store.list_bookmarks(book_id), self.ordering
        )
        if existing is not None:
            self.store.delete_bookmark(existing.id.value)
            return None

        return self.store.create_bookmark(
            book_id, position, excerpt[: self.excerpt_max_length].strip()
        )

    def is_bookmarked(self, book_id: int, position: str | None) -> bool:
        """Whether a bookmark sits exactly at position."""
        bookmarks = self.store.list_bookmarks(book_id)
        return is_location_bookmarked(position, bookmarks, self.ordering) is not None

    def sorted_bookmarks(self, book_id: int) -> list[Bookmark]:
        """Bookmarks of a book, most advanced position first."""
        return sort_bookmarks_by_position(self.store.list_bookmarks(book_id), self.ordering)

    def sorted_highlights(self, book_id: int) -> list[Highlight]:
        """Highlights of a book, most advanced range start first."""
        return sort_highlights_by_position(self.store.list_highlights(book_id), self.ordering)
