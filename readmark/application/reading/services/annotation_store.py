"""Application service for bookmark and highlight persistence."""

import structlog

from readmark.application.reading.protocols.bookmark_repository import (
    BookmarkRepositoryProtocol,
)
from readmark.application.reading.protocols.highlight_repository import (
    HighlightRepositoryProtocol,
)
from readmark.domain.common.value_objects import (
    BookId,
    BookmarkId,
    HighlightColor,
    HighlightId,
    PositionRange,
)
from readmark.domain.reading.entities.bookmark import Bookmark
from readmark.domain.reading.entities.highlight import Highlight
from readmark.domain.reading.exceptions import HighlightNotFoundError
from readmark.schemas.annotation_schemas import HighlightUpdate

logger = structlog.get_logger(__name__)


class AnnotationStore:
    """
    CRUD for bookmarks and highlights, scoped by book.

    Every write returns the persisted state. Deduplication of bookmarks is
    the caller's job (see BookmarkService).
    """

    def __init__(
        self,
        bookmark_repository: BookmarkRepositoryProtocol,
        highlight_repository: HighlightRepositoryProtocol,
    ) -> None:
        self.bookmark_repository = bookmark_repository
        self.highlight_repository = highlight_repository

    # Bookmarks

    def list_bookmarks(self, book_id: int) -> list[Bookmark]:
        """All bookmarks of a book, in no particular order."""
        return self.bookmark_repository.find_by_book(BookId(book_id))

    def create_bookmark(self, book_id: int, position: str, excerpt: str = "") -> Bookmark:
        """
        Persist a new bookmark.

        Args:
            book_id: ID of the book
            position: Position token of the bookmarked location
            excerpt: Text shown for the bookmark in lists

        Returns:
            The saved bookmark with its assigned ID
        """
        bookmark = Bookmark.create(book_id=BookId(book_id), position=position, excerpt=excerpt)
        bookmark = self.bookmark_repository.save(bookmark)

        logger.info(
            "created_bookmark",
            bookmark_id=bookmark.id.value,
            book_id=book_id,
            position=position,
        )
        return bookmark

    def delete_bookmark(self, bookmark_id: int) -> bool:
        """
        Delete a bookmark (idempotent operation).

        Returns:
            True if a bookmark was removed, False if none existed
        """
        deleted = self.bookmark_repository.delete(BookmarkId(bookmark_id))

        if deleted:
            logger.info("deleted_bookmark", bookmark_id=bookmark_id)
        else:
            logger.info("bookmark_not_found_for_deletion", bookmark_id=bookmark_id)
        return deleted

    # Highlights

    def list_highlights(self, book_id: int) -> list[Highlight]:
        """All highlights of a book, in no particular order."""
        return self.highlight_repository.find_by_book(BookId(book_id))

    def get_highlight(self, highlight_id: int) -> Highlight:
        """
        Load a single highlight.

        Raises:
            HighlightNotFoundError: If no highlight has this ID
        """
        highlight = self.highlight_repository.find_by_id(HighlightId(highlight_id))
        if highlight is None:
            raise HighlightNotFoundError(highlight_id)
        return highlight

    def find_highlight_by_range(
        self, book_id: int, position_range: PositionRange
    ) -> Highlight | None:
        """The highlight of a book drawn over exactly this range, if any."""
        return self.highlight_repository.find_by_range(BookId(book_id), position_range)

    def create_highlight(
        self,
        book_id: int,
        position_range: PositionRange,
        text: str,
        color: HighlightColor,
        note: str | None = None,
    ) -> Highlight:
        """
        Persist a new highlight immediately.

        Args:
            book_id: ID of the book
            position_range: Start and end position of the selection
            text: Snapshot of the selected text (at most 500 characters)
            color: Chosen color
            note: Optional note

        Returns:
            The saved highlight with its assigned ID
        """
        highlight = Highlight.create(
            book_id=BookId(book_id),
            position_range=position_range,
            text=text,
            color=color,
            note=note,
        )
        highlight = self.highlight_repository.save(highlight)

        logger.info(
            "created_highlight",
            highlight_id=highlight.id.value,
            book_id=book_id,
            color=str(color),
        )
        return highlight

    def update_highlight(self, highlight_id: int, update: HighlightUpdate) -> Highlight:
        """
        Apply a partial color/note update.

        The position range and text of a highlight never change.

        Raises:
            HighlightNotFoundError: If no highlight has this ID
        """
        highlight = self.get_highlight(highlight_id)

        if update.changes_color and update.color is not None:
            highlight.change_color(update.color)
        if update.changes_note:
            highlight.update_note(update.note)

        highlight = self.highlight_repository.save(highlight)

        logger.info(
            "updated_highlight",
            highlight_id=highlight_id,
            fields=sorted(update.model_fields_set),
        )
        return highlight

    def delete_highlight(self, highlight_id: int) -> bool:
        """
        Delete a highlight (idempotent operation).

        Returns:
            True if a highlight was removed, False if none existed
        """
        deleted = self.highlight_repository.delete(HighlightId(highlight_id))

        if deleted:
            logger.info("deleted_highlight", highlight_id=highlight_id)
        else:
            logger.info("highlight_not_found_for_deletion", highlight_id=highlight_id)
        return deleted
