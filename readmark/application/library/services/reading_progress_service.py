"""Application service for remembering where the reader left off."""

import structlog

from readmark.application.library.protocols.book_repository import BookRepositoryProtocol
from readmark.domain.common.value_objects.ids import BookId
from readmark.domain.library.entities.book import Book
from readmark.exceptions import BookNotFoundError

logger = structlog.get_logger(__name__)


class ReadingProgressService:
    """Records and restores the last reading position of a book."""

    def __init__(self, book_repository: BookRepositoryProtocol) -> None:
        self.book_repository = book_repository

    def _get_book(self, book_id: int) -> Book:
        book = self.book_repository.find_by_id(BookId(book_id))
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def save_progress(self, book_id: int, position: str) -> Book:
        """
        Store the current reading position of a book.

        Args:
            book_id: ID of the book
            position: Position token of the first visible location

        Returns:
            The updated book

        Raises:
            BookNotFoundError: If the book does not exist
            DomainError: If the position is empty
        """
        book = self._get_book(book_id)
        if book.last_position == position:
            return book

        book.record_position(position)
        book = self.book_repository.save(book)

        logger.debug("saved_reading_progress", book_id=book_id, position=position)
        return book

    def last_position(self, book_id: int) -> str | None:
        """
        Position to reopen the book at, or None to start from the beginning.

        Raises:
            BookNotFoundError: If the book does not exist
        """
        return self._get_book(book_id).last_position
