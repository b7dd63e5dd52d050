from sqlalchemy import select
from sqlalchemy.orm import Session

from readmark.domain.common.value_objects.ids import BookId
from readmark.domain.library.entities.book import Book
from readmark.exceptions import BookNotFoundError
from readmark.infrastructure.library.mappers.book_mapper import BookMapper
from readmark.infrastructure.persistence import translate_errors
from readmark.models import Book as BookORM


class BookRepository:
    """Domain-centric repository for Book persistence."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = BookMapper()

    def find_by_id(self, book_id: BookId) -> Book | None:
        """Find book by ID."""
        with translate_errors(self.db, "find_book"):
            orm_model = self.db.get(BookORM, book_id.value)

        if not orm_model:
            return None

        return self.mapper.to_domain(orm_model)

    def save(self, book: Book) -> Book:
        """Persist book to database."""
        with translate_errors(self.db, "save_book"):
            if book.id.value == 0:
                # Create new
                orm_model = self.mapper.to_orm(book)
                self.db.add(orm_model)
            else:
                # Update existing
                stmt = select(BookORM).where(BookORM.id == book.id.value)
                existing_orm = self.db.execute(stmt).scalar_one_or_none()
                if existing_orm is None:
                    raise BookNotFoundError(book.id.value)
                orm_model = self.mapper.to_orm(book, existing_orm)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, book_id: BookId) -> bool:
        """
        Hard delete a book from the database.

        Bookmarks and highlights go with it through ON DELETE CASCADE.

        Returns:
            True if deleted, False if not found
        """
        with translate_errors(self.db, "delete_book"):
            book_orm = self.db.get(BookORM, book_id.value)
            if not book_orm:
                return False

            self.db.delete(book_orm)
            self.db.commit()
        return True
