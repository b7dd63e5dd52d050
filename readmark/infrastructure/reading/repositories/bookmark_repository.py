"""Repository for Bookmark domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from readmark.domain.common.value_objects.ids import BookId, BookmarkId
from readmark.domain.reading.entities.bookmark import Bookmark
from readmark.infrastructure.persistence import translate_errors
from readmark.infrastructure.reading.mappers.bookmark_mapper import BookmarkMapper
from readmark.models import Bookmark as BookmarkORM


class BookmarkRepository:
    """Repository for Bookmark domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = BookmarkMapper()

    def find_by_id(self, bookmark_id: BookmarkId) -> Bookmark | None:
        """
        Find a bookmark by ID.

        Args:
            bookmark_id: The bookmark ID

        Returns:
            Bookmark entity if found, None otherwise
        """
        with translate_errors(self.db, "find_bookmark"):
            orm_model = self.db.get(BookmarkORM, bookmark_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_book(self, book_id: BookId) -> list[Bookmark]:
        """
        Get all bookmarks for a book.

        Args:
            book_id: The book ID

        Returns:
            List of bookmark entities in insertion order
        """
        stmt = (
            select(BookmarkORM)
            .where(BookmarkORM.book_id == book_id.value)
            .order_by(BookmarkORM.id)
        )
        with translate_errors(self.db, "list_bookmarks"):
            orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def save(self, bookmark: Bookmark) -> Bookmark:
        """
        Save a bookmark entity.

        Args:
            bookmark: The bookmark entity to save

        Returns:
            Saved bookmark entity with database-generated values
        """
        if bookmark.id.value != 0:
            # Bookmarks are immutable - no update case
            raise ValueError("Bookmarks cannot be updated")

        with translate_errors(self.db, "save_bookmark"):
            orm_model = self.mapper.to_orm(bookmark)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, bookmark_id: BookmarkId) -> bool:
        """
        Delete a bookmark.

        Args:
            bookmark_id: The bookmark ID

        Returns:
            True if deleted, False if not found
        """
        with translate_errors(self.db, "delete_bookmark"):
            bookmark_orm = self.db.get(BookmarkORM, bookmark_id.value)
            if not bookmark_orm:
                return False

            self.db.delete(bookmark_orm)
            self.db.commit()
        return True
