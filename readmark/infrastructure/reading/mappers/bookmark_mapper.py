"""Mapper for Bookmark ORM ↔ Domain conversion."""

from readmark.domain.common.value_objects.ids import BookId, BookmarkId
from readmark.domain.reading.entities.bookmark import Bookmark
from readmark.models import Bookmark as BookmarkORM


class BookmarkMapper:
    """Mapper for Bookmark ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: BookmarkORM) -> Bookmark:
        """Convert ORM model to domain entity."""
        return Bookmark.create_with_id(
            id=BookmarkId(orm_model.id),
            book_id=BookId(orm_model.book_id),
            position=orm_model.position,
            excerpt=orm_model.excerpt,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: Bookmark) -> BookmarkORM:
        """Convert a new domain entity to an ORM model. Bookmarks are never updated."""
        return BookmarkORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            book_id=domain_entity.book_id.value,
            position=domain_entity.position,
            excerpt=domain_entity.excerpt,
            created_at=domain_entity.created_at,
        )
