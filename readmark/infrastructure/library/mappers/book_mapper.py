"""Mapper for Book ORM ↔ Domain conversion."""

from readmark.domain.common.value_objects.ids import BookId
from readmark.domain.library.entities.book import Book
from readmark.models import Book as BookORM


class BookMapper:
    """Mapper for Book ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: BookORM) -> Book:
        return Book.create_with_id(
            id=BookId(orm_model.id),
            title=orm_model.title,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
            author=orm_model.author,
            file_path=orm_model.file_path,
            last_position=orm_model.last_position,
        )

    def to_orm(self, domain_entity: Book, orm_model: BookORM | None = None) -> BookORM:
        if orm_model:
            orm_model.title = domain_entity.title
            orm_model.author = domain_entity.author
            orm_model.file_path = domain_entity.file_path
            orm_model.last_position = domain_entity.last_position
            return orm_model

        return BookORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            title=domain_entity.title,
            author=domain_entity.author,
            file_path=domain_entity.file_path,
            last_position=domain_entity.last_position,
        )
