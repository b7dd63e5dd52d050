"""
Mapper for converting between Highlight ORM models and domain entities.

Handles bidirectional conversion:
- ORM model → Domain entity (when loading from database)
- Domain entity → ORM model (when persisting to database)
"""

from readmark.domain.common.value_objects import (
    BookId,
    HighlightColor,
    HighlightId,
    PositionRange,
)
from readmark.domain.reading.entities.highlight import Highlight
from readmark.models import Highlight as HighlightORM


class HighlightMapper:
    """Mapper for Highlight ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: HighlightORM) -> Highlight:
        """
        Convert ORM model to domain entity.

        Args:
            orm_model: SQLAlchemy Highlight model

        Returns:
            Highlight domain entity
        """
        return Highlight.create_with_id(
            id=HighlightId(orm_model.id),
            book_id=BookId(orm_model.book_id),
            position_range=PositionRange(start=orm_model.start_xpoint, end=orm_model.end_xpoint),
            text=orm_model.text,
            color=HighlightColor(orm_model.color),
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
            note=orm_model.note,
        )

    def to_orm(
        self, domain_entity: Highlight, orm_model: HighlightORM | None = None
    ) -> HighlightORM:
        """
        Convert domain entity to ORM model.

        Args:
            domain_entity: Highlight domain entity
            orm_model: Optional existing ORM model to update (for updates)

        Returns:
            SQLAlchemy Highlight model
        """
        if orm_model:
            # Range and text are fixed at creation
            orm_model.color = domain_entity.color.value
            orm_model.note = domain_entity.note
            orm_model.updated_at = domain_entity.updated_at
            return orm_model

        return HighlightORM(
            id=domain_entity.id.value if domain_entity.id.value != 0 else None,
            book_id=domain_entity.book_id.value,
            start_xpoint=domain_entity.position_range.start,
            end_xpoint=domain_entity.position_range.end,
            text=domain_entity.text,
            color=domain_entity.color.value,
            note=domain_entity.note,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
