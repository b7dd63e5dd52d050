"""Repository for Highlight domain entities."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from readmark.domain.common.value_objects import BookId, HighlightId, PositionRange
from readmark.domain.reading.entities.highlight import Highlight
from readmark.domain.reading.exceptions import HighlightNotFoundError
from readmark.infrastructure.persistence import translate_errors
from readmark.infrastructure.reading.mappers.highlight_mapper import HighlightMapper
from readmark.models import Highlight as HighlightORM


class HighlightRepository:
    """Repository for Highlight domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = HighlightMapper()

    def find_by_id(self, highlight_id: HighlightId) -> Highlight | None:
        with translate_errors(self.db, "find_highlight"):
            orm_model = self.db.get(HighlightORM, highlight_id.value)
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_book(self, book_id: BookId) -> list[Highlight]:
        """All highlights of a book in insertion order."""
        stmt = (
            select(HighlightORM)
            .where(HighlightORM.book_id == book_id.value)
            .order_by(HighlightORM.id)
        )
        with translate_errors(self.db, "list_highlights"):
            orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_range(self, book_id: BookId, position_range: PositionRange) -> Highlight | None:
        """
        Find the highlight drawn over exactly this range.

        If several highlights share the range, the most recently created wins.
        """
        stmt = (
            select(HighlightORM)
            .where(
                HighlightORM.book_id == book_id.value,
                HighlightORM.start_xpoint == position_range.start,
                HighlightORM.end_xpoint == position_range.end,
            )
            .order_by(HighlightORM.id.desc())
            .limit(1)
        )
        with translate_errors(self.db, "find_highlight_by_range"):
            orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def save(self, highlight: Highlight) -> Highlight:
        """
        Persist a new highlight or the color/note of an existing one.

        Raises:
            HighlightNotFoundError: If an existing highlight was deleted meanwhile
        """
        with translate_errors(self.db, "save_highlight"):
            if highlight.id.value == 0:
                # Create new
                orm_model = self.mapper.to_orm(highlight)
                self.db.add(orm_model)
            else:
                # Update existing
                existing_orm = self.db.get(HighlightORM, highlight.id.value)
                if existing_orm is None:
                    raise HighlightNotFoundError(highlight.id.value)
                orm_model = self.mapper.to_orm(highlight, existing_orm)
            self.db.commit()
            self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def delete(self, highlight_id: HighlightId) -> bool:
        """
        Delete a highlight.

        Returns:
            True if deleted, False if not found
        """
        with translate_errors(self.db, "delete_highlight"):
            highlight_orm = self.db.get(HighlightORM, highlight_id.value)
            if not highlight_orm:
                return False

            self.db.delete(highlight_orm)
            self.db.commit()
        return True
