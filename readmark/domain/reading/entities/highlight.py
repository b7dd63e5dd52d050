"""
Highlight entity.

Encapsulates the business rules for a highlighted text range.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from readmark.domain.common.entity import Entity
from readmark.domain.common.exceptions import InvariantViolationError
from readmark.domain.common.value_objects import (
    BookId,
    HighlightColor,
    HighlightId,
    PositionRange,
)

MAX_HIGHLIGHT_TEXT_LENGTH = 500


@dataclass
class Highlight(Entity[HighlightId]):
    """
    Highlight of a text range inside a book.

    Business Rules:
    - Text is a non-empty snapshot of at most 500 characters
    - The position range and text never change after creation
    - Color and note can be changed; every change refreshes updated_at
    """

    # Identity
    id: HighlightId
    book_id: BookId

    # Content
    position_range: PositionRange
    text: str

    # Style
    color: HighlightColor = HighlightColor.YELLOW

    # Annotation
    note: str | None = None

    # Metadata
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.text.strip():
            raise InvariantViolationError("Highlight", "text cannot be empty")
        if len(self.text) > MAX_HIGHLIGHT_TEXT_LENGTH:
            raise InvariantViolationError(
                "Highlight", f"text cannot exceed {MAX_HIGHLIGHT_TEXT_LENGTH} characters"
            )

    # Query methods

    def has_note(self) -> bool:
        """Check if this highlight has an associated note."""
        return self.note is not None and len(self.note.strip()) > 0

    def covers(self, position_range: PositionRange) -> bool:
        """Check if this highlight was made over exactly the given range."""
        return self.position_range == position_range

    # Command methods (state changes)

    def change_color(self, color: HighlightColor) -> None:
        """Recolor this highlight."""
        self.color = color
        self._touch()

    def update_note(self, note: str | None) -> None:
        """
        Update the note attached to this highlight.

        Args:
            note: New note text, or None to remove note
        """
        self.note = note.strip() if note and note.strip() else None
        self._touch()

    def _touch(self) -> None:
        self.updated_at = datetime.now(UTC)

    # Factory methods

    @classmethod
    def create(
        cls,
        book_id: BookId,
        position_range: PositionRange,
        text: str,
        color: HighlightColor,
        note: str | None = None,
    ) -> Highlight:
        """
        Factory method for creating a new highlight.

        Args:
            book_id: Book this highlight belongs to
            position_range: Start and end position tokens of the selection
            text: Highlighted text snapshot
            color: Chosen highlight color
            note: Optional note

        Returns:
            New Highlight instance

        Raises:
            InvariantViolationError: If text is empty or too long
        """
        now = datetime.now(UTC)

        return cls(
            id=HighlightId.generate(),
            book_id=book_id,
            position_range=position_range,
            text=text,
            color=color,
            note=note.strip() if note and note.strip() else None,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: HighlightId,
        book_id: BookId,
        position_range: PositionRange,
        text: str,
        color: HighlightColor,
        created_at: datetime,
        updated_at: datetime,
        note: str | None = None,
    ) -> Highlight:
        """
        Factory method for reconstituting highlight from persistence.

        Used by repositories when loading from database.
        """
        return cls(
            id=id,
            book_id=book_id,
            position_range=position_range,
            text=text,
            color=color,
            note=note,
            created_at=created_at,
            updated_at=updated_at,
        )
