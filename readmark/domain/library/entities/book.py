from dataclasses import dataclass, field
from datetime import UTC, datetime

from readmark.domain.common.entity import Entity
from readmark.domain.common.exceptions import DomainError
from readmark.domain.common.value_objects.ids import BookId


@dataclass
class Book(Entity[BookId]):
    """
    Book aggregate root.

    Owns every bookmark and highlight made in it; deleting a book removes them.
    """

    # Identity
    id: BookId

    # Essential metadata
    title: str

    # Optional fields
    author: str | None = None
    file_path: str | None = None

    # Reading progress
    last_position: str | None = None

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise DomainError("Book title cannot be empty")

    # Query methods
    def has_progress(self) -> bool:
        """Check if a reading position has been recorded."""
        return self.last_position is not None

    # Command methods
    def record_position(self, position: str) -> None:
        """Remember where the reader currently is."""
        if not position or not position.strip():
            raise DomainError("Reading position cannot be empty")
        self.last_position = position

    # Factory methods
    @classmethod
    def create(
        cls, title: str, author: str | None = None, file_path: str | None = None
    ) -> "Book":
        """Factory for creating new book."""
        return cls(
            id=BookId.generate(),
            title=title.strip(),
            author=author,
            file_path=file_path,
        )

    @classmethod
    def create_with_id(
        cls,
        id: BookId,
        title: str,
        created_at: datetime,
        updated_at: datetime,
        author: str | None = None,
        file_path: str | None = None,
        last_position: str | None = None,
    ) -> "Book":
        """Factory for reconstituting book from persistence."""
        return cls(
            id=id,
            title=title,
            author=author,
            file_path=file_path,
            last_position=last_position,
            created_at=created_at,
            updated_at=updated_at,
        )
