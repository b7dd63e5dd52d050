"""Bookmark entity for marking a reading position."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from readmark.domain.common.entity import Entity
from readmark.domain.common.value_objects.ids import BookId, BookmarkId
from readmark.domain.common.value_objects.xpoint import XPoint


@dataclass
class Bookmark(Entity[BookmarkId]):
    """
    Bookmark that marks an exact position in a book.

    Business Rules:
    - The position is an immutable position token
    - At most one bookmark per exact position per book (enforced by the
      toggling caller, not here)
    """

    id: BookmarkId
    book_id: BookId
    position: str
    excerpt: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate invariants."""
        XPoint.parse(self.position)

    @property
    def section_index(self) -> int:
        return XPoint.parse(self.position).section_index

    def belongs_to_book(self, book_id: BookId) -> bool:
        """Check if this bookmark belongs to the specified book."""
        return self.book_id == book_id

    @classmethod
    def create(cls, book_id: BookId, position: str, excerpt: str = "") -> "Bookmark":
        """
        Create a new bookmark.

        Args:
            book_id: ID of the book
            position: Position token of the bookmarked location
            excerpt: Text shown for the bookmark in lists

        Returns:
            New Bookmark instance
        """
        return cls(
            id=BookmarkId.generate(),
            book_id=book_id,
            position=position,
            excerpt=excerpt,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def create_with_id(
        cls,
        id: BookmarkId,
        book_id: BookId,
        position: str,
        excerpt: str,
        created_at: datetime,
    ) -> "Bookmark":
        """Reconstitute a bookmark from persistence."""
        return cls(
            id=id,
            book_id=book_id,
            position=position,
            excerpt=excerpt,
            created_at=created_at,
        )
