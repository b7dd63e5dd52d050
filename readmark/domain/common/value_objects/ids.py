from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class BookId(EntityId):
    """Strongly-typed book identifier."""


@dataclass(frozen=True)
class BookmarkId(EntityId):
    """Strongly-typed bookmark identifier."""


@dataclass(frozen=True)
class HighlightId(EntityId):
    """Strongly-typed highlight identifier."""
