from typing import Protocol

from readmark.domain.common.value_objects import BookId, HighlightId, PositionRange
from readmark.domain.reading.entities.highlight import Highlight


class HighlightRepositoryProtocol(Protocol):
    def find_by_id(self, highlight_id: HighlightId) -> Highlight | None: ...

    def find_by_book(self, book_id: BookId) -> list[Highlight]: ...

    def find_by_range(self, book_id: BookId, position_range: PositionRange) -> Highlight | None: ...

    def save(self, highlight: Highlight) -> Highlight: ...

    def delete(self, highlight_id: HighlightId) -> bool: ...
