from typing import Protocol

from readmark.domain.common.value_objects.ids import BookId, BookmarkId
from readmark.domain.reading.entities.bookmark import Bookmark


class BookmarkRepositoryProtocol(Protocol):
    def find_by_id(self, bookmark_id: BookmarkId) -> Bookmark | None: ...

    def find_by_book(self, book_id: BookId) -> list[Bookmark]: ...

    def save(self, bookmark: Bookmark) -> Bookmark: ...

    def delete(self, bookmark_id: BookmarkId) -> bool: ...
