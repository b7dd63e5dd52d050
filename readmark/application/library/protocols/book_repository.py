from typing import Protocol

from readmark.domain.common.value_objects.ids import BookId
from readmark.domain.library.entities.book import Book


class BookRepositoryProtocol(Protocol):
    def find_by_id(self, book_id: BookId) -> Book | None: ...

    def save(self, book: Book) -> Book: ...

    def delete(self, book_id: BookId) -> bool: ...
