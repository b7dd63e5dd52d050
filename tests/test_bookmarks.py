"""Tests for bookmark toggling and position-sorted listings."""

from readmark.application.reading.services.annotation_store import AnnotationStore
from readmark.application.reading.services.bookmark_service import BookmarkService
from readmark.domain.common.value_objects import HighlightColor, PositionRange
from readmark.domain.library.entities.book import Book


def _pos(section: int, paragraph: int, offset: int = 0) -> str:
    return f"/body/DocFragment[{section}]/body/p[{paragraph}]/text().{offset}"


class TestToggleBookmark:
    def test_toggle_creates_bookmark(self, store: AnnotationStore, test_book: Book) -> None:
        service = BookmarkService(store)

        bookmark = service.toggle_bookmark(test_book.id.value, _pos(2, 5), "  Loomings.  ")

        assert bookmark is not None
        assert bookmark.excerpt == "Loomings."
        assert service.is_bookmarked(test_book.id.value, _pos(2, 5))

    def test_toggle_twice_leaves_no_bookmark(self, store: AnnotationStore, test_book: Book) -> None:
        service = BookmarkService(store)

        service.toggle_bookmark(test_book.id.value, _pos(2, 5))
        result = service.toggle_bookmark(test_book.id.value, _pos(2, 5))

        assert result is None
        assert store.list_bookmarks(test_book.id.value) == []
        assert not service.is_bookmarked(test_book.id.value, _pos(2, 5))

    def test_nearby_position_gets_its_own_bookmark(
        self, store: AnnotationStore, test_book: Book
    ) -> None:
        service = BookmarkService(store)

        service.toggle_bookmark(test_book.id.value, _pos(2, 5, 10))
        service.toggle_bookmark(test_book.id.value, _pos(2, 5, 11))

        assert len(store.list_bookmarks(test_book.id.value)) == 2

    def test_toggle_without_position_does_nothing(
        self, store: AnnotationStore, test_book: Book
    ) -> None:
        service = BookmarkService(store)

        assert service.toggle_bookmark(test_book.id.value, None) is None
        assert store.list_bookmarks(test_book.id.value) == []

    def test_excerpt_is_cut_to_limit(self, store: AnnotationStore, test_book: Book) -> None:
        service = BookmarkService(store, excerpt_max_length=100)

        bookmark = service.toggle_bookmark(test_book.id.value, _pos(1, 1), "x" * 250)

        assert bookmark is not None
        assert len(bookmark.excerpt) == 100

    def test_excerpt_is_cut_before_trimming(self, store: AnnotationStore, test_book: Book) -> None:
        service = BookmarkService(store, excerpt_max_length=10)

        bookmark = service.toggle_bookmark(test_book.id.value, _pos(1, 1), "      Call me Ishmael.")

        assert bookmark is not None
        assert bookmark.excerpt == "Call"


class TestSortedListings:
    def test_sorted_bookmarks_most_advanced_first(
        self, store: AnnotationStore, test_book: Book
    ) -> None:
        service = BookmarkService(store)
        for position in [_pos(1, 9), _pos(4, 1), _pos(2, 30), _pos(1, 10)]:
            store.create_bookmark(test_book.id.value, position)

        result = service.sorted_bookmarks(test_book.id.value)

        assert [b.position for b in result] == [_pos(4, 1), _pos(2, 30), _pos(1, 10), _pos(1, 9)]

    def test_sorted_highlights_by_range_start(
        self, store: AnnotationStore, test_book: Book
    ) -> None:
        service = BookmarkService(store)
        early = store.create_highlight(
            test_book.id.value,
            PositionRange(start=_pos(1, 2), end=_pos(3, 1)),
            "early",
            HighlightColor.YELLOW,
        )
        late = store.create_highlight(
            test_book.id.value,
            PositionRange(start=_pos(2, 1), end=_pos(2, 1, 20)),
            "late",
            HighlightColor.YELLOW,
        )

        result = service.sorted_highlights(test_book.id.value)

        assert [h.id for h in result] == [late.id, early.id]
