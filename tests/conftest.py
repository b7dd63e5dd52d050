"""Pytest configuration and fixtures."""

from collections.abc import Callable, Generator, Mapping

import pytest
from sqlalchemy.orm import Session, sessionmaker

from readmark import models  # noqa: F401
from readmark.application.reading.services.annotation_store import AnnotationStore
from readmark.config import Settings
from readmark.database import Base, build_engine
from readmark.domain.common.value_objects import PositionRange, XPoint
from readmark.domain.library.entities.book import Book
from readmark.domain.library.entities.search import TextMatch
from readmark.domain.library.entities.toc import TocEntry
from readmark.exceptions import OverlayRegistrationError, SectionLoadError
from readmark.infrastructure.library.repositories import BookRepository
from readmark.infrastructure.reading.repositories import BookmarkRepository, HighlightRepository

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

# Create test engine (foreign keys on, so cascades apply)
test_engine = build_engine(TEST_DATABASE_URL)

# Create test session factory
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(DATABASE_URL=TEST_DATABASE_URL, ENVIRONMENT="test")


@pytest.fixture
def book_repository(db_session: Session) -> BookRepository:
    return BookRepository(db_session)


@pytest.fixture
def test_book(book_repository: BookRepository) -> Book:
    """A stored book to attach annotations to."""
    return book_repository.save(Book.create(title="Moby Dick", author="Herman Melville"))


@pytest.fixture
def store(db_session: Session) -> AnnotationStore:
    return AnnotationStore(
        bookmark_repository=BookmarkRepository(db_session),
        highlight_repository=HighlightRepository(db_session),
    )


# Overlay and selection fakes


class FakeOverlay:
    """Records overlay annotations keyed by kind and range."""

    def __init__(self) -> None:
        self.annotations: dict[tuple[str, str, str], dict[str, object]] = {}
        self.unrendered_sections: set[int] = set()
        self.add_calls = 0
        self.remove_calls = 0

    def add_annotation(
        self,
        kind: str,
        position_range: PositionRange,
        style: Mapping[str, str],
        on_click: Callable[[], None] | None = None,
        css_class: str = "",
    ) -> None:
        self.add_calls += 1
        if position_range.section_index in self.unrendered_sections:
            raise OverlayRegistrationError("range is not in the rendered section")
        self.annotations[(kind, position_range.start, position_range.end)] = {
            "style": dict(style),
            "on_click": on_click,
            "css_class": css_class,
        }

    def remove_annotation(self, position_range: PositionRange, kind: str) -> None:
        self.remove_calls += 1
        if position_range.section_index in self.unrendered_sections:
            raise OverlayRegistrationError("range is not in the rendered section")
        self.annotations.pop((kind, position_range.start, position_range.end), None)

    def get(self, position_range: PositionRange, kind: str = "highlight") -> dict[str, object]:
        return self.annotations[(kind, position_range.start, position_range.end)]

    def click(self, position_range: PositionRange, kind: str = "highlight") -> None:
        on_click = self.get(position_range, kind)["on_click"]
        assert callable(on_click)
        on_click()


class FakeSelection:
    def __init__(self) -> None:
        self.cleared = 0

    def clear(self) -> None:
        self.cleared += 1


@pytest.fixture
def overlay() -> FakeOverlay:
    return FakeOverlay()


@pytest.fixture
def selection() -> FakeSelection:
    return FakeSelection()


# Document fakes


class FakeSection:
    """
    In-memory content section.

    Paragraph N of the section is addressed as /body/p[N]; anchors map
    element ids to paragraph numbers.
    """

    def __init__(
        self,
        index: int,
        href: str,
        paragraphs: list[str],
        anchors: dict[str, int] | None = None,
        fail_load: bool = False,
    ) -> None:
        self.index = index
        self.href = href
        self.paragraphs = paragraphs
        self.anchors = anchors or {}
        self.fail_load = fail_load
        self.loaded = False
        self.load_calls = 0
        self.unload_calls = 0
        self.find_text_calls = 0

    def position(self, paragraph: int, offset: int = 0) -> str:
        return f"/body/DocFragment[{self.index}]/body/p[{paragraph}]/text().{offset}"

    async def load(self) -> None:
        self.load_calls += 1
        if self.fail_load:
            raise SectionLoadError(self.href, "corrupt markup")
        self.loaded = True

    def unload(self) -> None:
        self.unload_calls += 1
        self.loaded = False

    def find_text(self, query: str) -> list[TextMatch]:
        self.find_text_calls += 1
        assert self.loaded, "find_text called on an unloaded section"
        matches = []
        for number, text in enumerate(self.paragraphs, start=1):
            start = text.lower().find(query.lower())
            if start >= 0:
                matches.append(TextMatch(position=self.position(number, start), excerpt=text))
        return matches

    def get_element_by_id(self, element_id: str) -> object | None:
        return self.anchors.get(element_id)

    def element_to_position(self, element: object) -> str:
        assert isinstance(element, int)
        return self.position(element)


class FakeDocument:
    """Document over FakeSections using structural position order."""

    def __init__(self, sections: list[FakeSection], toc: list[TocEntry]) -> None:
        self._sections = sections
        self._toc = toc

    def sections(self) -> list[FakeSection]:
        return self._sections

    def toc(self) -> list[TocEntry]:
        return self._toc

    def compare(self, first: str, second: str) -> int:
        return XPoint.parse(first).compare_to(XPoint.parse(second))

    def section_index(self, position: str) -> int:
        return XPoint.parse(position).section_index


@pytest.fixture
def make_section() -> Callable[..., FakeSection]:
    return FakeSection


@pytest.fixture
def make_document() -> Callable[..., FakeDocument]:
    return FakeDocument
