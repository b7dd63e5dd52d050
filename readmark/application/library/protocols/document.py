"""Ports onto an opened ebook as the search and chapter services see it."""

from collections.abc import Sequence
from typing import Protocol

from readmark.domain.library.entities.search import TextMatch
from readmark.domain.library.entities.toc import TocEntry


class ContentSection(Protocol):
    """One reading-order unit of a document.

    Text lookups only work between load() and unload().
    """

    href: str
    index: int

    async def load(self) -> None:
        """Parse the section content. Raises SectionLoadError on failure."""
        ...

    def unload(self) -> None: ...

    def find_text(self, query: str) -> list[TextMatch]:
        """Every case-insensitive occurrence of query, in document order."""
        ...

    def get_element_by_id(self, element_id: str) -> object | None: ...

    def element_to_position(self, element: object) -> str: ...


class Document(Protocol):
    """An opened ebook."""

    def sections(self) -> Sequence[ContentSection]: ...

    def toc(self) -> Sequence[TocEntry]: ...

    def compare(self, first: str, second: str) -> int: ...

    def section_index(self, position: str) -> int: ...
