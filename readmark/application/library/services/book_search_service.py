"""Application service for full-text search across a book."""

from collections.abc import Sequence

import structlog

from readmark.application.library.protocols.document import ContentSection, Document
from readmark.config import Settings, get_settings
from readmark.domain.library.entities.search import SearchResult
from readmark.domain.library.entities.toc import TocEntry
from readmark.domain.library.services.chapter_resolver import ChapterResolver
from readmark.domain.reading.services.position_ordering import PositionOrdering
from readmark.exceptions import ReadmarkError

logger = structlog.get_logger(__name__)


class BookSearchService:
    """Searches every section of a document and attributes matches to chapters."""

    def __init__(
        self,
        document: Document,
        resolver: ChapterResolver | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.document = document
        # Anchors within a section are ordered in document order
        self.resolver = resolver or ChapterResolver(PositionOrdering(document))
        self.min_query_length = settings.SEARCH_MIN_QUERY_LENGTH

    async def search_book(self, query: str) -> list[SearchResult]:
        """
        Find every case-insensitive occurrence of query.

        Sections are loaded one at a time, in reading order, and unloaded
        before the next one is touched. A section that fails to load is
        skipped.

        Args:
            query: Text to search for

        Returns:
            Results in document order. Empty for queries shorter than the
            configured minimum.
        """
        if len(query) < self.min_query_length or not query.strip():
            return []

        toc = self.document.toc()
        results: list[SearchResult] = []
        skipped = 0

        for section in self.document.sections():
            try:
                results.extend(await self._search_section(section, toc, query))
            except ReadmarkError as e:
                skipped += 1
                logger.warning(
                    "section_load_failed",
                    href=section.href,
                    index=section.index,
                    error=str(e),
                )

        logger.info(
            "searched_book",
            query=query,
            result_count=len(results),
            skipped_sections=skipped,
        )
        return results

    async def _search_section(
        self, section: ContentSection, toc: Sequence[TocEntry], query: str
    ) -> list[SearchResult]:
        await section.load()
        try:
            entries = self.resolver.matching_entries(toc, section.href)
            chapters = self.resolver.chapter_positions(section, entries)

            return [
                SearchResult(
                    position=match.position,
                    excerpt=match.excerpt,
                    chapter_title=self.resolver.find_chapter_for_position(
                        match.position, chapters, section.href
                    ),
                )
                for match in section.find_text(query)
            ]
        finally:
            section.unload()
