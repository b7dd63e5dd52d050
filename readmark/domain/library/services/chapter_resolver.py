"""
Domain service attributing positions to chapters.

Publishers often pack several chapters into one content file. A position
inside such a file belongs to the last chapter whose anchor sits at or
before it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import structlog

from readmark.domain.library.entities.toc import ChapterPosition, TocEntry, walk_toc
from readmark.domain.reading.services.position_ordering import Ordering, PositionOrdering
from readmark.exceptions import AnchorResolutionError, ReadmarkError

logger = structlog.get_logger(__name__)


class AnchorResolver(Protocol):
    """The part of a loaded section needed to turn anchors into positions."""

    href: str

    def get_element_by_id(self, element_id: str) -> object | None: ...

    def element_to_position(self, element: object) -> str: ...


def _normalize_href(href: str) -> str:
    href = href.strip()
    while href.startswith("./"):
        href = href[2:]
    return href.lstrip("/")


def hrefs_match(section_href: str, toc_file: str) -> bool:
    """Whether a chapter's file part points at the section's file.

    Hrefs may be relative to different base directories, so a path that is
    a trailing sub-path of the other counts as the same file.
    """
    section = _normalize_href(section_href)
    target = _normalize_href(toc_file)
    if not section or not target:
        return False
    if section == target:
        return True
    return section.endswith("/" + target) or target.endswith("/" + section)


class ChapterResolver:
    """Resolves which chapter a position inside a section belongs to."""

    def __init__(self, ordering: PositionOrdering | None = None) -> None:
        self.ordering = ordering or PositionOrdering()

    def matching_entries(self, toc: Sequence[TocEntry], section_href: str) -> list[TocEntry]:
        """
        Every chapter entry, at any depth, whose href targets the section.

        Args:
            toc: Top-level chapter entries
            section_href: Href of the content section

        Returns:
            Matching entries in reading order
        """
        return [entry for entry in walk_toc(toc) if hrefs_match(section_href, entry.file_part)]

    def chapter_positions(
        self, section: AnchorResolver, entries: Sequence[TocEntry]
    ) -> list[ChapterPosition]:
        """
        Resolve each entry's anchor to a position within the loaded section.

        Entries without an anchor, or whose anchor is missing from the
        rendered content, are kept without a position.
        """
        positions: list[ChapterPosition] = []

        for entry in entries:
            position: str | None = None
            if entry.anchor:
                try:
                    position = self._resolve_anchor(section, entry)
                except AnchorResolutionError as e:
                    logger.debug("chapter_anchor_unresolved", href=entry.href, reason=e.reason)

            positions.append(ChapterPosition(label=entry.label.strip(), position=position))

        return positions

    def _resolve_anchor(self, section: AnchorResolver, entry: TocEntry) -> str:
        anchor = entry.anchor
        if anchor is None:
            raise AnchorResolutionError(entry.href, "entry has no anchor")

        element = section.get_element_by_id(anchor)
        if element is None:
            raise AnchorResolutionError(entry.href, f"no element with id '{anchor}'")

        try:
            return section.element_to_position(element)
        except ReadmarkError as e:
            raise AnchorResolutionError(entry.href, str(e)) from e

    def find_chapter_for_position(
        self,
        position: str,
        chapters: Sequence[ChapterPosition],
        fallback_label: str,
    ) -> str:
        """
        Label of the chapter a position falls in.

        Args:
            position: Target position inside the section
            chapters: Chapters targeting the section, in reading order
            fallback_label: Label used when no chapter targets the section

        Returns:
            The label of the last resolved chapter at or before the position.
            With a single chapter, or none resolved, the first chapter's label
            is returned even though it may be wrong for a multi-chapter
            section whose anchors all failed to resolve.
        """
        if not chapters:
            return fallback_label

        resolved = [c for c in chapters if c.position is not None]
        if len(chapters) == 1 or not resolved:
            return chapters[0].label

        ascending = self.ordering.sort_ascending_by_position(
            resolved, lambda c: c.position or ""
        )

        best = ascending[0]
        for chapter in ascending:
            try:
                order = self.ordering.compare(chapter.position or "", position)
            except ReadmarkError as e:
                logger.debug(
                    "chapter_position_not_comparable",
                    chapter=chapter.label,
                    position=position,
                    error=str(e),
                )
                continue

            if order is Ordering.AFTER:
                break
            best = chapter

        return best.label

    def resolve(
        self, section: AnchorResolver, toc: Sequence[TocEntry], position: str
    ) -> str:
        """Match, anchor and attribute in one call for a single position."""
        entries = self.matching_entries(toc, section.href)
        chapters = self.chapter_positions(section, entries)
        return self.find_chapter_for_position(position, chapters, section.href)
