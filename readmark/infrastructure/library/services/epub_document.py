"""
EPUB adapter: sections, chapter tree and document-order positions.

Positions are xpoint tokens. Within a section, every element and every text
node is numbered in DOM order; two tokens in the same section compare by
those numbers and then by character offset.
"""

from __future__ import annotations

import asyncio
import re
import zipfile
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
from ebooklib import epub
from lxml import etree  # pyright: ignore[reportAttributeAccessIssue]

from readmark.config import Settings, get_settings
from readmark.domain.common.value_objects.xpoint import XPoint, normalize_xpath
from readmark.domain.library.entities.search import TextMatch
from readmark.domain.library.entities.toc import TocEntry
from readmark.exceptions import (
    AnchorResolutionError,
    InvalidEbookError,
    PositionComparisonError,
    ReadmarkError,
    SectionLoadError,
)

logger = structlog.get_logger(__name__)

# (normalized xpath, text node index); index 0 addresses the element itself
NodeKey = tuple[str, int]


@dataclass(frozen=True)
class _Node:
    element: Any
    xpath: str
    text_index: int
    text: str | None


def _parse_html(content: bytes) -> Any:  # noqa: ANN401
    """Parse section markup. Returns None for empty documents."""
    parser = etree.HTMLParser()
    return etree.fromstring(content, parser)


def _element_xpath(element: Any) -> str:  # noqa: ANN401
    # lxml gives paths like /html/body/div[1]/p[2]
    # We need /body/div[1]/p[2] (strip /html prefix)
    path: str = element.getroottree().getpath(element)
    if path.startswith("/html"):
        path = path[len("/html") :]
    return path


def _body(root: Any) -> Any:  # noqa: ANN401
    body = root.find("body")
    return body if body is not None else root


def _iter_nodes(root: Any) -> Iterator[_Node]:  # noqa: ANN401
    """Elements and text nodes under body, in document order.

    Text nodes are numbered per parent element the way XPath text()[N]
    counts them: the element's leading text first, then each child's tail.
    """

    def visit(element: Any) -> Iterator[_Node]:  # noqa: ANN401
        path = _element_xpath(element)
        yield _Node(element, path, 0, None)

        text_index = 0
        if element.text:
            text_index += 1
            yield _Node(element, path, text_index, element.text)

        for child in element:
            if isinstance(child.tag, str):
                yield from visit(child)
            if child.tail:
                text_index += 1
                yield _Node(element, path, text_index, child.tail)

    yield from visit(_body(root))


def _build_order_index(root: Any) -> dict[NodeKey, int]:  # noqa: ANN401
    return {
        (normalize_xpath(node.xpath), node.text_index): number
        for number, node in enumerate(_iter_nodes(root), start=1)
    }


def _node_key(point: XPoint) -> NodeKey:
    text_index = point.text_node_index if point.has_text_node else 0
    return normalize_xpath(point.xpath), text_index


def _parse_point(position: str) -> XPoint:
    try:
        return XPoint.parse(position)
    except ReadmarkError as e:
        raise PositionComparisonError(position, position, str(e)) from e


def _centred_excerpt(text: str, start: int, length: int) -> str:
    begin = max(0, start - length // 2)
    return text[begin : start + length // 2].strip()


class EpubSection:
    """One spine item. Text lookups need a prior load()."""

    def __init__(self, item: Any, index: int, excerpt_length: int) -> None:  # noqa: ANN401
        self._item = item
        self.index = index
        self.href: str = item.get_name()
        self.excerpt_length = excerpt_length
        self._root: Any = None
        self._order: dict[NodeKey, int] | None = None

    def __repr__(self) -> str:
        return f"<EpubSection(index={self.index}, href='{self.href}')>"

    def content(self) -> bytes:
        """Raw markup of the section."""
        return self._item.get_content()

    @property
    def is_loaded(self) -> bool:
        return self._root is not None

    async def load(self) -> None:
        """
        Parse the section markup off the event loop.

        Raises:
            SectionLoadError: If the content cannot be read or parsed
        """
        if self._root is not None:
            return

        try:
            root = await asyncio.to_thread(_parse_html, self.content())
        except (etree.LxmlError, ValueError) as e:
            raise SectionLoadError(self.href, str(e)) from e

        if root is None:
            raise SectionLoadError(self.href, "document is empty")

        self._root = root
        logger.debug("section_loaded", href=self.href, index=self.index)

    def unload(self) -> None:
        self._root = None
        self._order = None

    def _require_root(self) -> Any:  # noqa: ANN401
        if self._root is None:
            raise SectionLoadError(self.href, "section is not loaded")
        return self._root

    def tree(self) -> Any:  # noqa: ANN401
        """Parsed markup of a loaded section."""
        return self._require_root()

    def order_index(self) -> dict[NodeKey, int]:
        """Document-order number of every node, kept until unload()."""
        if self._order is None:
            self._order = _build_order_index(self._require_root())
        return self._order

    def find_text(self, query: str) -> list[TextMatch]:
        """
        Every case-insensitive occurrence of query, in document order.

        Excerpts are cut from the containing text node, centred on the match.
        """
        root = self._require_root()
        if not query:
            return []

        pattern = re.compile(re.escape(query), re.IGNORECASE)
        matches: list[TextMatch] = []

        for node in _iter_nodes(root):
            if node.text is None:
                continue
            for found in pattern.finditer(node.text):
                position = XPoint(
                    doc_fragment_index=self.index,
                    xpath=node.xpath,
                    text_node_index=node.text_index,
                    char_offset=found.start(),
                    has_text_node=True,
                ).to_string()
                matches.append(
                    TextMatch(
                        position=position,
                        excerpt=_centred_excerpt(node.text, found.start(), self.excerpt_length),
                    )
                )

        return matches

    def get_element_by_id(self, element_id: str) -> Any | None:  # noqa: ANN401
        root = self._require_root()
        found = root.xpath("//*[@id=$element_id]", element_id=element_id)
        return found[0] if found else None

    def element_to_position(self, element: Any) -> str:  # noqa: ANN401
        """Token for the start of an element of this section."""
        self._require_root()
        if not isinstance(getattr(element, "tag", None), str):
            raise AnchorResolutionError(self.href, "not an element")

        return XPoint(
            doc_fragment_index=self.index,
            xpath=_element_xpath(element),
            text_node_index=1,
            char_offset=0,
        ).to_string()


class EpubDocument:
    """An opened EPUB package."""

    def __init__(self, book: epub.EpubBook, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self.book = book
        self._sections = self._build_sections(settings.SEARCH_EXCERPT_LENGTH)
        self._toc = tuple(self._build_toc(book.toc))
        # Order index of the last unloaded section compared
        self._detached_order: tuple[int, dict[NodeKey, int]] | None = None

    @classmethod
    def open(cls, path: str | Path, settings: Settings | None = None) -> EpubDocument:
        """
        Read an EPUB package from disk.

        Raises:
            InvalidEbookError: If the file is missing or not a readable EPUB
        """
        try:
            book = epub.read_epub(str(path))
        except (epub.EpubException, zipfile.BadZipFile, OSError, KeyError, etree.LxmlError) as e:
            raise InvalidEbookError(str(e)) from e

        document = cls(book, settings)
        logger.info(
            "opened_epub",
            path=str(path),
            section_count=len(document._sections),
            toc_entries=len(document._toc),
        )
        return document

    def _build_sections(self, excerpt_length: int) -> list[EpubSection]:
        # DocFragment numbering counts every spine entry, including missing ones
        sections: list[EpubSection] = []
        for spine_index, (item_id, _linear) in enumerate(self.book.spine, start=1):
            item = self.book.get_item_with_id(item_id)
            if item is None:
                logger.warning("spine_item_missing", item_id=item_id, index=spine_index)
                continue
            sections.append(EpubSection(item, spine_index, excerpt_length))
        return sections

    def _build_toc(self, toc_items: Sequence[Any]) -> list[TocEntry]:
        """Convert ebooklib's Link / (Section, children) items into TocEntry values."""
        entries: list[TocEntry] = []

        for item in toc_items:
            if isinstance(item, tuple):
                section, children = item[0], item[1] if len(item) > 1 else []
                entries.append(
                    TocEntry(
                        label=(getattr(section, "title", "") or "").strip(),
                        href=getattr(section, "href", "") or "",
                        children=tuple(self._build_toc(children)),
                    )
                )
            elif hasattr(item, "title"):
                entries.append(
                    TocEntry(label=(item.title or "").strip(), href=getattr(item, "href", "") or "")
                )

        return entries

    def sections(self) -> list[EpubSection]:
        """Content sections in reading order."""
        return list(self._sections)

    def toc(self) -> tuple[TocEntry, ...]:
        return self._toc

    def section(self, index: int) -> EpubSection | None:
        """Section by 1-based spine index."""
        for section in self._sections:
            if section.index == index:
                return section
        return None

    # Comparison primitive

    def section_index(self, position: str) -> int:
        return _parse_point(position).section_index

    def compare(self, first: str, second: str) -> int:
        """
        Order two tokens in document order.

        Raises:
            PositionComparisonError: If either token does not address a node of
                its section
        """
        first_point = _parse_point(first)
        second_point = _parse_point(second)

        if first_point.section_index != second_point.section_index:
            return -1 if first_point.section_index < second_point.section_index else 1

        order = self._order_index(first_point.section_index)
        first_order = order.get(_node_key(first_point))
        second_order = order.get(_node_key(second_point))
        if first_order is None or second_order is None:
            raise PositionComparisonError(first, second, "position not found in section")

        first_key = (first_order, first_point.char_offset)
        second_key = (second_order, second_point.char_offset)
        if first_key == second_key:
            return 0
        return -1 if first_key < second_key else 1

    def _order_index(self, section_index: int) -> dict[NodeKey, int]:
        section = self._require_section(section_index)
        if section.is_loaded:
            return section.order_index()

        if self._detached_order is not None and self._detached_order[0] == section_index:
            return self._detached_order[1]

        order = _build_order_index(self._parse_section(section_index))
        self._detached_order = (section_index, order)
        logger.debug("built_order_index", section_index=section_index, nodes=len(order))
        return order

    def _require_section(self, section_index: int) -> EpubSection:
        section = self.section(section_index)
        if section is None:
            raise PositionComparisonError(
                str(section_index), str(section_index), "no such section"
            )
        return section

    def _parse_section(self, section_index: int) -> Any:  # noqa: ANN401
        section = self._require_section(section_index)
        if section.is_loaded:
            return section.tree()

        try:
            root = _parse_html(section.content())
        except (etree.LxmlError, ValueError) as e:
            raise SectionLoadError(section.href, str(e)) from e
        if root is None:
            raise SectionLoadError(section.href, "document is empty")
        return root

    def excerpt_at(self, position: str, length: int = 100) -> str:
        """
        Text at a position, for bookmark excerpts.

        Returns the start of the containing text node, or of the element's
        text for element tokens. Empty when the position cannot be located.
        """
        try:
            point = _parse_point(position)
            root = self._parse_section(point.section_index)
        except ReadmarkError as e:
            logger.warning("excerpt_unavailable", position=position, error=str(e))
            return ""

        key = _node_key(point)
        for node in _iter_nodes(root):
            if (normalize_xpath(node.xpath), node.text_index) != key:
                continue
            if node.text is not None:
                return node.text[:length].strip()
            return "".join(node.element.itertext())[:length].strip()

        logger.warning("excerpt_unavailable", position=position, error="node not found")
        return ""
