"""
XPoint value objects for EPUB position tracking.

XPoint = position within an EPUB document (section_index, element_path, character_offset).
Every position token handled by the engine is the string form of an XPoint.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from typing import Self

from readmark.exceptions import XPointParseError


class XPointDict(TypedDict):
    """Dictionary representation of XPoint for JSON serialization."""

    doc_fragment_index: int | None
    xpath: str
    text_node_index: int
    char_offset: int


class PositionRangeDict(TypedDict):
    """Dictionary representation of PositionRange for JSON serialization."""

    start: str
    end: str


# Regex pattern for parsing XPath segments like "div", "div[1]", "p[15]"
_XPATH_SEGMENT_PATTERN = re.compile(r"([a-zA-Z][a-zA-Z0-9_-]*)(?:\[(\d+)\])?$")

# Format: /body/DocFragment[N]/body/.../text()[N].offset
# Or: /body/DocFragment[N]/body/... (element boundary, defaults to offset 0)
# DocFragment, text node index, and text()/offset are optional
_XPOINT_PATTERN = re.compile(
    r"^"
    r"(?:/body/DocFragment\[(\d+)\])?"  # Optional DocFragment[N] - group 1
    r"(/body(?:/[^/.\s()]+)*)"  # XPath: /body followed by /element segments
    r"(?:"
    r"(?:/text\(\)(?:\[(\d+)\])?)?"  # Optional: text() with optional [N] - group 3
    r"\.(\d+)"  # .offset - group 4
    r")?"
    r"$"
)


def parse_xpath_segments(xpath: str) -> list[tuple[str, int]]:
    """Parse an XPath string into a list of (element_name, index) tuples.

    Args:
        xpath: XPath string like "/body/div[2]/section[1]/p[15]"

    Returns:
        List of tuples like [("body", 1), ("div", 2), ("section", 1), ("p", 15)]
        Elements without explicit index default to 1.
    """
    parts = [p for p in xpath.split("/") if p]
    segments: list[tuple[str, int]] = []

    for part in parts:
        match = _XPATH_SEGMENT_PATTERN.match(part)
        if match:
            element_name = match.group(1)
            index = int(match.group(2)) if match.group(2) else 1
            segments.append((element_name, index))
        else:
            segments.append((part, 1))

    return segments


def normalize_xpath(xpath: str) -> str:
    """Add explicit [1] indices where an xpath omits them.

    lxml produces "/body/p[1]/span" only for unique siblings while tokens may
    spell the same element "/body/p/span[1]"; both normalize to
    "/body/p[1]/span[1]".
    """
    return "".join(f"/{name}[{index}]" for name, index in parse_xpath_segments(xpath))


@dataclass(frozen=True)
class XPoint:
    """Parsed representation of a position token.

    Formats:
    - /body/DocFragment[12]/body/div/p[88]/text().223 (full format with offset)
    - /body/DocFragment[14]/body/a (element boundary, offset defaults to 0)
    - /body/DocFragment[20]/body/div/p[1]/img.0 (non-text element with offset)

    Attributes:
        doc_fragment_index: 1-based index into the EPUB spine (None if not present)
        xpath: XPath to the element (without text() selector)
        text_node_index: 1-based index of text node within element (default 1)
        char_offset: 0-based character offset within text node (default 0)
        has_text_node: whether the token addresses a text node rather than the element
    """

    doc_fragment_index: int | None
    xpath: str
    text_node_index: int
    char_offset: int
    has_text_node: bool = False

    @property
    def section_index(self) -> int:
        """1-based spine index of the section holding this point."""
        return self.doc_fragment_index if self.doc_fragment_index is not None else 1

    @classmethod
    def parse(cls, xpoint: str) -> Self:
        """Parse an xpoint string into components.

        Args:
            xpoint: The xpoint string to parse

        Returns:
            XPoint with extracted components

        Raises:
            XPointParseError: If the format is invalid
        """
        match = _XPOINT_PATTERN.match(xpoint)
        if not match:
            raise XPointParseError(xpoint, "does not match expected xpoint format")

        doc_fragment_str, xpath, text_node_str, offset_str = match.groups()

        doc_fragment_index = int(doc_fragment_str) if doc_fragment_str else None
        text_node_index = int(text_node_str) if text_node_str else 1
        char_offset = int(offset_str) if offset_str else 0

        if doc_fragment_index is not None and doc_fragment_index < 1:
            raise XPointParseError(xpoint, "DocFragment index must be >= 1")

        if text_node_index < 1:
            raise XPointParseError(xpoint, "text node index must be >= 1")

        return cls(
            doc_fragment_index=doc_fragment_index,
            xpath=xpath,
            text_node_index=text_node_index,
            char_offset=char_offset,
            has_text_node="/text()" in xpoint,
        )

    def to_string(self) -> str:
        """
        Convert XPoint back to its token string.

        Returns:
            XPoint string like "/body/DocFragment[12]/body/div/p[88]/text().223"
        """
        parts = []

        if self.doc_fragment_index is not None:
            parts.append(f"/body/DocFragment[{self.doc_fragment_index}]")

        parts.append(self.xpath)

        if self.has_text_node or self.text_node_index != 1 or self.char_offset != 0:
            if self.text_node_index != 1:
                parts.append(f"/text()[{self.text_node_index}]")
            else:
                parts.append("/text()")
            parts.append(f".{self.char_offset}")

        return "".join(parts)

    @classmethod
    def from_dict(cls, data: XPointDict) -> Self:
        """Create XPoint from dictionary (for JSON deserialization)."""
        return cls(
            doc_fragment_index=data.get("doc_fragment_index"),
            xpath=data["xpath"],
            text_node_index=data.get("text_node_index", 1),
            char_offset=data.get("char_offset", 0),
        )

    def to_dict(self) -> XPointDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "doc_fragment_index": self.doc_fragment_index,
            "xpath": self.xpath,
            "text_node_index": self.text_node_index,
            "char_offset": self.char_offset,
        }

    def compare_to(self, other: XPoint) -> int:  # noqa: PLR0911
        """
        Compare this XPoint to another for ordering.

        Comparison order:
        1. section_index
        2. XPath segments (element name, then index for each segment)
        3. text_node_index
        4. char_offset

        Sibling elements with different tag names are ordered alphabetically,
        which is deterministic but not always reading order. Use a
        document-order comparator when the section's DOM is available.

        Returns:
            -1 if self comes before other, 0 if same position, 1 if after
        """
        if self.section_index != other.section_index:
            return -1 if self.section_index < other.section_index else 1

        segments_self = parse_xpath_segments(self.xpath)
        segments_other = parse_xpath_segments(other.xpath)

        for (name_self, idx_self), (name_other, idx_other) in zip(
            segments_self, segments_other, strict=False
        ):
            if name_self != name_other:
                return -1 if name_self < name_other else 1

            if idx_self != idx_other:
                return -1 if idx_self < idx_other else 1

        # If one xpath has more segments, the shorter one comes first
        if len(segments_self) != len(segments_other):
            return -1 if len(segments_self) < len(segments_other) else 1

        if self.text_node_index != other.text_node_index:
            return -1 if self.text_node_index < other.text_node_index else 1

        if self.char_offset != other.char_offset:
            return -1 if self.char_offset < other.char_offset else 1

        return 0


@dataclass(frozen=True)
class PositionRange:
    """
    Range between two position tokens, as covered by a highlight.

    Both ends are kept as the token strings the renderer produced so they
    round-trip unchanged through storage and the overlay layer.
    """

    start: str
    end: str

    def __post_init__(self) -> None:
        """Validate that both tokens parse and start does not follow end."""
        start = XPoint.parse(self.start)
        end = XPoint.parse(self.end)

        if start.section_index > end.section_index:
            raise ValueError("Start position must come before end position")

        # Same element - compare text node and character offset
        if start.section_index == end.section_index and start.xpath == end.xpath:
            if start.text_node_index > end.text_node_index:
                raise ValueError("Start text node must be <= end text node")
            if (
                start.text_node_index == end.text_node_index
                and start.char_offset > end.char_offset
            ):
                raise ValueError("Start offset must be <= end offset in same element")

    @property
    def start_point(self) -> XPoint:
        return XPoint.parse(self.start)

    @property
    def end_point(self) -> XPoint:
        return XPoint.parse(self.end)

    @property
    def section_index(self) -> int:
        """Section the range starts in."""
        return self.start_point.section_index

    @classmethod
    def from_dict(cls, data: PositionRangeDict) -> Self:
        """Create PositionRange from dictionary (for JSON deserialization)."""
        return cls(start=data["start"], end=data["end"])

    def to_dict(self) -> PositionRangeDict:
        """Convert to dictionary for serialization."""
        return {"start": self.start, "end": self.end}

    def contains(self, position: str) -> bool:
        """
        Check if a position falls within this range (inclusive).

        Uses structural XPoint ordering.
        """
        point = XPoint.parse(position)
        return point.compare_to(self.start_point) >= 0 and point.compare_to(self.end_point) <= 0
