"""Table of contents entries.

The chapter tree is rebuilt from the document every time it is opened, so
these are plain frozen values rather than persisted entities.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import unquote


@dataclass(frozen=True)
class TocEntry:
    """One node of the chapter tree. Leaves have an empty children tuple."""

    label: str
    href: str
    children: tuple[TocEntry, ...] = ()

    @property
    def file_part(self) -> str:
        """Href without its intra-file anchor, e.g. "text/ch03.xhtml"."""
        return unquote(self.href.split("#", 1)[0])

    @property
    def anchor(self) -> str | None:
        """Element id after '#', or None when the entry targets a whole file."""
        parts = self.href.split("#", 1)
        if len(parts) < 2 or not parts[1]:  # noqa: PLR2004
            return None
        return unquote(parts[1])

    def walk(self) -> Iterator[TocEntry]:
        """This entry followed by all descendants, depth first in reading order."""
        yield self
        for child in self.children:
            yield from child.walk()


def walk_toc(entries: tuple[TocEntry, ...] | list[TocEntry]) -> Iterator[TocEntry]:
    """Flatten a chapter tree depth first, keeping reading order."""
    for entry in entries:
        yield from entry.walk()


@dataclass(frozen=True)
class ChapterPosition:
    """A chapter that targets a section, with its anchor resolved if possible."""

    label: str
    position: str | None
