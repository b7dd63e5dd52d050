"""Value types produced by full-text search."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextMatch:
    """A raw hit reported by a section's text-match primitive."""

    position: str
    excerpt: str


@dataclass(frozen=True)
class SearchResult:
    """A search hit attributed to the chapter it falls in. Never persisted."""

    position: str
    excerpt: str
    chapter_title: str

    def to_dict(self) -> dict[str, str]:
        return {
            "position": self.position,
            "excerpt": self.excerpt,
            "chapter_title": self.chapter_title,
        }
