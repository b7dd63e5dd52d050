from .book import Book
from .search import SearchResult, TextMatch
from .toc import ChapterPosition, TocEntry, walk_toc

__all__ = ["Book", "ChapterPosition", "SearchResult", "TextMatch", "TocEntry", "walk_toc"]
