from .book_search_service import BookSearchService
from .reading_progress_service import ReadingProgressService

__all__ = ["BookSearchService", "ReadingProgressService"]
