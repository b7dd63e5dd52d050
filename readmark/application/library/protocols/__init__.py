from .book_repository import BookRepositoryProtocol
from .document import ContentSection, Document

__all__ = [
    "BookRepositoryProtocol",
    "ContentSection",
    "Document",
]
