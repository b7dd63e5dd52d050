from .epub_document import EpubDocument, EpubSection

__all__ = ["EpubDocument", "EpubSection"]
