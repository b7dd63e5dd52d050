from .chapter_resolver import AnchorResolver, ChapterResolver, hrefs_match

__all__ = ["AnchorResolver", "ChapterResolver", "hrefs_match"]
