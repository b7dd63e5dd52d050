"""Reading-position, bookmark, highlight and search engine for EPUB documents."""
