"""Adapters onto SQLAlchemy and the EPUB format."""
