"""Pydantic schemas validating engine inputs."""

from .annotation_schemas import HighlightUpdate

__all__ = ["HighlightUpdate"]
