"""Pydantic schemas for highlight input validation."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from readmark.domain.common.value_objects import HighlightColor


class HighlightUpdate(BaseModel):
    """
    Partial update of a Highlight.

    Only fields explicitly passed are applied, so ``HighlightUpdate(note=None)``
    clears the note while ``HighlightUpdate(color=...)`` leaves it untouched.
    """

    model_config = ConfigDict(extra="forbid")

    color: HighlightColor | None = Field(None, description="New highlight color")
    note: str | None = Field(None, description="New note, or None to clear it")

    @field_validator("color")
    @classmethod
    def color_cannot_be_cleared(cls, value: HighlightColor | None) -> HighlightColor | None:
        if value is None:
            raise ValueError("color cannot be cleared")
        return value

    @property
    def changes_color(self) -> bool:
        return "color" in self.model_fields_set

    @property
    def changes_note(self) -> bool:
        return "note" in self.model_fields_set
