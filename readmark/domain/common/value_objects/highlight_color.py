"""HighlightColor value object for the fixed highlight palette."""

from enum import StrEnum


class HighlightColor(StrEnum):
    """One of the five colors a highlight can be drawn in."""

    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PINK = "pink"
    PURPLE = "purple"

    @property
    def fill(self) -> str:
        """Hex fill used by the overlay layer."""
        return HIGHLIGHT_FILLS[self]

    @classmethod
    def default(cls) -> "HighlightColor":
        """Color offered when a selection is first made."""
        return cls.YELLOW


HIGHLIGHT_FILLS: dict[HighlightColor, str] = {
    HighlightColor.YELLOW: "#fef08a",
    HighlightColor.GREEN: "#86efac",
    HighlightColor.BLUE: "#7dd3fc",
    HighlightColor.PINK: "#f9a8d4",
    HighlightColor.PURPLE: "#d8b4fe",
}
