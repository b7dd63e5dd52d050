"""
Highlight creation and editing session.

A reader holds at most one session per open book. It walks
idle -> color picking -> editing -> idle, persists through the annotation
store and keeps the overlay layer in step with what is stored.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from readmark.application.reading.protocols.overlay import (
    OVERLAY_KIND_HIGHLIGHT,
    OverlayProtocol,
    SelectionProtocol,
)
from readmark.application.reading.services.annotation_store import AnnotationStore
from readmark.config import Settings, get_settings
from readmark.domain.common.domain_event import DomainEvent
from readmark.domain.common.value_objects import HighlightColor, PositionRange
from readmark.domain.reading.entities.highlight import Highlight
from readmark.domain.reading.exceptions import HighlightNotFoundError
from readmark.exceptions import InvalidSessionTransitionError, OverlayRegistrationError
from readmark.schemas.annotation_schemas import HighlightUpdate

logger = structlog.get_logger(__name__)

HAS_NOTE_CSS_CLASS = "hl-has-note"


@dataclass(frozen=True)
class Idle:
    """No selection and no highlight open."""


@dataclass(frozen=True)
class ColorPicking:
    """A fresh selection waiting for a color. Nothing is persisted yet."""

    position_range: PositionRange
    text: str
    color: HighlightColor = HighlightColor.YELLOW


@dataclass(frozen=True)
class Editing:
    """A persisted highlight open for color and note changes."""

    highlight_id: int
    position_range: PositionRange
    text: str
    color: HighlightColor
    note: str | None = None

    @classmethod
    def of(cls, highlight: Highlight) -> Editing:
        return cls(
            highlight_id=highlight.id.value,
            position_range=highlight.position_range,
            text=highlight.text,
            color=highlight.color,
            note=highlight.note,
        )


SessionState = Idle | ColorPicking | Editing


@dataclass(frozen=True)
class HighlightClicked(DomainEvent):
    """The reader clicked a highlight overlay."""

    position_range: PositionRange


class HighlightSession:
    """State machine coordinating highlight edits with the overlay layer."""

    def __init__(
        self,
        book_id: int,
        store: AnnotationStore,
        overlay: OverlayProtocol,
        selection: SelectionProtocol,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.book_id = book_id
        self.store = store
        self.overlay = overlay
        self.selection = selection
        self.fill_opacity = settings.HIGHLIGHT_FILL_OPACITY
        self.text_max_length = settings.HIGHLIGHT_TEXT_MAX_LENGTH
        self._state: SessionState = Idle()

    @property
    def state(self) -> SessionState:
        return self._state

    def _require(self, action: str, *allowed: type) -> None:
        if not isinstance(self._state, allowed):
            raise InvalidSessionTransitionError(action, type(self._state).__name__)

    def _transition(self, state: SessionState) -> SessionState:
        logger.debug(
            "highlight_session_transition",
            book_id=self.book_id,
            from_state=type(self._state).__name__,
            to_state=type(state).__name__,
        )
        self._state = state
        return state

    # Transitions

    def select_text(self, position_range: PositionRange, text: str) -> SessionState:
        """
        Start a draft from the reader's selection.

        The native selection stays visible while the reader picks a color.
        Blank selections are ignored.

        Raises:
            InvalidSessionTransitionError: If a session is already in progress
        """
        self._require("select_text", Idle)

        if not text.strip():
            return self._state

        return self._transition(
            ColorPicking(
                position_range=position_range,
                text=text[: self.text_max_length],
                color=HighlightColor.default(),
            )
        )

    def choose_color(self, color: HighlightColor) -> Highlight:
        """
        Persist the draft with the chosen color and open it for editing.

        This is the only path that creates highlights. The highlight exists
        in the store from here on, even if the reader cancels afterwards.
        """
        self._require("choose_color", ColorPicking)
        draft = self._state
        assert isinstance(draft, ColorPicking)

        highlight = self.store.create_highlight(
            self.book_id, draft.position_range, draft.text, color
        )
        self.selection.clear()
        self._register_overlay(highlight)

        self._transition(Editing.of(highlight))
        return highlight

    def change_color(self, color: HighlightColor) -> Highlight:
        """Store the new color right away and redraw the overlay."""
        self._require("change_color", Editing)
        editing = self._state
        assert isinstance(editing, Editing)

        highlight = self.store.update_highlight(editing.highlight_id, HighlightUpdate(color=color))
        self._unregister_overlay(highlight.position_range)
        self._register_overlay(highlight)

        self._transition(Editing.of(highlight))
        return highlight

    def save_note(self, note: str | None) -> Highlight:
        """Store the note, redraw the overlay with its note marker and close."""
        self._require("save_note", Editing)
        editing = self._state
        assert isinstance(editing, Editing)

        highlight = self.store.update_highlight(editing.highlight_id, HighlightUpdate(note=note))
        self._unregister_overlay(highlight.position_range)
        self._register_overlay(highlight)

        self._transition(Idle())
        return highlight

    def cancel(self) -> SessionState:
        """
        Close the popup.

        A draft is discarded along with the native selection. An open
        highlight stays as stored. Cancelling while idle does nothing.
        """
        if isinstance(self._state, Idle):
            return self._state
        if isinstance(self._state, ColorPicking):
            self.selection.clear()
        return self._transition(Idle())

    def delete(self) -> bool:
        """
        Delete the open highlight and its overlay.

        Returns:
            True if a stored highlight was removed. Deleting with no
            highlight open, or one that is already gone, returns False.
        """
        if not isinstance(self._state, Editing):
            logger.debug(
                "highlight_delete_ignored",
                book_id=self.book_id,
                state=type(self._state).__name__,
            )
            return False

        editing = self._state
        deleted = self.store.delete_highlight(editing.highlight_id)
        self._unregister_overlay(editing.position_range)

        self._transition(Idle())
        return deleted

    def delete_highlight(self, highlight_id: int) -> bool:
        """
        Delete a highlight picked from a list, along with its overlay.

        Allowed in any state. Deleting the highlight that is open for
        editing also closes the popup.

        Returns:
            True if a stored highlight was removed, False if none existed
        """
        try:
            highlight = self.store.get_highlight(highlight_id)
        except HighlightNotFoundError:
            logger.debug(
                "highlight_delete_ignored", book_id=self.book_id, highlight_id=highlight_id
            )
            return False

        deleted = self.store.delete_highlight(highlight_id)
        self._unregister_overlay(highlight.position_range)

        if isinstance(self._state, Editing) and self._state.highlight_id == highlight_id:
            self._transition(Idle())
        return deleted

    def open_highlight(self, position_range: PositionRange) -> Highlight | None:
        """
        Open the stored highlight drawn over position_range for editing.

        Returns:
            The highlight, or None when nothing is stored for the range

        Raises:
            InvalidSessionTransitionError: If a session is already in progress
        """
        self._require("open_highlight", Idle)

        highlight = self.store.find_highlight_by_range(self.book_id, position_range)
        if highlight is None:
            logger.info(
                "clicked_highlight_not_found",
                book_id=self.book_id,
                position_range=position_range.to_dict(),
            )
            return None

        self._transition(Editing.of(highlight))
        return highlight

    def dispatch(self, event: DomainEvent) -> None:
        """Handle an event emitted by the overlay layer."""
        if isinstance(event, HighlightClicked):
            try:
                self.open_highlight(event.position_range)
            except InvalidSessionTransitionError as e:
                logger.info("highlight_click_ignored", book_id=self.book_id, reason=str(e))
        else:
            logger.warning("unhandled_session_event", event_type=event.event_type)

    # Overlays

    def overlay_style(self, highlight: Highlight) -> dict[str, str]:
        return {"fill": highlight.color.fill, "fill-opacity": self.fill_opacity}

    def restore_overlays(self) -> int:
        """
        Draw every stored highlight of the book, e.g. after a re-render.

        Returns:
            Number of overlays that were registered
        """
        registered = 0
        for highlight in self.store.list_highlights(self.book_id):
            if self._register_overlay(highlight):
                registered += 1
        return registered

    def _register_overlay(self, highlight: Highlight) -> bool:
        position_range = highlight.position_range

        def on_click() -> None:
            self.dispatch(HighlightClicked(position_range=position_range))

        try:
            self.overlay.add_annotation(
                OVERLAY_KIND_HIGHLIGHT,
                position_range,
                self.overlay_style(highlight),
                on_click,
                HAS_NOTE_CSS_CLASS if highlight.has_note() else "",
            )
        except OverlayRegistrationError as e:
            # Range not in the rendered section
            logger.debug("overlay_not_registered", highlight_id=highlight.id.value, error=str(e))
            return False
        return True

    def _unregister_overlay(self, position_range: PositionRange) -> None:
        try:
            self.overlay.remove_annotation(position_range, OVERLAY_KIND_HIGHLIGHT)
        except OverlayRegistrationError as e:
            logger.debug(
                "overlay_not_removed", position_range=position_range.to_dict(), error=str(e)
            )
