"""Tests for the highlight creation/edit session."""

import pytest

from readmark.application.reading.services.annotation_store import AnnotationStore
from readmark.application.reading.services.highlight_session import (
    ColorPicking,
    Editing,
    HighlightClicked,
    HighlightSession,
    Idle,
)
from readmark.config import Settings
from readmark.domain.common.value_objects import HighlightColor, PositionRange
from readmark.domain.library.entities.book import Book
from readmark.exceptions import InvalidSessionTransitionError

RANGE = PositionRange(
    start="/body/DocFragment[2]/body/p[3]/text().0",
    end="/body/DocFragment[2]/body/p[3]/text().16",
)
OTHER_RANGE = PositionRange(
    start="/body/DocFragment[5]/body/p[1]/text().0",
    end="/body/DocFragment[5]/body/p[1]/text().9",
)


@pytest.fixture
def session(store, test_book: Book, overlay, selection, test_settings: Settings):
    return HighlightSession(test_book.id.value, store, overlay, selection, test_settings)


class TestSelection:
    def test_select_text_enters_color_picking_with_default_color(
        self, session: HighlightSession, selection
    ) -> None:
        state = session.select_text(RANGE, "Call me Ishmael.")

        assert state == ColorPicking(RANGE, "Call me Ishmael.", HighlightColor.YELLOW)
        assert selection.cleared == 0

    def test_selected_text_is_truncated(self, session: HighlightSession) -> None:
        state = session.select_text(RANGE, "a" * 700)

        assert isinstance(state, ColorPicking)
        assert len(state.text) == 500

    def test_configured_text_limit_is_applied(
        self, store: AnnotationStore, test_book: Book, overlay, selection
    ) -> None:
        settings = Settings(_env_file=None, HIGHLIGHT_TEXT_MAX_LENGTH=20)
        session = HighlightSession(test_book.id.value, store, overlay, selection, settings)

        session.select_text(RANGE, "a" * 700)
        highlight = session.choose_color(HighlightColor.YELLOW)

        assert len(highlight.text) == 20

    def test_blank_selection_is_ignored(self, session: HighlightSession) -> None:
        assert isinstance(session.select_text(RANGE, "   "), Idle)

    def test_new_selection_only_from_idle(self, session: HighlightSession) -> None:
        session.select_text(RANGE, "first")

        with pytest.raises(InvalidSessionTransitionError):
            session.select_text(OTHER_RANGE, "second")

    def test_cancel_from_color_picking_persists_nothing(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay, selection
    ) -> None:
        session.select_text(RANGE, "draft")

        session.cancel()

        assert isinstance(session.state, Idle)
        assert store.list_highlights(test_book.id.value) == []
        assert overlay.annotations == {}
        assert selection.cleared == 1


class TestChooseColor:
    def test_choose_color_creates_highlight_and_overlay(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay, selection
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")

        highlight = session.choose_color(HighlightColor.BLUE)

        assert store.get_highlight(highlight.id.value).color is HighlightColor.BLUE
        assert selection.cleared == 1
        assert overlay.get(RANGE)["style"] == {"fill": "#7dd3fc", "fill-opacity": "0.4"}
        assert overlay.get(RANGE)["css_class"] == ""
        state = session.state
        assert isinstance(state, Editing)
        assert state.highlight_id == highlight.id.value

    def test_highlight_survives_cancel_after_color_choice(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        session.choose_color(HighlightColor.GREEN)

        session.cancel()

        assert isinstance(session.state, Idle)
        assert len(store.list_highlights(test_book.id.value)) == 1

    def test_choose_color_requires_a_draft(self, session: HighlightSession) -> None:
        with pytest.raises(InvalidSessionTransitionError):
            session.choose_color(HighlightColor.GREEN)


class TestEditing:
    def test_three_color_changes_leave_final_color_and_one_overlay(
        self, session: HighlightSession, store: AnnotationStore, overlay
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        highlight = session.choose_color(HighlightColor.YELLOW)

        for color in (HighlightColor.GREEN, HighlightColor.PINK, HighlightColor.PURPLE):
            session.change_color(color)

        assert store.get_highlight(highlight.id.value).color is HighlightColor.PURPLE
        assert len(overlay.annotations) == 1
        assert overlay.get(RANGE)["style"]["fill"] == "#d8b4fe"

    def test_save_note_marks_overlay_and_returns_to_idle(
        self, session: HighlightSession, store: AnnotationStore, overlay
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        highlight = session.choose_color(HighlightColor.YELLOW)

        session.save_note("first line of the book")

        assert isinstance(session.state, Idle)
        assert store.get_highlight(highlight.id.value).note == "first line of the book"
        assert overlay.get(RANGE)["css_class"] == "hl-has-note"
        assert len(overlay.annotations) == 1

    def test_delete_removes_record_and_overlay(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        session.choose_color(HighlightColor.YELLOW)

        assert session.delete() is True
        assert session.delete() is False

        assert isinstance(session.state, Idle)
        assert store.list_highlights(test_book.id.value) == []
        assert overlay.annotations == {}

    def test_change_color_requires_editing(self, session: HighlightSession) -> None:
        with pytest.raises(InvalidSessionTransitionError):
            session.change_color(HighlightColor.PINK)


class TestDeleteFromList:
    def test_delete_from_idle_removes_record_and_overlay(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        highlight = session.choose_color(HighlightColor.YELLOW)
        session.save_note("opening line")

        assert session.delete_highlight(highlight.id.value) is True

        assert isinstance(session.state, Idle)
        assert store.list_highlights(test_book.id.value) == []
        assert overlay.annotations == {}

    def test_deleted_highlight_no_longer_reacts_to_clicks(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay
    ) -> None:
        highlight = store.create_highlight(
            test_book.id.value, RANGE, "Call me Ishmael.", HighlightColor.GREEN
        )
        session.restore_overlays()
        on_click = overlay.get(RANGE)["on_click"]

        session.delete_highlight(highlight.id.value)

        assert overlay.annotations == {}
        assert callable(on_click)
        on_click()
        assert isinstance(session.state, Idle)

    def test_deleting_open_highlight_closes_popup(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        highlight = session.choose_color(HighlightColor.YELLOW)

        assert session.delete_highlight(highlight.id.value) is True
        assert isinstance(session.state, Idle)

    def test_deleting_another_highlight_keeps_editing(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay
    ) -> None:
        other = store.create_highlight(
            test_book.id.value, OTHER_RANGE, "other", HighlightColor.PINK
        )
        session.select_text(RANGE, "Call me Ishmael.")
        session.choose_color(HighlightColor.YELLOW)

        assert session.delete_highlight(other.id.value) is True

        assert isinstance(session.state, Editing)
        assert list(overlay.annotations) == [("highlight", RANGE.start, RANGE.end)]

    def test_second_delete_is_a_no_op(self, session: HighlightSession, store, test_book) -> None:
        highlight = store.create_highlight(
            test_book.id.value, RANGE, "Call me Ishmael.", HighlightColor.GREEN
        )

        assert session.delete_highlight(highlight.id.value) is True
        assert session.delete_highlight(highlight.id.value) is False


class TestOverlayClicks:
    def test_clicking_overlay_opens_highlight_for_editing(
        self, session: HighlightSession, overlay
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        highlight = session.choose_color(HighlightColor.YELLOW)
        session.save_note("note")

        overlay.click(RANGE)

        state = session.state
        assert isinstance(state, Editing)
        assert state.highlight_id == highlight.id.value
        assert state.note == "note"

    def test_click_resolves_current_stored_state(
        self, session: HighlightSession, store: AnnotationStore, overlay
    ) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        session.choose_color(HighlightColor.YELLOW)
        session.change_color(HighlightColor.BLUE)
        session.cancel()

        overlay.click(RANGE)

        state = session.state
        assert isinstance(state, Editing)
        assert state.color is HighlightColor.BLUE

    def test_click_while_busy_is_ignored(self, session: HighlightSession, overlay) -> None:
        session.select_text(RANGE, "Call me Ishmael.")
        session.choose_color(HighlightColor.YELLOW)
        session.cancel()
        session.select_text(OTHER_RANGE, "another")

        session.dispatch(HighlightClicked(position_range=RANGE))

        assert isinstance(session.state, ColorPicking)

    def test_click_on_deleted_highlight_stays_idle(self, session: HighlightSession) -> None:
        assert session.open_highlight(RANGE) is None
        assert isinstance(session.state, Idle)


class TestRestoreOverlays:
    def test_restore_skips_ranges_outside_rendered_section(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay
    ) -> None:
        store.create_highlight(test_book.id.value, RANGE, "one", HighlightColor.GREEN)
        store.create_highlight(test_book.id.value, OTHER_RANGE, "two", HighlightColor.PINK)
        overlay.unrendered_sections.add(OTHER_RANGE.section_index)

        registered = session.restore_overlays()

        assert registered == 1
        assert list(overlay.annotations) == [("highlight", RANGE.start, RANGE.end)]

    def test_delete_tolerates_unrendered_overlay(
        self, session: HighlightSession, store: AnnotationStore, test_book: Book, overlay
    ) -> None:
        session.select_text(OTHER_RANGE, "Call me Ishmael.")
        session.choose_color(HighlightColor.YELLOW)
        overlay.unrendered_sections.add(OTHER_RANGE.section_index)

        assert session.delete() is True
        assert store.list_highlights(test_book.id.value) == []
