from __future__ import annotations

from pathlib import Path

from transed_engine.history import Snapshot
from transed_engine.runtime.settings import EditorSettings
from transed_engine.session import EditKind, EditorSession


def make_session(clock, **settings: object) -> EditorSession:
    return EditorSession(settings=EditorSettings(**settings), clock=clock)


def type_text(session: EditorSession, clock, text: str, *, step: float = 0.02) -> None:
    """Feed ``text`` one keystroke at a time, ``step`` seconds apart."""

    for index in range(1, len(text) + 1):
        typed = session.text + text[index - 1]
        session.on_buffer_changed(typed, len(typed))
        clock.advance(step)


def settle(session: EditorSession, clock) -> bool:
    clock.advance(session.timer.interval_ms / 1000.0)
    return session.process_timeouts()


def test_fresh_session_has_baseline_and_nothing_to_undo(clock) -> None:
    session = make_session(clock)

    assert session.history.undo_stack == (Snapshot(""),)
    assert session.can_undo() is False
    assert session.undo().status == "no_history"
    assert session.history.undo_stack == (Snapshot(""),)
    assert session.history.redo_stack == ()


def test_edit_is_rewritten_and_arms_capture(clock) -> None:
    session = make_session(clock)

    text, cursor = session.on_buffer_changed("h.", 2)

    assert (text, cursor) == ("ḥ", 1)
    assert session.text == "ḥ"
    assert session.dirty is True
    assert session.phase == "pending_capture"


def test_burst_of_edits_coalesces_into_one_snapshot(clock) -> None:
    session = make_session(clock)

    for typed in ("n", "nf", "nfr", "nfr ", "nfr h"):
        session.on_buffer_changed(typed, len(typed))
        clock.advance(0.02)

    clock.advance(0.3)
    assert session.process_timeouts() is False

    clock.advance(0.2)
    assert session.process_timeouts() is True
    assert [snap.text for snap in session.history.undo_stack] == ["", "nfr h"]

    clock.advance(5.0)
    assert session.process_timeouts() is False
    assert session.phase == "idle"
    assert len(session.history.undo_stack) == 2


def test_undo_and_redo_walk_checkpoints(clock) -> None:
    session = make_session(clock)
    type_text(session, clock, "h.tp")
    settle(session, clock)
    type_text(session, clock, " di")
    settle(session, clock)

    assert session.on_undo_requested() == "ḥtp"
    assert session.on_undo_requested() == ""
    assert session.can_undo() is False
    assert session.on_redo_requested() == "ḥtp"
    assert session.on_redo_requested() == "ḥtp dỉ"
    assert session.can_redo() is False


def test_undo_then_redo_restores_state_before_undo(clock) -> None:
    session = make_session(clock)
    type_text(session, clock, "s.dm")
    settle(session, clock)
    type_text(session, clock, " n=f")
    before = (session.text, session.cursor)

    session.undo()
    session.redo()

    assert (session.text, session.cursor) == before


def test_undo_discards_uncaptured_burst(clock) -> None:
    session = make_session(clock)
    type_text(session, clock, "nfr")

    result = session.undo()

    assert result.status == "ok"
    assert session.text == ""
    assert session.phase == "idle"
    assert session.on_redo_requested() == "nfr"


def test_redo_without_history_keeps_pending_capture(clock) -> None:
    session = make_session(clock)
    session.on_buffer_changed("nfr", 3)

    assert session.redo().status == "no_history"
    assert session.phase == "pending_capture"

    clock.advance(1.0)
    assert session.process_timeouts() is True
    assert [snap.text for snap in session.history.undo_stack] == ["", "nfr"]


def test_undo_without_history_keeps_pending_capture(clock) -> None:
    session = make_session(clock)
    session.load_document("nfr")
    session.on_buffer_changed("nfrw", 4)
    session.on_buffer_changed("nfr", 3)

    assert session.undo().status == "no_history"
    assert session.phase == "pending_capture"
    assert settle(session, clock) is True
    assert session.history.undo_stack[-1] == Snapshot("nfr", 3)


def test_undo_result_is_not_captured_again(clock) -> None:
    session = make_session(clock)
    type_text(session, clock, "ankh")
    settle(session, clock)

    session.undo()

    assert session.history.capture_enabled is False
    assert session.on_quiescence() is False
    assert settle(session, clock) is False
    assert [snap.text for snap in session.history.undo_stack] == []


def test_next_user_edit_resumes_capture_after_undo(clock) -> None:
    session = make_session(clock)
    type_text(session, clock, "nb")
    settle(session, clock)
    session.undo()

    session.on_buffer_changed("m", 1)

    assert session.history.capture_enabled is True
    assert settle(session, clock) is True
    assert session.history.undo_stack[-1] == Snapshot("m", 1)
    assert session.history.redo_stack == ()
    assert session.can_redo() is False


def test_programmatic_change_is_not_rewritten_or_armed(clock) -> None:
    session = make_session(clock)

    result = session.on_buffer_changed("h.tp", 4, EditKind.PROGRAMMATIC)

    assert result.text == "h.tp"
    assert session.text == "h.tp"
    assert session.phase == "idle"
    assert session.dirty is False


def test_unchanged_rewrite_does_not_arm(clock) -> None:
    session = make_session(clock)
    session.on_buffer_changed("nfr", 3)
    settle(session, clock)

    # Typing a stripped letter leaves the buffer as it was.
    session.on_buffer_changed("nfrc", 4)

    assert session.text == "nfr"
    assert session.cursor == 3
    assert session.phase == "idle"


def test_load_cancels_pending_capture_and_resets_history(clock) -> None:
    session = make_session(clock)
    type_text(session, clock, "Imn")

    session.load_document("h.tp dỉ nsw", Path("texts") / "offering.txt")

    assert session.text == "h.tp dỉ nsw"
    assert session.phase == "idle"
    assert session.dirty is False
    assert session.history.undo_stack == (Snapshot("h.tp dỉ nsw"),)
    assert settle(session, clock) is False
    assert session.title() == "offering.txt | Egyptian Hieroglyph Transliteration Pad"


def test_new_document_resets_to_untitled(clock) -> None:
    session = make_session(clock)
    session.load_document("ḥtp", "hotep.txt")
    type_text(session, clock, "w")

    session.new_document()

    assert session.text == ""
    assert session.filename == "Untitled.txt"
    assert session.path is None
    assert session.can_undo() is False


def test_close_cancels_pending_capture(clock) -> None:
    session = make_session(clock)
    type_text(session, clock, "nTr")

    session.close()

    assert session.closed is True
    assert session.phase == "idle"
    assert settle(session, clock) is False
    assert len(session.history.undo_stack) == 1


def test_title_marks_dirty_and_saved(clock) -> None:
    session = make_session(clock)
    assert session.title() == "Untitled.txt | Egyptian Hieroglyph Transliteration Pad"

    session.on_buffer_changed("nfr", 3)
    assert session.title().startswith("Untitled.txt* |")

    session.mark_saved("/tmp/nfr.txt")
    assert session.title().startswith("nfr.txt |")
    assert session.dirty is False


def test_caret_position_is_one_based(clock) -> None:
    session = make_session(clock)
    session.on_buffer_changed("ḥtp\ndỉ", 6)

    assert session.caret_position() == (2, 3)
    assert session.status_text() == "Ln 2, Col 3"

    session.move_cursor(0)
    assert session.status_text() == "Ln 1, Col 1"


def test_history_limit_comes_from_settings(clock) -> None:
    session = make_session(clock, history_limit=2)

    for word in ("nb", " nfr", " ḥtp"):
        type_text(session, clock, word)
        settle(session, clock)

    assert len(session.history.undo_stack) == 2


def test_excluded_groups_are_not_applied(clock) -> None:
    session = make_session(clock, exclude_groups=("strip",))

    session.on_buffer_changed("Cloud", 5)

    assert session.text == "Cloud"
