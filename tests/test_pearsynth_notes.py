from __future__ import annotations

import pytest

from pearsynth.notes import NoteTracker, note_id
from pearsynth.params import default_patch


class RecordingSink:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def note_on(self, note: str) -> None:
        self.events.append(("on", note))

    def note_off(self, note: str) -> None:
        self.events.append(("off", note))


def test_note_id() -> None:
    assert note_id("C#", 4) == "C#4"
    with pytest.raises(ValueError):
        note_id("H", 4)


def test_polyphonic_notes_stack() -> None:
    sink = RecordingSink()
    tracker = NoteTracker(sink)
    patch = default_patch()

    tracker.note_on("C4", patch)
    tracker.note_on("E4", patch)
    assert tracker.active == ("C4", "E4")

    tracker.note_off("C4", patch)
    assert tracker.active == ("E4",)
    assert sink.events == [("on", "C4"), ("on", "E4"), ("off", "C4")]


def test_monophonic_note_replaces_previous() -> None:
    sink = RecordingSink()
    tracker = NoteTracker(sink)
    patch = default_patch().model_copy(update={"playback_mode": "monophonic"})

    tracker.note_on("C4", patch)
    tracker.note_on("G4", patch)

    assert tracker.active == ("G4",)
    assert sink.events == [("on", "C4"), ("off", "C4"), ("on", "G4")]


def test_hold_mode_keeps_notes_sounding() -> None:
    tracker = NoteTracker(RecordingSink())
    patch = default_patch().model_copy(update={"hold_mode": True})

    tracker.note_on("A3", patch)
    tracker.note_off("A3", patch)
    assert tracker.is_active("A3")

    tracker.release_all()
    assert tracker.active == ()


def test_default_sink_only_logs() -> None:
    tracker = NoteTracker()
    tracker.note_on("D5", default_patch())
    tracker.note_off("D5", default_patch())
    assert tracker.active == ()
