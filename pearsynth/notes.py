"""Note triggering against a sink that performs no synthesis.

The tracker only keeps the set of sounding note ids consistent with the
patch's playback and hold modes and forwards start/stop events to a sink.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .params import PatchState

_LOGGER = logging.getLogger("pearsynth.notes")

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")


def note_id(name: str, octave: int) -> str:
    if name not in NOTE_NAMES:
        raise ValueError(f"Unknown note name: {name!r}. Valid: {list(NOTE_NAMES)}")
    return f"{name}{octave}"


class NoteSink(Protocol):
    def note_on(self, note: str) -> None: ...

    def note_off(self, note: str) -> None: ...


class LoggingNoteSink:
    """Sink that records nothing but a debug log line per event."""

    def note_on(self, note: str) -> None:
        _LOGGER.debug("note on %s", note)

    def note_off(self, note: str) -> None:
        _LOGGER.debug("note off %s", note)


class NoteTracker:
    def __init__(self, sink: NoteSink | None = None) -> None:
        self._sink: NoteSink = sink or LoggingNoteSink()
        self._active: list[str] = []

    @property
    def active(self) -> tuple[str, ...]:
        return tuple(self._active)

    def is_active(self, note: str) -> bool:
        return note in self._active

    def note_on(self, note: str, patch: PatchState) -> None:
        if patch.playback_mode == "monophonic":
            for other in [n for n in self._active if n != note]:
                self._release(other)
        if note not in self._active:
            self._active.append(note)
        self._sink.note_on(note)

    def note_off(self, note: str, patch: PatchState) -> None:
        """Release ``note`` unless hold mode keeps it sounding."""
        if patch.hold_mode:
            return
        if note in self._active:
            self._release(note)

    def release_all(self) -> None:
        for note in list(self._active):
            self._release(note)

    def _release(self, note: str) -> None:
        self._active.remove(note)
        self._sink.note_off(note)
