from __future__ import annotations


class PearSynthError(Exception):
    """Base error for the pearsynth library."""


class InvalidPatchError(PearSynthError):
    """Raised when patch data cannot be parsed or validated."""


class InvalidUpdateError(PearSynthError):
    """Raised when an update payload cannot be parsed or validated."""


class UnknownUpdateKind(InvalidUpdateError):
    """An update names a kind the store does not recognize.

    The store treats this as a no-op and reports it through its hooks
    instead of letting it escape.
    """

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown update kind: {kind!r}")
        self.kind = kind


class DragStateError(PearSynthError):
    """Raised when a drag session receives an event out of order."""
