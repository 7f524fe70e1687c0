"""Exception hierarchy for PomoTimer."""

from __future__ import annotations


class PomoTimerError(Exception):
    """Base class for every error the timer surfaces to callers."""


class StorageError(PomoTimerError):
    """Reading or writing persisted settings / session state failed.

    Covers I/O failures on the app-data directory and its files as well
    as malformed JSON or fields of the wrong type.
    """


class InvalidModeError(PomoTimerError):
    """The session state's mode is not one of the known modes."""

    def __init__(self, mode: object) -> None:
        super().__init__(f"invalid mode: {mode!r}")
        self.mode = mode
