"""Custom exception hierarchy for the breath engine."""

from __future__ import annotations


class BreathEngineError(Exception):
    """Base exception for all breath_engine errors."""


class InvalidPatternError(BreathEngineError, ValueError):
    """A breathing pattern violates the phase duration constraints."""


class InvalidSessionLengthError(BreathEngineError, ValueError):
    """The requested session length is outside the accepted range."""


class AlreadyRunningError(BreathEngineError):
    """start() was called on a timer that is not idle."""


class InvalidStateTransitionError(BreathEngineError):
    """A lifecycle operation is not valid in the timer's current state."""

    def __init__(self, operation: str, status: object) -> None:
        name = getattr(status, "name", str(status))
        super().__init__(f"Cannot {operation} while timer is {name}")
        self.operation = operation
        self.status = status


class HistoryStoreError(BreathEngineError):
    """Base error for session history persistence."""


class DuplicateSessionError(HistoryStoreError):
    """A record with the same id is already in the store."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id!r} already recorded")
        self.session_id = session_id


class HistoryCorruptError(HistoryStoreError):
    """The persisted history could not be read or written."""
