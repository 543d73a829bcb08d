"""Breath engine — session timing, phase cycling and history analytics."""

from breath_engine.clock import BreathCycleClock
from breath_engine.exceptions import (
    AlreadyRunningError,
    BreathEngineError,
    DuplicateSessionError,
    HistoryCorruptError,
    HistoryStoreError,
    InvalidPatternError,
    InvalidSessionLengthError,
    InvalidStateTransitionError,
)
from breath_engine.timer import SessionTimer, TickResult

__all__ = [
    "AlreadyRunningError",
    "BreathCycleClock",
    "BreathEngineError",
    "DuplicateSessionError",
    "HistoryCorruptError",
    "HistoryStoreError",
    "InvalidPatternError",
    "InvalidSessionLengthError",
    "InvalidStateTransitionError",
    "SessionTimer",
    "TickResult",
]
