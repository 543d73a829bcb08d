"""Data models for the breath engine."""

from breath_engine.models.config import SessionConfig
from breath_engine.models.cycle import BreathCycleState, PhaseTransitioned
from breath_engine.models.enums import Phase, TimerStatus
from breath_engine.models.pattern import DEFAULT_PATTERN, PRESET_PATTERNS, PhasePattern
from breath_engine.models.session_record import SessionRecord, new_session_id
from breath_engine.models.snapshot import HistorySnapshot, TimerSnapshot

__all__ = [
    "BreathCycleState",
    "DEFAULT_PATTERN",
    "HistorySnapshot",
    "PRESET_PATTERNS",
    "Phase",
    "PhasePattern",
    "PhaseTransitioned",
    "SessionConfig",
    "SessionRecord",
    "TimerSnapshot",
    "TimerStatus",
    "new_session_id",
]
