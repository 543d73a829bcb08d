"""Derived, never-persisted views of timer and history state."""

from __future__ import annotations

from dataclasses import dataclass

from breath_engine.models.enums import PHASE_PROMPTS, Phase, TimerStatus


def format_clock(seconds: int) -> str:
    """Convert seconds to 'MM:SS'. e.g. 305 -> '05:05'."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


@dataclass(frozen=True)
class TimerSnapshot:
    """Everything a renderer needs to draw the current timer state."""

    status: TimerStatus
    phase: Phase
    phase_seconds_left: int
    seconds_left: int
    total_seconds: int

    @property
    def progress(self) -> float:
        """Fraction of the session elapsed, in [0, 1]."""
        if self.total_seconds <= 0:
            return 0.0
        return 1.0 - self.seconds_left / self.total_seconds

    @property
    def prompt(self) -> str:
        return PHASE_PROMPTS[self.phase]

    @property
    def is_active(self) -> bool:
        return self.status in (TimerStatus.RUNNING, TimerStatus.PAUSED)


@dataclass(frozen=True)
class HistorySnapshot:
    """Streak and weekly total, recomputed from the history on every query."""

    streak_days: int
    week_total_minutes: float
