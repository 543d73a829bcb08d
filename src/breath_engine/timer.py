"""SessionTimer — lifecycle and overall countdown of one breathing session.

The timer never schedules itself. A host (scheduler loop, UI rerun, test)
calls :meth:`SessionTimer.tick` once per second while the session runs,
and must not deliver overlapping ticks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from breath_engine.clock import BreathCycleClock
from breath_engine.exceptions import (
    AlreadyRunningError,
    InvalidSessionLengthError,
    InvalidStateTransitionError,
)
from breath_engine.models.cycle import BreathCycleState, PhaseTransitioned
from breath_engine.models.enums import TimerStatus
from breath_engine.models.pattern import DEFAULT_PATTERN, PhasePattern
from breath_engine.models.session_record import SessionRecord, new_session_id
from breath_engine.models.snapshot import TimerSnapshot

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick.

    ``transition`` must be handled (e.g. chimed) before the next tick.
    ``record`` is set only on the tick that finishes the session.
    """

    snapshot: TimerSnapshot
    transition: PhaseTransitioned | None = None
    record: SessionRecord | None = None

    @property
    def finished(self) -> bool:
        return self.snapshot.status == TimerStatus.FINISHED


class SessionTimer:
    """Drives one session: Idle -> Running (<-> Paused) -> Finished | Stopped.

    Usage:
        timer = SessionTimer()
        timer.start(pattern, total_seconds=300)
        result = timer.tick()          # once per second
        record = timer.stop(completed=True)

    Every operation either succeeds fully or raises without touching state.
    """

    def __init__(
        self,
        now: Callable[[], datetime] = _local_now,
        id_factory: Callable[[], str] = new_session_id,
    ) -> None:
        self._now = now
        self._id_factory = id_factory
        self._status = TimerStatus.IDLE
        self._pattern: PhasePattern = DEFAULT_PATTERN
        self._clock = BreathCycleClock(DEFAULT_PATTERN)
        self._cycle: BreathCycleState = self._clock.initial_state()
        self._total_seconds = 0
        self._seconds_left = 0
        self._started_at: datetime | None = None

    # -- Read-only state --------------------------------------------------

    @property
    def status(self) -> TimerStatus:
        return self._status

    @property
    def pattern(self) -> PhasePattern:
        return self._pattern

    @property
    def cycle_state(self) -> BreathCycleState:
        return self._cycle

    @property
    def seconds_left(self) -> int:
        return self._seconds_left

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def elapsed_seconds(self) -> int:
        return self._total_seconds - self._seconds_left

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            status=self._status,
            phase=self._cycle.current_phase,
            phase_seconds_left=self._cycle.seconds_remaining_in_phase,
            seconds_left=self._seconds_left,
            total_seconds=self._total_seconds,
        )

    # -- Lifecycle --------------------------------------------------------

    def start(self, pattern: PhasePattern, total_seconds: int) -> None:
        """Begin a session at the start of an inhale."""
        if self._status != TimerStatus.IDLE:
            raise AlreadyRunningError(
                f"Cannot start while timer is {self._status.name}; reset() first"
            )
        if isinstance(total_seconds, bool) or not isinstance(total_seconds, int):
            raise InvalidSessionLengthError(
                f"total_seconds must be a whole number, got {total_seconds!r}"
            )
        if total_seconds < 1:
            raise InvalidSessionLengthError(
                f"total_seconds must be at least 1, got {total_seconds}"
            )

        self._pattern = pattern
        self._clock = BreathCycleClock(pattern)
        self._cycle = self._clock.initial_state()
        self._total_seconds = total_seconds
        self._seconds_left = total_seconds
        self._started_at = self._now()
        self._status = TimerStatus.RUNNING
        logger.info(
            "Session started: pattern %s, %ds", pattern.descriptor, total_seconds
        )

    def tick(self) -> TickResult:
        """Advance the session by one second.

        Order is fixed: countdown, then phase advance, then finish check.
        """
        if self._status != TimerStatus.RUNNING:
            raise InvalidStateTransitionError("tick", self._status)

        self._seconds_left = max(0, self._seconds_left - 1)
        self._cycle, transition = self._clock.advance(self._cycle)
        if transition is not None:
            logger.debug(
                "Phase %s -> %s", transition.from_phase.name, transition.to_phase.name
            )

        record = None
        if self._seconds_left == 0:
            self._status = TimerStatus.FINISHED
            # Ran to completion: the full configured length, not wall-clock time
            record = self._make_record(self._total_seconds)
            logger.info("Session finished after %ds", self._total_seconds)

        return TickResult(snapshot=self.snapshot(), transition=transition, record=record)

    def pause(self) -> None:
        if self._status != TimerStatus.RUNNING:
            raise InvalidStateTransitionError("pause", self._status)
        self._status = TimerStatus.PAUSED
        logger.info("Session paused with %ds left", self._seconds_left)

    def resume(self) -> None:
        if self._status != TimerStatus.PAUSED:
            raise InvalidStateTransitionError("resume", self._status)
        self._status = TimerStatus.RUNNING
        logger.info("Session resumed with %ds left", self._seconds_left)

    def stop(self, completed: bool = False) -> SessionRecord | None:
        """End the session early and return its record.

        ``completed=True`` marks the session FINISHED (the user chose to
        finish), otherwise STOPPED. Returns None when no time has elapsed.
        """
        if self._status not in (TimerStatus.RUNNING, TimerStatus.PAUSED):
            raise InvalidStateTransitionError("stop", self._status)

        self._status = TimerStatus.FINISHED if completed else TimerStatus.STOPPED
        elapsed = self.elapsed_seconds
        logger.info("Session %s after %ds", self._status.name.lower(), elapsed)
        if elapsed == 0:
            return None
        return self._make_record(elapsed)

    def reset(self) -> None:
        """Abandon any session and return to IDLE without recording history."""
        if self._status != TimerStatus.IDLE:
            logger.info("Timer reset from %s", self._status.name)
        self._status = TimerStatus.IDLE
        self._clock = BreathCycleClock(self._pattern)
        self._cycle = self._clock.initial_state()
        self._total_seconds = 0
        self._seconds_left = 0
        self._started_at = None

    # -- Internals --------------------------------------------------------

    def _make_record(self, duration_seconds: int) -> SessionRecord:
        if self._started_at is None:
            raise InvalidStateTransitionError("record a session", self._status)
        return SessionRecord(
            id=self._id_factory(),
            started_at=self._started_at,
            duration_seconds=duration_seconds,
            pattern_descriptor=self._pattern.descriptor,
        )
