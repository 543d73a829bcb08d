"""BreathCycleClock — pure, tick-driven phase advancement.

The clock owns no timer and reads no wall clock. Each call to
:meth:`BreathCycleClock.advance` consumes exactly one tick and returns the
next state, so phase boundaries stay exact however the host schedules ticks.
"""

from __future__ import annotations

from breath_engine.models.cycle import BreathCycleState, PhaseTransitioned
from breath_engine.models.enums import PHASE_ORDER, Phase, next_phase
from breath_engine.models.pattern import PhasePattern


class BreathCycleClock:
    """Advances a BreathCycleState through a PhasePattern one tick at a time.

    Usage:
        clock = BreathCycleClock(pattern)
        state = clock.initial_state()
        state, event = clock.advance(state)
    """

    def __init__(self, pattern: PhasePattern) -> None:
        self.pattern = pattern

    def initial_state(self) -> BreathCycleState:
        """State at session start: the full inhale still ahead."""
        return BreathCycleState(
            current_phase=Phase.INHALE,
            seconds_remaining_in_phase=self.pattern.inhale_seconds,
        )

    def advance(
        self, state: BreathCycleState
    ) -> tuple[BreathCycleState, PhaseTransitioned | None]:
        """Consume one tick.

        Returns the new state and, when the tick crossed a phase boundary,
        a PhaseTransitioned event. Zero-length phases (a hold of 0s) are
        passed through within the same tick, so the event names the phase
        the cycle actually lands on.
        """
        if state.seconds_remaining_in_phase > 1:
            return (
                BreathCycleState(
                    current_phase=state.current_phase,
                    seconds_remaining_in_phase=state.seconds_remaining_in_phase - 1,
                ),
                None,
            )

        target = next_phase(state.current_phase)
        # Inhale and exhale are >= 1s, so this lands within len(PHASE_ORDER) steps
        for _ in range(len(PHASE_ORDER)):
            if self.pattern.duration_of(target) > 0:
                break
            target = next_phase(target)

        new_state = BreathCycleState(
            current_phase=target,
            seconds_remaining_in_phase=self.pattern.duration_of(target),
        )
        return new_state, PhaseTransitioned(from_phase=state.current_phase, to_phase=target)

    def advance_many(
        self, state: BreathCycleState, ticks: int
    ) -> tuple[BreathCycleState, list[PhaseTransitioned]]:
        """Apply *ticks* consecutive ticks, collecting every transition."""
        if ticks < 0:
            raise ValueError(f"ticks must be >= 0, got {ticks}")
        events: list[PhaseTransitioned] = []
        for _ in range(ticks):
            state, event = self.advance(state)
            if event is not None:
                events.append(event)
        return state, events
