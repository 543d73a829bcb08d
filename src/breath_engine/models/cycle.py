"""Breath cycle state and phase transition event."""

from __future__ import annotations

from dataclasses import dataclass

from breath_engine.models.enums import Phase


@dataclass(frozen=True)
class BreathCycleState:
    """Where the breathing cycle currently stands.

    ``seconds_remaining_in_phase`` never goes negative and never exceeds
    the current phase's configured duration.
    """

    current_phase: Phase
    seconds_remaining_in_phase: int

    def __post_init__(self) -> None:
        if self.seconds_remaining_in_phase < 0:
            raise ValueError(
                f"seconds_remaining_in_phase must be >= 0, got {self.seconds_remaining_in_phase}"
            )


@dataclass(frozen=True)
class PhaseTransitioned:
    """Emitted when the cycle moves into a new phase; hosts chime on this."""

    from_phase: Phase
    to_phase: Phase
