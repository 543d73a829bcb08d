"""Breathing pattern value object — per-phase durations for one cycle.

A pattern is validated on construction, so an instance that exists is
always safe to cycle through: inhale and exhale last at least one second,
hold may be zero, and no phase exceeds the configured maximum.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from breath_engine.exceptions import InvalidPatternError
from breath_engine.models.enums import (
    MAX_PHASE_SECONDS,
    MIN_EXHALE_SECONDS,
    MIN_HOLD_SECONDS,
    MIN_INHALE_SECONDS,
    Phase,
)

_DESCRIPTOR_SEPARATOR = "-"


def _check_seconds(name: str, value: object, minimum: int, maximum: int) -> None:
    # bool is an int subclass; True/False are never meaningful durations
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPatternError(f"{name} must be a whole number of seconds, got {value!r}")
    if value < minimum:
        raise InvalidPatternError(f"{name} must be at least {minimum}s, got {value}s")
    if value > maximum:
        raise InvalidPatternError(f"{name} must be at most {maximum}s, got {value}s")


@dataclass(frozen=True)
class PhasePattern:
    """Durations (whole seconds) of the inhale, hold and exhale phases."""

    inhale_seconds: int
    hold_seconds: int
    exhale_seconds: int
    max_seconds: int = field(default=MAX_PHASE_SECONDS, compare=False, repr=False)

    def __post_init__(self) -> None:
        _check_seconds("inhale", self.inhale_seconds, MIN_INHALE_SECONDS, self.max_seconds)
        _check_seconds("hold", self.hold_seconds, MIN_HOLD_SECONDS, self.max_seconds)
        _check_seconds("exhale", self.exhale_seconds, MIN_EXHALE_SECONDS, self.max_seconds)

    # -- Factories --------------------------------------------------------

    @classmethod
    def create(
        cls,
        inhale: int,
        hold: int,
        exhale: int,
        max_seconds: int = MAX_PHASE_SECONDS,
    ) -> PhasePattern:
        """Build a validated pattern; raises InvalidPatternError."""
        return cls(
            inhale_seconds=inhale,
            hold_seconds=hold,
            exhale_seconds=exhale,
            max_seconds=max_seconds,
        )

    @classmethod
    def parse(cls, descriptor: str, max_seconds: int = MAX_PHASE_SECONDS) -> PhasePattern:
        """Build a pattern from an ``"inhale-hold-exhale"`` string, e.g. ``"4-7-8"``."""
        parts = descriptor.strip().split(_DESCRIPTOR_SEPARATOR)
        if len(parts) != 3:
            raise InvalidPatternError(
                f"Pattern must look like 'inhale-hold-exhale', got {descriptor!r}"
            )
        try:
            inhale, hold, exhale = (int(p) for p in parts)
        except ValueError as exc:
            raise InvalidPatternError(f"Pattern {descriptor!r} is not numeric") from exc
        return cls.create(inhale, hold, exhale, max_seconds=max_seconds)

    # -- Queries ----------------------------------------------------------

    def duration_of(self, phase: Phase) -> int:
        """Return the configured duration of *phase* in seconds."""
        if phase == Phase.INHALE:
            return self.inhale_seconds
        if phase == Phase.HOLD:
            return self.hold_seconds
        return self.exhale_seconds

    def total_cycle_seconds(self) -> int:
        return self.inhale_seconds + self.hold_seconds + self.exhale_seconds

    @property
    def descriptor(self) -> str:
        """Human-readable summary such as ``"4-2-6"``."""
        return _DESCRIPTOR_SEPARATOR.join(
            str(s) for s in (self.inhale_seconds, self.hold_seconds, self.exhale_seconds)
        )

    def phase_boundaries(self) -> tuple[float, float]:
        """Cumulative cycle fractions at which inhale and hold end.

        Used by renderers that expand during inhale, stay still during hold
        and contract during exhale.
        """
        total = self.total_cycle_seconds()
        inhale_end = self.inhale_seconds / total
        hold_end = (self.inhale_seconds + self.hold_seconds) / total
        return inhale_end, hold_end


DEFAULT_PATTERN = PhasePattern(inhale_seconds=4, hold_seconds=2, exhale_seconds=6)

PRESET_PATTERNS: dict[str, PhasePattern] = {
    "Box 4-4-4": PhasePattern(inhale_seconds=4, hold_seconds=4, exhale_seconds=4),
    "4-7-8": PhasePattern(inhale_seconds=4, hold_seconds=7, exhale_seconds=8),
    "Slow 4-2-6": DEFAULT_PATTERN,
}
