"""Session configuration accepted by the hosts."""

from __future__ import annotations

from dataclasses import dataclass

from breath_engine.exceptions import InvalidSessionLengthError
from breath_engine.models.enums import MAX_SESSION_MINUTES, MIN_SESSION_SECONDS
from breath_engine.models.pattern import DEFAULT_PATTERN, PhasePattern


@dataclass(frozen=True)
class SessionConfig:
    """Pattern and overall length for one session.

    Sessions shorter than a minute are rejected here; the timer itself only
    requires a positive length.
    """

    pattern: PhasePattern = DEFAULT_PATTERN
    total_seconds: int = 5 * 60

    def __post_init__(self) -> None:
        if isinstance(self.total_seconds, bool) or not isinstance(self.total_seconds, int):
            raise InvalidSessionLengthError(
                f"total_seconds must be a whole number, got {self.total_seconds!r}"
            )
        if self.total_seconds < MIN_SESSION_SECONDS:
            raise InvalidSessionLengthError(
                f"Sessions must last at least {MIN_SESSION_SECONDS}s, got {self.total_seconds}s"
            )
        if self.total_seconds > MAX_SESSION_MINUTES * 60:
            raise InvalidSessionLengthError(
                f"Sessions must last at most {MAX_SESSION_MINUTES} min, got {self.total_seconds}s"
            )

    @classmethod
    def from_minutes(cls, minutes: int, pattern: PhasePattern = DEFAULT_PATTERN) -> SessionConfig:
        """Build a config from a whole number of minutes."""
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise InvalidSessionLengthError(f"minutes must be a whole number, got {minutes!r}")
        return cls(pattern=pattern, total_seconds=minutes * 60)
