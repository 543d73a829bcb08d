"""Finalized record of one breathing session."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


def new_session_id() -> str:
    """Return a fresh unique session id."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class SessionRecord:
    """One completed or stopped session, created once and never mutated.

    ``duration_seconds`` is the time actually spent breathing, not the
    configured target.
    """

    id: str
    started_at: datetime
    duration_seconds: int
    pattern_descriptor: str  # e.g. "4-2-6"

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("SessionRecord.id must be non-empty")
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds must be >= 0, got {self.duration_seconds}")

    @property
    def duration_minutes(self) -> float:
        return self.duration_seconds / 60
