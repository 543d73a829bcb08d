"""Shared test fixtures: patterns, fixed clocks, session records."""

from __future__ import annotations

import itertools
from datetime import datetime
from typing import Callable

import pytest

from breath_engine.models.pattern import PhasePattern
from breath_engine.models.session_record import SessionRecord
from breath_engine.timer import SessionTimer

# Monday 19 Oct 2026, 09:30 local; the week started Sunday 18 Oct
FIXED_NOW = datetime(2026, 10, 19, 9, 30)


@pytest.fixture
def slow_pattern() -> PhasePattern:
    """Slow 4-2-6: 12 s cycle."""
    return PhasePattern.create(4, 2, 6)


@pytest.fixture
def no_hold_pattern() -> PhasePattern:
    """3-0-5: the hold phase is skipped."""
    return PhasePattern.create(3, 0, 5)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def timer() -> SessionTimer:
    """Timer with a fixed start time and predictable ids."""
    counter = itertools.count(1)
    return SessionTimer(now=lambda: FIXED_NOW, id_factory=lambda: f"s{next(counter)}")


@pytest.fixture
def make_record() -> Callable[..., SessionRecord]:
    """Factory for records; ids are unique per test."""
    counter = itertools.count(1)

    def _make(
        started_at: datetime = FIXED_NOW,
        duration_seconds: int = 300,
        pattern_descriptor: str = "4-2-6",
        id: str | None = None,
    ) -> SessionRecord:
        return SessionRecord(
            id=id or f"rec-{next(counter)}",
            started_at=started_at,
            duration_seconds=duration_seconds,
            pattern_descriptor=pattern_descriptor,
        )

    return _make
