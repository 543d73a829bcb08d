"""Session history: append-only stores and derived analytics."""

from breath_engine.history.analytics import (
    daily_minutes,
    history_snapshot,
    streak,
    week_start,
    week_total_minutes,
)
from breath_engine.history.store import (
    InMemoryHistoryStore,
    JsonHistoryStore,
    SessionHistoryStore,
)

__all__ = [
    "InMemoryHistoryStore",
    "JsonHistoryStore",
    "SessionHistoryStore",
    "daily_minutes",
    "history_snapshot",
    "streak",
    "week_start",
    "week_total_minutes",
]
