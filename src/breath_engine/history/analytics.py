"""History analytics: day streak, weekly total, minutes per day.

All functions are pure functions of a record sequence and a reference
time. Days are local calendar days of ``started_at``: aware timestamps are
converted to the system's local zone, naive ones are taken as local already.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable

import pandas as pd

from breath_engine.models.session_record import SessionRecord
from breath_engine.models.snapshot import HistorySnapshot


def _to_local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def local_day(record: SessionRecord) -> date:
    """Local calendar day on which *record* started."""
    return _to_local_naive(record.started_at).date()


def streak(history: Iterable[SessionRecord], today: date) -> int:
    """Consecutive days with at least one session, counting back from *today*.

    Returns 0 when *today* has no session.
    """
    days = {local_day(r) for r in history}
    count = 0
    day = today
    while day in days:
        count += 1
        day -= timedelta(days=1)
    return count


def week_start(now: datetime) -> datetime:
    """Most recent Sunday at local midnight, on or before *now* (naive local)."""
    local_now = _to_local_naive(now)
    days_since_sunday = (local_now.weekday() + 1) % 7  # Monday == 0
    return datetime.combine(local_now.date() - timedelta(days=days_since_sunday), time.min)


def week_total_minutes(history: Iterable[SessionRecord], now: datetime) -> float:
    """Minutes of sessions started between this week's Sunday midnight and *now*."""
    start = week_start(now)
    end = _to_local_naive(now)
    return float(sum(
        r.duration_seconds / 60
        for r in history
        if start <= _to_local_naive(r.started_at) <= end
    ))


def history_snapshot(history: Iterable[SessionRecord], now: datetime) -> HistorySnapshot:
    """Recompute streak and weekly total from scratch."""
    records = list(history)
    return HistorySnapshot(
        streak_days=streak(records, _to_local_naive(now).date()),
        week_total_minutes=week_total_minutes(records, now),
    )


def daily_minutes(
    history: Iterable[SessionRecord], end: date, days: int = 7
) -> pd.Series:
    """Minutes breathed per local day for the *days* days ending on *end*.

    Days without sessions are present with 0.0, oldest first.
    """
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}")
    index = pd.date_range(end=pd.Timestamp(end), periods=days, freq="D").date
    records = list(history)
    if not records:
        return pd.Series(0.0, index=index, name="minutes")
    frame = pd.DataFrame(
        {
            "day": [local_day(r) for r in records],
            "minutes": [r.duration_minutes for r in records],
        }
    )
    per_day = frame.groupby("day")["minutes"].sum()
    return per_day.reindex(index, fill_value=0.0).astype(float).rename("minutes")
