"""Tests for streak, weekly total and per-day history analytics."""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone

import pytest

from breath_engine.history.analytics import (
    daily_minutes,
    history_snapshot,
    streak,
    week_start,
    week_total_minutes,
)

TODAY = date(2026, 10, 19)  # Monday


def _at(day: date, hour: int = 8) -> datetime:
    return datetime(day.year, day.month, day.day, hour)


class TestStreak:
    def test_empty_history(self) -> None:
        assert streak([], TODAY) == 0

    def test_gap_breaks_streak(self, make_record) -> None:
        history = [
            make_record(started_at=_at(TODAY)),
            make_record(started_at=_at(TODAY - timedelta(days=1))),
            make_record(started_at=_at(TODAY - timedelta(days=3))),
        ]
        assert streak(history, TODAY) == 2

    def test_no_session_today_is_zero(self, make_record) -> None:
        history = [
            make_record(started_at=_at(TODAY - timedelta(days=1))),
            make_record(started_at=_at(TODAY - timedelta(days=2))),
        ]
        assert streak(history, TODAY) == 0

    def test_multiple_sessions_same_day_count_once(self, make_record) -> None:
        history = [
            make_record(started_at=_at(TODAY, 7)),
            make_record(started_at=_at(TODAY, 21)),
        ]
        assert streak(history, TODAY) == 1

    def test_long_streak_across_month_boundary(self, make_record) -> None:
        history = [make_record(started_at=_at(TODAY - timedelta(days=n))) for n in range(30)]
        assert streak(history, TODAY) == 30

    def test_order_independent(self, make_record) -> None:
        history = [
            make_record(started_at=_at(TODAY - timedelta(days=1))),
            make_record(started_at=_at(TODAY)),
        ]
        assert streak(history, TODAY) == 2

    def test_future_sessions_ignored(self, make_record) -> None:
        history = [make_record(started_at=_at(TODAY + timedelta(days=1)))]
        assert streak(history, TODAY) == 0

    def test_midnight_boundary(self, make_record) -> None:
        history = [
            make_record(started_at=datetime(2026, 10, 19, 0, 0)),
            make_record(started_at=datetime(2026, 10, 18, 23, 59, 59)),
        ]
        assert streak(history, TODAY) == 2


class TestWeekStart:
    def test_monday_goes_back_to_sunday(self) -> None:
        assert week_start(datetime(2026, 10, 19, 9, 30)) == datetime(2026, 10, 18)

    def test_sunday_is_its_own_start(self) -> None:
        assert week_start(datetime(2026, 10, 18, 23, 0)) == datetime(2026, 10, 18)

    def test_saturday(self) -> None:
        assert week_start(datetime(2026, 10, 24, 12, 0)) == datetime(2026, 10, 18)


class TestWeekTotal:
    def test_sums_sessions_in_week(self, make_record, fixed_now) -> None:
        history = [
            make_record(started_at=datetime(2026, 10, 18, 8), duration_seconds=300),
            make_record(started_at=datetime(2026, 10, 19, 7), duration_seconds=600),
        ]
        assert week_total_minutes(history, fixed_now) == pytest.approx(15.0)

    def test_excludes_previous_week(self, make_record, fixed_now) -> None:
        history = [
            make_record(started_at=datetime(2026, 10, 17, 23, 59), duration_seconds=600),
            make_record(started_at=datetime(2026, 10, 18, 0, 0), duration_seconds=120),
        ]
        assert week_total_minutes(history, fixed_now) == pytest.approx(2.0)

    def test_excludes_after_now(self, make_record, fixed_now) -> None:
        history = [make_record(started_at=fixed_now + timedelta(hours=1), duration_seconds=600)]
        assert week_total_minutes(history, fixed_now) == 0.0

    def test_fractional_minutes(self, make_record, fixed_now) -> None:
        history = [make_record(started_at=datetime(2026, 10, 19, 8), duration_seconds=45)]
        assert week_total_minutes(history, fixed_now) == pytest.approx(0.75)

    def test_empty(self, fixed_now) -> None:
        assert week_total_minutes([], fixed_now) == 0.0


class TestSnapshot:
    def test_combines_streak_and_week(self, make_record, fixed_now) -> None:
        history = [
            make_record(started_at=datetime(2026, 10, 19, 7), duration_seconds=300),
            make_record(started_at=datetime(2026, 10, 18, 7), duration_seconds=600),
        ]
        snap = history_snapshot(history, fixed_now)
        assert snap.streak_days == 2
        assert snap.week_total_minutes == pytest.approx(15.0)

    def test_accepts_generator(self, make_record, fixed_now) -> None:
        records = [make_record(started_at=datetime(2026, 10, 19, 7))]
        snap = history_snapshot((r for r in records), fixed_now)
        assert snap.streak_days == 1
        assert snap.week_total_minutes == pytest.approx(5.0)


class TestDailyMinutes:
    def test_zero_filled_week(self, make_record) -> None:
        history = [
            make_record(started_at=_at(TODAY, 7), duration_seconds=300),
            make_record(started_at=_at(TODAY, 20), duration_seconds=300),
            make_record(started_at=_at(TODAY - timedelta(days=2)), duration_seconds=90),
        ]
        series = daily_minutes(history, TODAY)
        assert len(series) == 7
        assert list(series.index)[-1] == TODAY
        assert series[TODAY] == pytest.approx(10.0)
        assert series[TODAY - timedelta(days=2)] == pytest.approx(1.5)
        assert series[TODAY - timedelta(days=1)] == 0.0

    def test_ignores_days_outside_window(self, make_record) -> None:
        history = [make_record(started_at=_at(TODAY - timedelta(days=30)))]
        assert daily_minutes(history, TODAY).sum() == 0.0

    def test_empty_history(self) -> None:
        series = daily_minutes([], TODAY, days=3)
        assert list(series.index) == [TODAY - timedelta(days=2), TODAY - timedelta(days=1), TODAY]
        assert series.sum() == 0.0

    def test_rejects_non_positive_days(self) -> None:
        with pytest.raises(ValueError):
            daily_minutes([], TODAY, days=0)


@pytest.fixture
def pacific_tz(monkeypatch: pytest.MonkeyPatch):
    """Pin the process zone to US Pacific (UTC-7 in October)."""
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
class TestAwareTimestamps:
    def test_utc_record_counts_on_local_day(self, make_record, pacific_tz) -> None:
        # 03:00Z on the 19th is 20:00 on the 18th in Los Angeles
        history = [make_record(started_at=datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc))]
        assert streak(history, date(2026, 10, 18)) == 1
        assert streak(history, date(2026, 10, 19)) == 0

    def test_week_total_uses_local_week(self, make_record, pacific_tz) -> None:
        now = datetime(2026, 10, 18, 21, 0)  # Sunday evening, local
        history = [
            make_record(started_at=datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc), duration_seconds=600),
            # Saturday 23:00 local, previous week
            make_record(started_at=datetime(2026, 10, 18, 6, 0, tzinfo=timezone.utc), duration_seconds=300),
        ]
        assert week_total_minutes(history, now) == pytest.approx(10.0)
