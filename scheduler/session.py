"""Terminal session runner — guides one breathing session with APScheduler ticks.

Usage:
    python -m scheduler.session                       # defaults from env / config
    python -m scheduler.session --minutes 10 --preset "4-7-8"
    python -m scheduler.session --history             # streak and weekly total
    python -m scheduler.session --export sessions.csv # write history as CSV
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable

from apscheduler.schedulers.blocking import BlockingScheduler

from breath_engine.exceptions import BreathEngineError
from breath_engine.history.analytics import history_snapshot
from breath_engine.history.store import JsonHistoryStore, SessionHistoryStore
from breath_engine.models.config import SessionConfig
from breath_engine.models.enums import PHASE_PROMPTS
from breath_engine.models.pattern import PRESET_PATTERNS, PhasePattern
from breath_engine.models.session_record import SessionRecord
from breath_engine.models.snapshot import format_clock
from breath_engine.serialization import to_csv_string
from breath_engine.timer import SessionTimer, TickResult

from scheduler.config import (
    CHIMES_ENABLED,
    HISTORY_PATH,
    PATTERN,
    SESSION_MINUTES,
    TICK_SECONDS,
)

logger = logging.getLogger(__name__)

_TICK_JOB_ID = "breath_tick"
_BELL = "\a"


class SessionRunner:
    """Owns one timer, its tick job and the history it records into.

    The APScheduler job is registered with ``max_instances=1`` and
    ``coalesce=True`` so ticks are never applied concurrently.
    """

    def __init__(
        self,
        config: SessionConfig,
        store: SessionHistoryStore,
        timer: SessionTimer | None = None,
        chimes: bool = True,
        tick_seconds: float = 1.0,
        output: Callable[[str], None] = print,
    ) -> None:
        self.config = config
        self.store = store
        self.timer = timer or SessionTimer()
        self.chimes = chimes
        self.tick_seconds = tick_seconds
        self.output = output
        self.scheduler: BlockingScheduler | None = None
        self.record: SessionRecord | None = None

    def begin(self) -> None:
        """Start the timer and announce the first phase."""
        self.timer.start(self.config.pattern, self.config.total_seconds)
        snap = self.timer.snapshot()
        self.output(
            f"Pattern {self.config.pattern.descriptor}, "
            f"{format_clock(self.config.total_seconds)} (Ctrl-C to finish early)"
        )
        self.output(f"{snap.prompt} ({snap.phase_seconds_left}s)")

    def tick_job(self) -> None:
        """One scheduled tick: advance the timer and react to its result."""
        result = self.timer.tick()
        self._announce(result)
        if result.record is not None:
            self._commit(result.record)
            self._shutdown()

    def finish_early(self, completed: bool = True) -> SessionRecord | None:
        """Stop a running session and record the elapsed time, if any."""
        if not self.timer.snapshot().is_active:
            return self.record
        record = self.timer.stop(completed=completed)
        if record is None:
            self.output("Stopped before the first second; nothing recorded")
        else:
            self._commit(record)
        return record

    def run(self, scheduler: BlockingScheduler | None = None) -> SessionRecord | None:
        """Run the session to completion, blocking the calling thread."""
        self.scheduler = scheduler or BlockingScheduler()
        self.begin()
        self.scheduler.add_job(
            self.tick_job,
            "interval",
            seconds=self.tick_seconds,
            id=_TICK_JOB_ID,
            max_instances=1,
            coalesce=True,
        )
        logger.info("Tick job scheduled every %.1fs", self.tick_seconds)
        try:
            self.scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Interrupted, finishing session early")
            # Let an in-flight tick complete before stopping from this thread
            self._shutdown(wait=True)
            self.finish_early(completed=True)
        return self.record

    # -- Internals --------------------------------------------------------

    def _announce(self, result: TickResult) -> None:
        snap = result.snapshot
        if result.transition is not None:
            bell = _BELL if self.chimes else ""
            self.output(
                f"{bell}{PHASE_PROMPTS[result.transition.to_phase]} "
                f"({snap.phase_seconds_left}s), {format_clock(snap.seconds_left)} left"
            )
        if result.finished:
            self.output("Session complete")

    def _commit(self, record: SessionRecord) -> None:
        self.store.append(record)
        self.record = record
        self.output(f"Recorded {record.duration_minutes:.1f} min ({record.pattern_descriptor})")

    def _shutdown(self, wait: bool = False) -> None:
        if self.scheduler is not None and self.scheduler.running:
            self.scheduler.shutdown(wait=wait)


def summarize_history(store: SessionHistoryStore, now: datetime | None = None) -> str:
    """One-line streak / weekly total summary."""
    snap = history_snapshot(store.all(), now or datetime.now())
    days = "day" if snap.streak_days == 1 else "days"
    return (
        f"Streak: {snap.streak_days} {days} | "
        f"This week: {round(snap.week_total_minutes)} min | "
        f"Sessions: {len(store)}"
    )


def _resolve_pattern(args: argparse.Namespace) -> PhasePattern:
    if args.preset:
        return PRESET_PATTERNS[args.preset]
    return PhasePattern.parse(args.pattern)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Guided breathing session")
    parser.add_argument("--minutes", type=int, default=SESSION_MINUTES, help="Session length")
    pattern_group = parser.add_mutually_exclusive_group()
    pattern_group.add_argument(
        "--pattern", default=PATTERN, help="inhale-hold-exhale seconds, e.g. 4-2-6"
    )
    pattern_group.add_argument("--preset", choices=sorted(PRESET_PATTERNS), help="Named pattern")
    parser.add_argument(
        "--history-file", type=Path, default=HISTORY_PATH, help="Session history JSON file"
    )
    parser.add_argument("--no-chime", action="store_true", help="Silence the phase bell")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--history", action="store_true", help="Print streak and weekly total")
    action.add_argument("--export", type=Path, metavar="PATH", help="Write history as CSV")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        store = JsonHistoryStore(args.history_file)
    except BreathEngineError as exc:
        logger.error("%s", exc)
        return 1

    if args.history:
        print(summarize_history(store))
        return 0
    if args.export:
        try:
            args.export.write_text(to_csv_string(store.all()), encoding="utf-8")
        except OSError as exc:
            logger.error("Cannot write export to %s: %s", args.export, exc)
            return 1
        logger.info("Exported %d sessions to %s", len(store), args.export)
        return 0

    try:
        config = SessionConfig.from_minutes(args.minutes, _resolve_pattern(args))
    except BreathEngineError as exc:
        logger.error("Invalid session settings: %s", exc)
        return 2

    runner = SessionRunner(
        config,
        store,
        chimes=CHIMES_ENABLED and not args.no_chime,
        tick_seconds=TICK_SECONDS,
    )
    try:
        runner.run()
    except BreathEngineError as exc:
        logger.error("Session failed: %s", exc)
        return 1
    print(summarize_history(store))
    return 0


if __name__ == "__main__":
    sys.exit(main())
