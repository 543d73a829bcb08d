"""Tabular export of session history.

Columns: ``startedAt, durationSec, minutes, pattern``. All functions are
pure (no file I/O); hosts decide where the text goes.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from breath_engine.models.session_record import SessionRecord

EXPORT_COLUMNS = ("startedAt", "durationSec", "minutes", "pattern")
EXPORT_FILENAME = "meditation-history.csv"


def to_dataframe(records: Iterable[SessionRecord]) -> pd.DataFrame:
    """Build a DataFrame with one row per record, in history order."""
    rows = [
        {
            "startedAt": r.started_at.isoformat(),
            "durationSec": r.duration_seconds,
            "minutes": round(r.duration_minutes, 1),
            "pattern": r.pattern_descriptor,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))


def to_csv_string(records: Iterable[SessionRecord]) -> str:
    """Render the history as CSV text with a header row."""
    return to_dataframe(records).to_csv(index=False, float_format="%.1f", lineterminator="\n")
