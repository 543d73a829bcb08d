"""JSON layout of persisted session records.

Keys match the browser storage format the history was first kept in:
``{"id", "startedAt", "durationSec", "pattern"}``.
"""

from __future__ import annotations

import json
from datetime import datetime

from breath_engine.models.session_record import SessionRecord


def record_to_dict(record: SessionRecord) -> dict:
    """Convert a SessionRecord to a JSON-compatible dict."""
    return {
        "id": record.id,
        "startedAt": record.started_at.isoformat(),
        "durationSec": record.duration_seconds,
        "pattern": record.pattern_descriptor,
    }


def record_from_dict(data: dict) -> SessionRecord:
    """Build a SessionRecord from its stored dict.

    Raises KeyError / ValueError on malformed input.
    """
    started_at = data["startedAt"]
    if not isinstance(started_at, str):
        raise ValueError(f"startedAt must be an ISO-8601 string, got {started_at!r}")
    # fromisoformat() on older interpreters rejects the trailing "Z"
    if started_at.endswith("Z"):
        started_at = started_at[:-1] + "+00:00"
    return SessionRecord(
        id=str(data["id"]),
        started_at=datetime.fromisoformat(started_at),
        duration_seconds=int(data["durationSec"]),
        pattern_descriptor=str(data.get("pattern", "")),
    )


def records_to_json_string(records: tuple[SessionRecord, ...] | list[SessionRecord]) -> str:
    """Serialize a whole history as a JSON array string."""
    return json.dumps([record_to_dict(r) for r in records], indent=2)


def records_from_json_string(text: str) -> list[SessionRecord]:
    """Parse a JSON array string back into records (oldest first)."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Session history must be a JSON array")
    return [record_from_dict(item) for item in data]
