"""Session history stores — append-only logs of finalized sessions.

The core only needs two operations: ``append`` a record and read ``all``
records back in insertion order. Ids are unique within a store.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from breath_engine.exceptions import DuplicateSessionError, HistoryCorruptError
from breath_engine.models.session_record import SessionRecord
from breath_engine.serialization.records import (
    records_from_json_string,
    records_to_json_string,
)

logger = logging.getLogger(__name__)

HISTORY_KEY = "meditation_history_v1"
DEFAULT_HISTORY_PATH = Path("~/.breath_engine").expanduser() / f"{HISTORY_KEY}.json"


class SessionHistoryStore(ABC):
    """Append-only history contract.

    Subclasses persist however they like but must keep insertion order and
    reject a record whose id is already stored. Appends are serialized.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def append(self, record: SessionRecord) -> None:
        """Durably add *record*; raises DuplicateSessionError for a known id."""
        with self._lock:
            if any(r.id == record.id for r in self._records()):
                raise DuplicateSessionError(record.id)
            self._write(record)
        logger.info(
            "Recorded session %s (%ds, %s)",
            record.id,
            record.duration_seconds,
            record.pattern_descriptor,
        )

    def all(self) -> tuple[SessionRecord, ...]:
        """All records, oldest first."""
        return tuple(self._records())

    def __len__(self) -> int:
        return len(self._records())

    @abstractmethod
    def _records(self) -> list[SessionRecord]:
        """Current records in insertion order."""
        ...

    @abstractmethod
    def _write(self, record: SessionRecord) -> None:
        """Persist *record* after uniqueness has been checked."""
        ...


class InMemoryHistoryStore(SessionHistoryStore):
    """Process-local store, for tests and throwaway sessions."""

    def __init__(self, records: list[SessionRecord] | None = None) -> None:
        super().__init__()
        self._items: list[SessionRecord] = []
        for record in records or []:
            self.append(record)

    def _records(self) -> list[SessionRecord]:
        return self._items

    def _write(self, record: SessionRecord) -> None:
        self._items.append(record)


class JsonHistoryStore(SessionHistoryStore):
    """History persisted as one JSON array file.

    The file is read once at construction and rewritten in full on every
    append. A missing file is an empty history.
    """

    def __init__(self, path: Path | str) -> None:
        super().__init__()
        self.path = Path(path).expanduser()
        self._items = self._load()

    def _load(self) -> list[SessionRecord]:
        if not self.path.exists():
            logger.debug("No history at %s, starting empty", self.path)
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
            if not text.strip():
                return []
            records = records_from_json_string(text)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise HistoryCorruptError(f"Cannot read history at {self.path}: {exc}") from exc
        logger.info("Loaded %d sessions from %s", len(records), self.path)
        return records

    def _records(self) -> list[SessionRecord]:
        return self._items

    def _write(self, record: SessionRecord) -> None:
        updated = self._items + [record]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            tmp_path.write_text(records_to_json_string(updated), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise HistoryCorruptError(f"Cannot write history at {self.path}: {exc}") from exc
        self._items = updated
