"""Environment-variable-based configuration for the terminal session runner."""

from __future__ import annotations

import os
from pathlib import Path

from breath_engine.history.store import DEFAULT_HISTORY_PATH

HISTORY_PATH: Path = Path(
    os.environ.get("BREATH_HISTORY_PATH", str(DEFAULT_HISTORY_PATH))
).expanduser()
SESSION_MINUTES: int = int(os.environ.get("BREATH_SESSION_MINUTES", "5"))
PATTERN: str = os.environ.get("BREATH_PATTERN", "4-2-6")
TICK_SECONDS: float = float(os.environ.get("BREATH_TICK_SECONDS", "1.0"))
CHIMES_ENABLED: bool = os.environ.get("BREATH_CHIMES", "1").lower() not in ("0", "false", "no", "off")
