"""Utility helpers bridging the Streamlit UI and the breath engine.

Pure functions for formatting, chime synthesis, the breathing circle and
history tables. No Streamlit calls live here so everything is testable.
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Iterable

import numpy as np
import pandas as pd

from breath_engine.history.store import DEFAULT_HISTORY_PATH, JsonHistoryStore
from breath_engine.models.enums import Phase
from breath_engine.models.pattern import PhasePattern
from breath_engine.models.session_record import SessionRecord
from breath_engine.models.snapshot import format_clock  # noqa: F401  (re-exported for app.py)

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_started(started_at: datetime) -> str:
    """Medium date + short time, e.g. 'Oct 19, 2026 07:30'."""
    return started_at.strftime("%b %d, %Y %H:%M")


def plural_days(n: int) -> str:
    return f"{n} day" if n == 1 else f"{n} days"


# ---------------------------------------------------------------------------
# Phase presentation
# ---------------------------------------------------------------------------

PHASE_LABELS: dict[Phase, str] = {
    Phase.INHALE: "Inhale",
    Phase.HOLD: "Hold",
    Phase.EXHALE: "Exhale",
}

# Tone per target phase: C5 / E5 / G4
CHIME_FREQUENCIES_HZ: dict[Phase, float] = {
    Phase.INHALE: 523.25,
    Phase.HOLD: 659.25,
    Phase.EXHALE: 392.0,
}

CHIME_SAMPLE_RATE = 44100
CHIME_DURATION_S = 0.4
CHIME_PEAK_GAIN = 0.05


def chime_waveform(
    phase: Phase,
    sample_rate: int = CHIME_SAMPLE_RATE,
    duration_s: float = CHIME_DURATION_S,
) -> np.ndarray:
    """Short sine tone for entering *phase*.

    10 ms attack up to the peak gain, then exponential decay to near
    silence by 0.35 s. Returns float32 samples in [-1, 1].
    """
    n = int(sample_rate * duration_s)
    t = np.arange(n, dtype=np.float64) / sample_rate
    tone = np.sin(2 * np.pi * CHIME_FREQUENCIES_HZ[phase] * t)

    attack = 0.01
    release_end = 0.35
    envelope = np.where(
        t < attack,
        CHIME_PEAK_GAIN * (t / attack),
        CHIME_PEAK_GAIN * np.power(1e-4 / CHIME_PEAK_GAIN, (t - attack) / (release_end - attack)),
    )
    envelope[t > release_end] = 0.0
    # Normalise so the browser plays it at a comfortable level
    return (tone * envelope / CHIME_PEAK_GAIN * 0.5).astype(np.float32)


AMBIENT_VOLUME = 0.35
AMBIENT_LOOP_S = 8.0
# Soft drone: A2 with a fifth and an octave above
_AMBIENT_PARTIALS_HZ = (110.0, 165.0, 220.0)


def ambient_waveform(
    sample_rate: int = CHIME_SAMPLE_RATE,
    duration_s: float = AMBIENT_LOOP_S,
) -> np.ndarray:
    """Seamlessly looping background drone.

    Each partial and the slow swell complete whole periods within the loop,
    so the last sample joins the first without a click.
    """
    n = int(sample_rate * duration_s)
    t = np.arange(n, dtype=np.float64) / sample_rate
    drone = sum(np.sin(2 * np.pi * f * t) / (i + 1) for i, f in enumerate(_AMBIENT_PARTIALS_HZ))
    swell = 0.75 + 0.25 * np.sin(2 * np.pi * t / duration_s)
    wave = drone * swell
    return (wave / np.max(np.abs(wave)) * AMBIENT_VOLUME).astype(np.float32)


def breath_circle_html(pattern: PhasePattern, phase: Phase, running: bool) -> str:
    """Expanding/contracting circle synced to *pattern* (CSS keyframes)."""
    inhale_end, hold_end = pattern.phase_boundaries()
    cycle = pattern.total_cycle_seconds()
    animation = f"animation: pulseBreath {cycle}s linear infinite;" if running else ""
    return f"""
<style>
@keyframes pulseBreath {{
  0% {{ transform: scale(0.9); }}
  {inhale_end * 100:.1f}% {{ transform: scale(1.08); }}
  {hold_end * 100:.1f}% {{ transform: scale(1.08); }}
  100% {{ transform: scale(0.9); }}
}}
</style>
<div style="display:flex;justify-content:center;margin:16px 0;">
  <div style="width:240px;height:240px;border-radius:50%;border:1px solid #bbb;
              display:grid;place-items:center;">
    <div style="width:120px;height:120px;border-radius:50%;background:#9fd3c7;
                display:grid;place-items:center;{animation}">
      <strong>{PHASE_LABELS[phase]}</strong>
    </div>
  </div>
</div>
"""


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

def history_path() -> Path:
    """History file shared with the terminal runner; BREATH_HISTORY_PATH overrides it."""
    override = os.environ.get("BREATH_HISTORY_PATH")
    return Path(override).expanduser() if override else DEFAULT_HISTORY_PATH


def open_store(path: Path | None = None) -> JsonHistoryStore:
    return JsonHistoryStore(path or history_path())


def history_table(records: Iterable[SessionRecord]) -> pd.DataFrame:
    """Rows for the 'Your sessions' table, newest first."""
    rows = [
        {
            "Started": format_started(r.started_at),
            "Minutes": f"{r.duration_minutes:.1f}",
            "Pattern": r.pattern_descriptor,
        }
        for r in reversed(list(records))
    ]
    return pd.DataFrame(rows, columns=["Started", "Minutes", "Pattern"])
