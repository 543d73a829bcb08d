"""Tests for the Streamlit helper functions (no Streamlit runtime needed)."""

from __future__ import annotations

from datetime import datetime

import numpy as np
import pytest

from breath_engine.models.enums import Phase
from breath_engine.models.pattern import PhasePattern

from helpers import (
    AMBIENT_LOOP_S,
    AMBIENT_VOLUME,
    CHIME_FREQUENCIES_HZ,
    CHIME_SAMPLE_RATE,
    ambient_waveform,
    breath_circle_html,
    chime_waveform,
    format_clock,
    history_path,
    history_table,
    open_store,
    plural_days,
)


class TestFormatting:
    def test_format_clock(self) -> None:
        assert format_clock(300) == "05:00"
        assert format_clock(59) == "00:59"

    def test_plural_days(self) -> None:
        assert plural_days(1) == "1 day"
        assert plural_days(0) == "0 days"
        assert plural_days(3) == "3 days"


class TestChime:
    def test_distinct_tone_per_phase(self) -> None:
        assert len(set(CHIME_FREQUENCIES_HZ.values())) == 3

    def test_waveform_shape_and_range(self) -> None:
        wave = chime_waveform(Phase.INHALE)
        assert wave.dtype == np.float32
        assert len(wave) == int(CHIME_SAMPLE_RATE * 0.4)
        assert np.max(np.abs(wave)) <= 1.0

    def test_waveform_fades_out(self) -> None:
        wave = chime_waveform(Phase.EXHALE)
        tail = wave[int(CHIME_SAMPLE_RATE * 0.36):]
        assert np.allclose(tail, 0.0)


class TestCircle:
    def test_keyframes_follow_pattern(self) -> None:
        html = breath_circle_html(PhasePattern.create(4, 2, 6), Phase.HOLD, running=True)
        assert "33.3%" in html
        assert "50.0%" in html
        assert "pulseBreath 12s" in html
        assert "Hold" in html

    def test_no_animation_when_idle(self) -> None:
        html = breath_circle_html(PhasePattern.create(4, 2, 6), Phase.INHALE, running=False)
        assert "animation:" not in html


class TestHistory:
    def test_table_newest_first(self, make_record) -> None:
        records = [
            make_record(started_at=datetime(2026, 10, 18, 7, 0), duration_seconds=300),
            make_record(started_at=datetime(2026, 10, 19, 8, 5), duration_seconds=90),
        ]
        df = history_table(records)
        assert list(df.columns) == ["Started", "Minutes", "Pattern"]
        assert df.iloc[0]["Started"] == "Oct 19, 2026 08:05"
        assert df.iloc[0]["Minutes"] == "1.5"

    def test_history_path_override(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "h.json"
        monkeypatch.setenv("BREATH_HISTORY_PATH", str(target))
        assert history_path() == target
        assert open_store().path == target


class TestAmbient:
    def test_loop_shape(self) -> None:
        wave = ambient_waveform()
        assert wave.dtype == np.float32
        assert len(wave) == int(CHIME_SAMPLE_RATE * AMBIENT_LOOP_S)
        assert np.abs(wave).max() <= AMBIENT_VOLUME + 1e-6

    def test_loops_without_click(self) -> None:
        wave = ambient_waveform()
        assert abs(float(wave[-1]) - float(wave[0])) < 0.05
