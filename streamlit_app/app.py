"""CalmTrail — Streamlit guided breathing dashboard.

Run with:
    streamlit run streamlit_app/app.py

The page reruns once per second while a session is running; each rerun
delivers exactly one tick to the SessionTimer.
"""

from __future__ import annotations

import time
from datetime import date, datetime

import streamlit as st

from breath_engine.exceptions import BreathEngineError
from breath_engine.history.analytics import daily_minutes, history_snapshot
from breath_engine.models.config import SessionConfig
from breath_engine.models.enums import (
    MAX_PHASE_SECONDS,
    MAX_SESSION_MINUTES,
    SESSION_MINUTE_PRESETS,
    TimerStatus,
)
from breath_engine.models.pattern import DEFAULT_PATTERN, PRESET_PATTERNS, PhasePattern
from breath_engine.serialization import to_csv_string
from breath_engine.serialization.csv_export import EXPORT_FILENAME
from breath_engine.timer import SessionTimer

from helpers import (
    CHIME_SAMPLE_RATE,
    ambient_waveform,
    breath_circle_html,
    chime_waveform,
    format_clock,
    history_table,
    open_store,
    plural_days,
)

TICK_SECONDS = 1.0

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="CalmTrail",
    page_icon="🌿",
    layout="wide",
)


# ---------------------------------------------------------------------------
# Cached store / per-browser timer
# ---------------------------------------------------------------------------


@st.cache_resource
def get_store():
    return open_store()


@st.cache_data
def get_ambient():
    return ambient_waveform()


def _timer() -> SessionTimer:
    if "timer" not in st.session_state:
        st.session_state["timer"] = SessionTimer()
    return st.session_state["timer"]


def _pattern_from_inputs() -> PhasePattern | None:
    try:
        return PhasePattern.create(
            int(st.session_state.get("p_inhale", DEFAULT_PATTERN.inhale_seconds)),
            int(st.session_state.get("p_hold", DEFAULT_PATTERN.hold_seconds)),
            int(st.session_state.get("p_exhale", DEFAULT_PATTERN.exhale_seconds)),
        )
    except BreathEngineError as e:
        st.error(f"Invalid pattern: {e}")
        return None


def _apply_preset(pattern: PhasePattern) -> None:
    st.session_state["p_inhale"] = pattern.inhale_seconds
    st.session_state["p_hold"] = pattern.hold_seconds
    st.session_state["p_exhale"] = pattern.exhale_seconds


# Widget defaults live in session state so presets can overwrite them
st.session_state.setdefault("minutes", 5)
if "p_inhale" not in st.session_state:
    _apply_preset(DEFAULT_PATTERN)

store = get_store()
timer = _timer()
snap = timer.snapshot()
active = snap.is_active

# ---------------------------------------------------------------------------
# Header: streak, weekly total, audio toggle
# ---------------------------------------------------------------------------

st.title("CalmTrail • Guided Breathing")
history = history_snapshot(store.all(), datetime.now())
h1, h2, h3 = st.columns(3)
h1.metric("Streak", plural_days(history.streak_days))
h2.metric("This week", f"{round(history.week_total_minutes)} min")
with h3:
    chimes_on = st.checkbox("Chimes", value=True, key="chimes")
    ambient_on = st.checkbox("Ambient", value=False, key="ambient")

if ambient_on:
    st.audio(get_ambient(), sample_rate=CHIME_SAMPLE_RATE, autoplay=True, loop=True)

pending_phase = st.session_state.pop("pending_chime", None)
if pending_phase is not None and chimes_on:
    st.audio(chime_waveform(pending_phase), sample_rate=CHIME_SAMPLE_RATE, autoplay=True)

# ---------------------------------------------------------------------------
# Timer + controls
# ---------------------------------------------------------------------------

col_timer, col_coach = st.columns([1, 2])

with col_timer:
    st.subheader("Timer")
    preset_cols = st.columns(len(SESSION_MINUTE_PRESETS))
    for col, m in zip(preset_cols, SESSION_MINUTE_PRESETS):
        if col.button(f"{m} min", disabled=active, key=f"min_{m}"):
            st.session_state["minutes"] = m
    minutes = st.number_input(
        "Minutes", min_value=1, max_value=MAX_SESSION_MINUTES, step=1,
        disabled=active, key="minutes",
    )

    shown_seconds = snap.seconds_left if snap.status != TimerStatus.IDLE else int(minutes) * 60
    st.markdown(f"<h1 style='text-align:center'>{format_clock(shown_seconds)}</h1>",
                unsafe_allow_html=True)
    st.progress(min(1.0, max(0.0, snap.progress)))

    b1, b2, b3 = st.columns(3)
    if snap.status == TimerStatus.IDLE:
        if b1.button("Start", type="primary"):
            pattern = _pattern_from_inputs()
            if pattern is not None:
                try:
                    config = SessionConfig.from_minutes(int(minutes), pattern)
                    timer.start(config.pattern, config.total_seconds)
                    st.rerun()
                except BreathEngineError as e:
                    st.error(f"Cannot start: {e}")
    elif active:
        if b1.button("Finish", type="primary"):
            record = timer.stop(completed=True)
            if record is not None:
                store.append(record)
            st.rerun()
        if snap.status == TimerStatus.RUNNING:
            if b2.button("Pause"):
                timer.pause()
                st.rerun()
        elif b2.button("Resume"):
            timer.resume()
            st.rerun()
    else:
        st.success("Session complete" if snap.status == TimerStatus.FINISHED else "Session stopped")

    if b3.button("Reset", disabled=snap.status == TimerStatus.RUNNING):
        timer.reset()
        st.rerun()

# ---------------------------------------------------------------------------
# Coach + pattern
# ---------------------------------------------------------------------------

with col_coach:
    st.subheader("Coach")
    st.caption("Follow the prompt. The circle expands as you inhale and contracts as you exhale.")
    c_circle, c_pattern = st.columns(2)
    with c_circle:
        st.markdown(f"### {snap.prompt}")
        st.caption(f"{snap.phase_seconds_left}s left")
        shown_pattern = timer.pattern if active else (_pattern_from_inputs() or DEFAULT_PATTERN)
        st.markdown(
            breath_circle_html(shown_pattern, snap.phase, snap.status == TimerStatus.RUNNING),
            unsafe_allow_html=True,
        )
    with c_pattern:
        st.markdown("**Pattern**")
        pc1, pc2, pc3 = st.columns(3)
        pc1.number_input("Inhale", min_value=1, max_value=MAX_PHASE_SECONDS,
                         disabled=active, key="p_inhale")
        pc2.number_input("Hold", min_value=0, max_value=MAX_PHASE_SECONDS,
                         disabled=active, key="p_hold")
        pc3.number_input("Exhale", min_value=1, max_value=MAX_PHASE_SECONDS,
                         disabled=active, key="p_exhale")
        for name, preset in PRESET_PATTERNS.items():
            st.button(name, disabled=active, on_click=_apply_preset, args=(preset,),
                      key=f"preset_{name}")

# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------

st.divider()
records = store.all()
hc1, hc2 = st.columns([3, 1])
hc1.subheader("Your sessions")
with hc2:
    st.download_button(
        "Export CSV",
        data=to_csv_string(records),
        file_name=EXPORT_FILENAME,
        mime="text/csv",
        disabled=not records,
    )

if not records:
    st.info("No sessions yet. Hit Start and breathe.")
else:
    st.bar_chart(daily_minutes(records, date.today()))
    st.dataframe(history_table(records), hide_index=True, use_container_width=True)

st.caption("Data stays on this machine.")

# ---------------------------------------------------------------------------
# Tick loop: one tick per rerun while running
# ---------------------------------------------------------------------------

if timer.status == TimerStatus.RUNNING:
    time.sleep(TICK_SECONDS)
    result = timer.tick()
    if result.transition is not None:
        st.session_state["pending_chime"] = result.transition.to_phase
    if result.record is not None:
        store.append(result.record)
    st.rerun()
