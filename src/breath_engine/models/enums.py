"""Enumerations and constants for the breath engine."""

from enum import IntEnum, auto


class Phase(IntEnum):
    """Breathing phases in cyclic order: INHALE -> HOLD -> EXHALE -> INHALE."""

    INHALE = auto()
    HOLD = auto()
    EXHALE = auto()


class TimerStatus(IntEnum):
    """SessionTimer lifecycle states.

    FINISHED and STOPPED are terminal for a session; only reset() leaves them.
    """

    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    FINISHED = auto()
    STOPPED = auto()


PHASE_ORDER = (Phase.INHALE, Phase.HOLD, Phase.EXHALE)

# Prompts shown to the user while a phase is active
PHASE_PROMPTS = {
    Phase.INHALE: "Breathe in",
    Phase.HOLD: "Hold",
    Phase.EXHALE: "Exhale slowly",
}

# ---------------------------------------------------------------------------
# Pattern bounds
# ---------------------------------------------------------------------------
MIN_INHALE_SECONDS = 1
MIN_HOLD_SECONDS = 0
MIN_EXHALE_SECONDS = 1
MAX_PHASE_SECONDS = 16  # Upper bound offered by the pattern inputs

# ---------------------------------------------------------------------------
# Session length
# ---------------------------------------------------------------------------
MIN_SESSION_SECONDS = 60
MAX_SESSION_MINUTES = 120
DEFAULT_SESSION_MINUTES = 5
SESSION_MINUTE_PRESETS = (5, 10, 15, 20)


def next_phase(phase: Phase) -> Phase:
    """Return the phase that follows *phase* in the breathing cycle."""
    return PHASE_ORDER[(PHASE_ORDER.index(phase) + 1) % len(PHASE_ORDER)]
