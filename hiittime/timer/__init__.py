"""Timer package."""

from .sequencer import (
    PhaseSequencer,
    Phase,
    TickEvent,
    TickResult,
    SessionConfig,
    SessionConfigBuilder,
    SequencerState,
    InvalidConfig,
    CUE_WINDOW_SECONDS,
)
from .clock import TickDriver, TICK_INTERVAL_MS

__all__ = [
    "PhaseSequencer",
    "Phase",
    "TickEvent",
    "TickResult",
    "SessionConfig",
    "SessionConfigBuilder",
    "SequencerState",
    "InvalidConfig",
    "CUE_WINDOW_SECONDS",
    "TickDriver",
    "TICK_INTERVAL_MS",
]
