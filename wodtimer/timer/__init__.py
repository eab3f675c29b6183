"""Timer package."""

from .config import (
    ConfigError,
    TimerConfig,
    TimerMode,
    DEFAULT_CONFIGS,
    MODE_LABELS,
    MODE_DESCRIPTIONS,
)
from .state import Phase, TimerState, TimerStatus, initial_state, on_tick
from .display import TIME_UP, format_clock, render
from .clock import ClockDriver
from .engine import TimerEngine

__all__ = [
    "ConfigError",
    "TimerConfig",
    "TimerMode",
    "DEFAULT_CONFIGS",
    "MODE_LABELS",
    "MODE_DESCRIPTIONS",
    "Phase",
    "TimerState",
    "TimerStatus",
    "initial_state",
    "on_tick",
    "TIME_UP",
    "format_clock",
    "render",
    "ClockDriver",
    "TimerEngine",
]
