"""Clock text for the timer display."""

from __future__ import annotations

from .config import TimerConfig, TimerMode
from .state import Phase, TimerState

TIME_UP = "TIME!"

PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK: "WORK",
    Phase.REST: "REST",
}


def format_clock(
    finished: bool,
    mode: TimerMode,
    elapsed_seconds: int,
    remaining_seconds: int,
) -> str:
    """``TIME!`` once finished, otherwise ``mm:ss``.

    For Time shows the elapsed seconds, every other mode the remaining
    ones.  Minutes are not capped, so 100 minutes renders as ``100:00``.
    """
    if finished:
        return TIME_UP
    seconds = elapsed_seconds if mode == TimerMode.FOR_TIME else remaining_seconds
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def render(state: TimerState) -> str:
    return format_clock(
        state.finished,
        state.mode,
        state.elapsed_seconds,
        state.remaining_seconds,
    )


def phase_label(state: TimerState) -> str:
    if state.mode != TimerMode.TABATA:
        return ""
    return PHASE_LABELS[state.phase]


def round_label(state: TimerState, config: TimerConfig) -> str:
    if state.mode == TimerMode.TABATA:
        return f"Round {state.round} / {config.total_rounds}"
    if state.mode == TimerMode.EMOM:
        return f"Round {state.round}"
    return ""
