"""Timer state and the per-mode tick transition.

``TimerState`` is an immutable value; every transition returns a new
one.  ``phase`` only means something in tabata, ``round`` only in emom
and tabata.  Both are put back to their defaults whenever a run starts
or resets, so a tabata run never sees a phase left over from an earlier
mode.

Per-tick rules
--------------
amrap / countdown   remaining - 1; at 0 the run finishes.
emom                remaining - 1; at 0 the next round starts with a
                    full interval.  Never finishes on its own.
tabata              work counts down into rest, rest counts down into
                    the next round's work.  The run finishes at the end
                    of the last round's rest and stays frozen there.
fortime             elapsed + 1 only.  Never finishes on its own.

``elapsed_seconds`` counts ticks in every mode.  ``started`` is set when a
run begins and cleared only by a reset, so a run stopped before its
first tick is still PAUSED rather than IDLE.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .config import TimerConfig, TimerMode


class Phase(Enum):
    WORK = "work"
    REST = "rest"


class TimerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class TimerState:
    mode: TimerMode
    running: bool = False
    elapsed_seconds: int = 0
    remaining_seconds: int = 0
    phase: Phase = Phase.WORK
    round: int = 1
    finished: bool = False
    started: bool = False

    @property
    def status(self) -> TimerStatus:
        if self.finished:
            return TimerStatus.FINISHED
        if self.running:
            return TimerStatus.RUNNING
        if self.started:
            return TimerStatus.PAUSED
        return TimerStatus.IDLE


def initial_state(config: TimerConfig) -> TimerState:
    """The canonical zero state for ``config.mode``."""
    return TimerState(
        mode=config.mode,
        remaining_seconds=config.initial_remaining,
    )


def on_tick(state: TimerState, config: TimerConfig) -> TimerState:
    """Fold one tick into ``state``."""
    if not state.running or state.finished:
        return state

    elapsed = state.elapsed_seconds + 1
    mode = config.mode

    if mode == TimerMode.FOR_TIME:
        return replace(state, elapsed_seconds=elapsed)

    remaining = max(0, state.remaining_seconds - 1)

    if mode in (TimerMode.AMRAP, TimerMode.COUNTDOWN):
        if remaining == 0:
            return _finish(state, elapsed)
        return replace(state, elapsed_seconds=elapsed, remaining_seconds=remaining)

    if mode == TimerMode.EMOM:
        if remaining == 0:
            return replace(
                state,
                elapsed_seconds=elapsed,
                round=state.round + 1,
                remaining_seconds=config.interval_seconds,
            )
        return replace(state, elapsed_seconds=elapsed, remaining_seconds=remaining)

    if mode == TimerMode.TABATA:
        if remaining > 0:
            return replace(state, elapsed_seconds=elapsed, remaining_seconds=remaining)
        if state.phase == Phase.WORK:
            return replace(
                state,
                elapsed_seconds=elapsed,
                phase=Phase.REST,
                remaining_seconds=config.rest_seconds,
            )
        if state.round >= config.total_rounds:
            return _finish(state, elapsed)
        return replace(
            state,
            elapsed_seconds=elapsed,
            round=state.round + 1,
            phase=Phase.WORK,
            remaining_seconds=config.work_seconds,
        )

    raise ValueError(f"unhandled timer mode: {mode!r}")


def _finish(state: TimerState, elapsed: int) -> TimerState:
    return replace(
        state,
        elapsed_seconds=elapsed,
        remaining_seconds=0,
        finished=True,
        running=False,
    )
