"""Workout timer engine.

States
------
IDLE        Fresh state for the active mode, no run started.
RUNNING     Clock ticking.
PAUSED      Stopped mid-run; counters kept.
FINISHED    amrap / countdown / tabata reached their end.

Transitions
-----------
IDLE → RUNNING                      (start)
RUNNING → RUNNING                   (tick)
RUNNING → PAUSED                    (stop)
PAUSED → RUNNING                    (start, no new config)
RUNNING → FINISHED                  (tick, modes with an end)
Any → IDLE                          (reset / select_mode)

emom and fortime never reach FINISHED; they only leave a run through
``reset`` or a mode switch.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from PyQt6.QtCore import QObject, pyqtSignal

from .clock import ClockDriver, TICK_INTERVAL_MS
from .config import DEFAULT_CONFIGS, TimerConfig, TimerMode
from .display import render
from .state import TimerState, TimerStatus, initial_state, on_tick

log = logging.getLogger(__name__)


class TimerEngine(QObject):
    """Owns the single ``TimerState`` and the clock that advances it.

    Signals
    -------
    tick(state: TimerState)
        Emitted after every tick is folded in.
    state_changed(state: TimerState)
        Emitted after every operation and every tick.
    finished(state: TimerState)
        Emitted once when a run reaches its end.
    run_ended(data: dict)
        Emitted when a run that made progress ends, whether it finished
        or was reset / switched away from.  Keys: ``mode``, ``config``,
        ``elapsed_seconds``, ``round_number``, ``finished``,
        ``start_time``, ``end_time``.
    """

    tick = pyqtSignal(object)
    state_changed = pyqtSignal(object)
    finished = pyqtSignal(object)
    run_ended = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        mode: TimerMode = TimerMode.AMRAP,
        configs: dict[TimerMode, TimerConfig] | None = None,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._configs: dict[TimerMode, TimerConfig] = dict(DEFAULT_CONFIGS)
        for config in (configs or {}).values():
            config.validate()
            self._configs[config.mode] = config
        self._config: TimerConfig = self._configs[mode]

        # ── run state ─────────────────────────────────────────────────
        self._state: TimerState = initial_state(self._config)
        self._start_time: datetime | None = None

        # ── clock ─────────────────────────────────────────────────────
        self._clock = ClockDriver(self, interval_ms=tick_interval_ms)
        self._clock.tick.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def config(self) -> TimerConfig:
        """The configuration of the current (or next) run."""
        return self._config

    @property
    def mode(self) -> TimerMode:
        return self._config.mode

    @property
    def status(self) -> TimerStatus:
        return self._state.status

    @property
    def is_running(self) -> bool:
        return self._state.running

    @property
    def display(self) -> str:
        return render(self._state)

    def config_for(self, mode: TimerMode) -> TimerConfig:
        return self._configs[mode]

    def set_config(self, config: TimerConfig) -> None:
        """Store parameters for ``config.mode``.

        A run in progress keeps the parameters it started with; an idle
        engine on the same mode picks the new ones up immediately.
        """
        config.validate()
        self._configs[config.mode] = config
        if config.mode == self.mode and self.status == TimerStatus.IDLE:
            self._config = config
            self._set_state(initial_state(config))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, config: TimerConfig | None = None) -> None:
        """Begin a run, or resume a paused one.

        An explicit ``config`` always starts fresh.  Without one, a
        paused run resumes with its counters intact, a running one is
        left alone, and an idle or finished engine starts fresh with
        the stored parameters for the current mode.
        """
        if config is not None:
            config.validate()
            self._configs[config.mode] = config
            self._begin_run(config)
            return

        status = self.status
        if status == TimerStatus.RUNNING:
            return
        if status == TimerStatus.PAUSED:
            log.debug("resuming %s at %ds", self.mode.value,
                      self._state.elapsed_seconds)
            self._set_state(replace(self._state, running=True))
            self._clock.start()
            return
        self._begin_run(self._configs[self.mode])

    def stop(self) -> None:
        """Pause.  Counters are preserved."""
        if not self._state.running:
            return
        self._clock.stop()
        log.debug("stopped %s at %ds", self.mode.value,
                  self._state.elapsed_seconds)
        self._set_state(replace(self._state, running=False))

    def reset(self) -> None:
        """Back to the zero state for the current mode.

        Parameters stored with ``set_config`` during the run take effect
        here.
        """
        self._clock.stop()
        self._end_run()
        self._config = self._configs[self.mode]
        self._set_state(initial_state(self._config))

    def select_mode(self, mode: TimerMode) -> None:
        """Switch mode.  Always implies a reset."""
        self._clock.stop()
        self._end_run()
        self._config = self._configs[mode]
        log.debug("mode switched to %s", mode.value)
        self._set_state(initial_state(self._config))

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _begin_run(self, config: TimerConfig) -> None:
        self._clock.stop()
        self._end_run()
        self._config = config
        self._start_time = datetime.now()
        self._set_state(
            replace(initial_state(config), running=True, started=True)
        )
        log.debug("started %s %s", config.mode.value, config.to_dict())
        self._clock.start()

    def _on_tick(self) -> None:
        if not self._state.running:
            return
        new_state = on_tick(self._state, self._config)
        if not new_state.running:
            self._clock.stop()
        self._state = new_state
        self.tick.emit(new_state)
        self.state_changed.emit(new_state)

        if new_state.finished:
            log.info("%s finished after %ds", self.mode.value,
                     new_state.elapsed_seconds)
            self.finished.emit(new_state)
            self._end_run()

    def _end_run(self) -> None:
        """Report the current run, if it made any progress."""
        if self._start_time is None:
            return
        state = self._state
        start_time, self._start_time = self._start_time, None
        if state.elapsed_seconds == 0:
            return
        self.run_ended.emit({
            "mode": state.mode.value,
            "config": self._config.to_dict(),
            "elapsed_seconds": state.elapsed_seconds,
            "round_number": state.round,
            "finished": state.finished,
            "start_time": start_time,
            "end_time": datetime.now(),
        })

    def _set_state(self, new_state: TimerState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)
