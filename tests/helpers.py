"""Shared test helpers for WodTimer."""

from wodtimer.timer.config import TimerConfig
from wodtimer.timer.engine import TimerEngine
from wodtimer.timer.state import TimerState, on_tick


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def deliver_ticks(engine: TimerEngine, count: int) -> None:
    """Feed ``count`` clock ticks straight into the engine."""
    for _ in range(count):
        engine._on_tick()


def fold_ticks(state: TimerState, config: TimerConfig, count: int) -> TimerState:
    """Apply the pure transition ``count`` times."""
    for _ in range(count):
        state = on_tick(state, config)
    return state
