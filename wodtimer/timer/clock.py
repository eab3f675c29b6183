"""Fixed-step clock that drives the timer engine.

Every ``tick`` counts as exactly one second.  There is no wall-clock
correction, so scheduling jitter accumulates over long runs.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

log = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class ClockDriver(QObject):
    """Emits ``tick`` once per interval while active."""

    tick = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self.tick.emit)

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def start(self) -> None:
        """Start ticking.  Does nothing if already active, so the
        pending tick keeps its schedule."""
        if self._qt_timer.isActive():
            return
        self._qt_timer.start()
        log.debug("clock started (%d ms)", self._qt_timer.interval())

    def stop(self) -> None:
        """Cancel the pending tick.  No partial tick is carried over."""
        if not self._qt_timer.isActive():
            return
        self._qt_timer.stop()
        log.debug("clock stopped")
