"""Main application window for WodTimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QMessageBox

from .database.runs import record_run
from .settings import (
    Settings, load_settings, save_settings,
    configs_from_settings, last_mode, store_config,
)
from .timer.config import ConfigError, TimerConfig, TimerMode, MODE_LABELS
from .timer.engine import TimerEngine
from .timer.state import TimerState, TimerStatus
from .ui.run_history import RunHistoryWidget
from .ui.timer_widget import TimerWidget

log = logging.getLogger(__name__)


class WodTimerApp(QMainWindow):
    """Main application window."""

    def __init__(self, *, history_enabled: bool | None = None) -> None:
        super().__init__()
        self.setWindowTitle("WodTimer")
        self.setMinimumSize(380, 520)

        # ── geometry save timer ──────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = load_settings()
        if history_enabled is None:
            history_enabled = self._settings.history_enabled
        self._history_enabled = history_enabled

        # ── engine ────────────────────────────────────────────────────
        self._timer_engine = self._create_engine()
        self._timer_engine.run_ended.connect(self._on_run_ended)

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)
        root_layout.setSpacing(8)

        self._timer_widget = TimerWidget(self._timer_engine, central)
        self._timer_widget.mode_changed.connect(self._on_mode_changed)
        self._timer_widget.config_changed.connect(self._on_config_changed)
        root_layout.addWidget(self._timer_widget)

        self._run_history = RunHistoryWidget(central)
        self._run_history.setVisible(self._history_enabled)
        root_layout.addWidget(self._run_history)
        root_layout.addStretch(1)
        if self._history_enabled:
            self._run_history.refresh()

        self._build_menu_bar()
        self._restore_geometry()

    def _create_engine(self) -> TimerEngine:
        """Engine seeded with the saved parameters, or the defaults if
        the saved ones are unusable."""
        mode = last_mode(self._settings)
        try:
            return TimerEngine(
                self, mode=mode, configs=configs_from_settings(self._settings),
            )
        except ConfigError as exc:
            log.warning("saved timer settings rejected, using defaults: %s", exc)
            return TimerEngine(self, mode=mode)

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        timer_menu = menu_bar.addMenu("Timer")
        self._mode_actions: list[QAction] = []
        for index, mode in enumerate(TimerMode, start=1):
            action = QAction(MODE_LABELS[mode], self)
            action.setShortcut(QKeySequence(f"Ctrl+{index}"))
            action.triggered.connect(
                lambda _checked=False, m=mode: self._timer_widget.select_mode(m)
            )
            timer_menu.addAction(action)
            self._mode_actions.append(action)
        self._timer_engine.state_changed.connect(self._update_mode_actions)
        self._update_mode_actions(self._timer_engine.state)

        window_menu = menu_bar.addMenu("Window")
        close_action = QAction("Close Window", self)
        close_action.setShortcut(QKeySequence("Ctrl+W"))
        close_action.triggered.connect(self.close)
        window_menu.addAction(close_action)

    # ══════════════════════════════════════════════════════════════════
    #  ENGINE / WIDGET CALLBACKS
    # ══════════════════════════════════════════════════════════════════

    def _update_mode_actions(self, state: TimerState) -> None:
        """Mode shortcuts are locked while the clock runs, like the mode
        buttons."""
        for action in self._mode_actions:
            action.setEnabled(not state.running)

    def _on_run_ended(self, data: dict) -> None:
        if not self._history_enabled:
            return
        record_run(data)
        self._run_history.refresh()

    def _on_mode_changed(self, mode: TimerMode) -> None:
        self._settings.last_mode = mode.value
        save_settings(self._settings)

    def _on_config_changed(self, config: TimerConfig) -> None:
        store_config(self._settings, config)
        save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        """Restore window position and size from settings."""
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves: restart 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD SHORTCUTS
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, or resume the timer."""
        self._timer_widget.toggle_start_pause()

    def _on_escape(self) -> None:
        """Reset the timer (no-op when idle)."""
        if self._timer_engine.status != TimerStatus.IDLE:
            self._timer_engine.reset()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Ask before closing over a run in progress."""
        if self._timer_engine.status in (TimerStatus.RUNNING, TimerStatus.PAUSED):
            reply = QMessageBox.question(
                self,
                "Quit WodTimer?",
                "A timer is still running. Quit anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                event.ignore()
                return
        self._save_geometry()
        self._timer_engine.reset()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (reset) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
