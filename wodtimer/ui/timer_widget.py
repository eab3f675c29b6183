"""Main timer display widget.

Layout (top → bottom):
    - Mode selector row (AMRAP / EMOM / Tabata / For Time / Countdown)
    - Mode description
    - Parameter form (only while idle)
    - Phase label (tabata, while running) and round label (emom, tabata)
    - Clock
    - Start / Pause / Resume + Reset
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QButtonGroup,
    QLabel, QPushButton, QSpinBox, QFrame,
)

from ..timer.config import (
    ConfigError, TimerConfig, TimerMode, MODE_LABELS, MODE_DESCRIPTIONS,
    MAX_ROUNDS, MAX_SECONDS, MAX_TARGET_SECONDS,
)
from ..timer.display import phase_label, round_label
from ..timer.engine import TimerEngine
from ..timer.state import Phase, TimerState, TimerStatus


CLOCK_COLORS: dict[str, str] = {
    "idle": "#E2E2F0",
    "work": "#CBA6F7",
    "rest": "#F9E2AF",
    "done": "#A6E3A1",
}


class TimerWidget(QWidget):
    """Mode selector, parameter form, clock and controls."""

    config_changed = pyqtSignal(object)
    mode_changed = pyqtSignal(object)

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._populating = False
        self._build_ui()
        self._connect_signals()
        self._populate(engine.mode)
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setSpacing(10)

        # ── mode selector ────────────────────────────────────────────
        mode_row = QHBoxLayout()
        mode_row.setSpacing(4)
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        self._mode_buttons: dict[TimerMode, QPushButton] = {}
        for mode in TimerMode:
            btn = QPushButton(MODE_LABELS[mode], card)
            btn.setCheckable(True)
            btn.setObjectName("modeButton")
            self._mode_group.addButton(btn)
            self._mode_buttons[mode] = btn
            mode_row.addWidget(btn)
        layout.addLayout(mode_row)

        self._description = QLabel(card)
        self._description.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._description.setStyleSheet("font-size: 11px; color: #7A7A9A;")
        layout.addWidget(self._description)

        # ── parameter form ───────────────────────────────────────────
        self._form_frame = QFrame(card)
        form = QFormLayout(self._form_frame)
        form.setContentsMargins(0, 0, 0, 0)
        form.setVerticalSpacing(8)

        time_row = QHBoxLayout()
        self._minutes_spin = self._spin(0, MAX_TARGET_SECONDS // 60, " min")
        self._seconds_spin = self._spin(0, 59, " sec")
        time_row.addWidget(self._minutes_spin)
        time_row.addWidget(self._seconds_spin)
        self._time_wrapper = QWidget()
        self._time_wrapper.setLayout(time_row)
        form.addRow("Time:", self._time_wrapper)

        self._interval_spin = self._spin(1, MAX_SECONDS, " sec")
        form.addRow("Interval:", self._interval_spin)

        self._work_spin = self._spin(1, MAX_SECONDS, " sec")
        form.addRow("Work:", self._work_spin)
        self._rest_spin = self._spin(1, MAX_SECONDS, " sec")
        form.addRow("Rest:", self._rest_spin)
        self._rounds_spin = self._spin(1, MAX_ROUNDS, "")
        form.addRow("Rounds:", self._rounds_spin)

        self._form = form
        layout.addWidget(self._form_frame)

        self._error_label = QLabel(card)
        self._error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._error_label.setStyleSheet("font-size: 11px; color: #F38BA8;")
        self._error_label.setVisible(False)
        layout.addWidget(self._error_label)

        # ── display ──────────────────────────────────────────────────
        self._phase_label = QLabel(card)
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._phase_label.setStyleSheet("font-size: 18px; font-weight: 700;")
        layout.addWidget(self._phase_label)

        self._round_label = QLabel(card)
        self._round_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._round_label.setStyleSheet("font-size: 13px; color: #7A7A9A;")
        layout.addWidget(self._round_label)

        self._clock_label = QLabel(card)
        self._clock_label.setObjectName("clock")
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock_label)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")
        btn_row.addWidget(self._start_pause_btn, stretch=1)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    def _spin(self, low: int, high: int, suffix: str) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(low, high)
        spin.setSuffix(suffix)
        return spin

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        for mode, btn in self._mode_buttons.items():
            btn.clicked.connect(lambda _checked, m=mode: self.select_mode(m))
        for spin in (
            self._minutes_spin, self._seconds_spin, self._interval_spin,
            self._work_spin, self._rest_spin, self._rounds_spin,
        ):
            spin.valueChanged.connect(self._on_params_changed)
        self._start_pause_btn.clicked.connect(self.toggle_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def select_mode(self, mode: TimerMode) -> None:
        self._engine.select_mode(mode)
        self._populate(mode)
        self.mode_changed.emit(mode)

    def _on_params_changed(self) -> None:
        if self._populating:
            return
        config = self.current_config()
        try:
            self._engine.set_config(config)
        except ConfigError as exc:
            self._show_error(str(exc))
            return
        self._show_error("")
        self.config_changed.emit(config)

    def toggle_start_pause(self) -> None:
        if self._engine.is_running:
            self._engine.stop()
            return
        try:
            if self._engine.status == TimerStatus.PAUSED:
                self._engine.start()
            else:
                self._engine.start(self.current_config())
        except ConfigError as exc:
            self._show_error(str(exc))
            return
        self._show_error("")

    def _on_state_changed(self, state: TimerState) -> None:
        status = state.status
        config = self._engine.config

        # ── button label ──────────────────────────────────────────────
        if status == TimerStatus.RUNNING:
            stop_text = "Stop" if state.mode == TimerMode.FOR_TIME else "Pause"
            self._start_pause_btn.setText(stop_text)
        elif status == TimerStatus.PAUSED:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start")

        # ── form visibility ──────────────────────────────────────────
        # A started run keeps its parameters until reset, so the form only
        # shows while idle.
        self._form_frame.setVisible(status == TimerStatus.IDLE)
        for btn in self._mode_buttons.values():
            btn.setEnabled(not state.running)

        # ── phase / round ────────────────────────────────────────────
        self._phase_label.setText(phase_label(state) if state.running else "")
        self._phase_label.setVisible(state.running and state.mode == TimerMode.TABATA)
        self._round_label.setText(round_label(state, config))
        self._round_label.setVisible(
            state.mode in (TimerMode.EMOM, TimerMode.TABATA)
        )

        # ── clock ────────────────────────────────────────────────────
        if state.finished:
            color = CLOCK_COLORS["done"]
        elif not state.running:
            color = CLOCK_COLORS["idle"]
        elif state.mode == TimerMode.TABATA and state.phase == Phase.REST:
            color = CLOCK_COLORS["rest"]
        else:
            color = CLOCK_COLORS["work"]
        self._phase_label.setStyleSheet(
            f"font-size: 18px; font-weight: 700; color: {color};"
        )
        self._clock_label.setStyleSheet(
            f"font-family: monospace; font-size: 72px; font-weight: 700; color: {color};"
        )
        self._clock_label.setText(self._engine.display)

    # ── form helpers ──────────────────────────────────────────────────────

    def current_config(self) -> TimerConfig:
        """Parameters currently entered in the form, for the engine's mode."""
        mode = self._engine.mode
        if mode in (TimerMode.AMRAP, TimerMode.COUNTDOWN):
            total = self._minutes_spin.value() * 60 + self._seconds_spin.value()
            return TimerConfig(mode, target_seconds=total)
        if mode == TimerMode.EMOM:
            return TimerConfig(mode, interval_seconds=self._interval_spin.value())
        if mode == TimerMode.TABATA:
            return TimerConfig(
                mode,
                work_seconds=self._work_spin.value(),
                rest_seconds=self._rest_spin.value(),
                total_rounds=self._rounds_spin.value(),
            )
        return TimerConfig(mode)

    def _populate(self, mode: TimerMode) -> None:
        """Load the stored parameters for ``mode`` into the form."""
        config = self._engine.config_for(mode)
        self._populating = True
        try:
            self._mode_buttons[mode].setChecked(True)
            self._description.setText(MODE_DESCRIPTIONS[mode])

            minutes, seconds = divmod(config.target_seconds or 0, 60)
            self._minutes_spin.setValue(minutes)
            self._seconds_spin.setValue(seconds)
            self._interval_spin.setValue(config.interval_seconds or 60)
            self._work_spin.setValue(config.work_seconds or 20)
            self._rest_spin.setValue(config.rest_seconds or 10)
            self._rounds_spin.setValue(config.total_rounds or 8)
        finally:
            self._populating = False

        timed = mode in (TimerMode.AMRAP, TimerMode.COUNTDOWN)
        self._form.setRowVisible(self._time_wrapper, timed)
        self._form.setRowVisible(self._interval_spin, mode == TimerMode.EMOM)
        for spin in (self._work_spin, self._rest_spin, self._rounds_spin):
            self._form.setRowVisible(spin, mode == TimerMode.TABATA)
        self._show_error("")

    def _show_error(self, message: str) -> None:
        self._error_label.setText(message)
        self._error_label.setVisible(bool(message))
