"""Run history widget: the last few ended runs, newest first."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame

from ..database.models import WorkoutRun
from ..database.runs import recent_runs
from ..timer.config import TimerMode, MODE_LABELS


def describe_run(run: WorkoutRun) -> str:
    """One-line summary, e.g. ``Tabata · 8 rounds`` or ``For Time · 12:34``."""
    label = MODE_LABELS[TimerMode(run.mode)]
    minutes, seconds = divmod(run.elapsed_seconds or 0, 60)
    clock = f"{minutes:02d}:{seconds:02d}"
    if run.mode == TimerMode.TABATA.value:
        done = run.round_number if run.finished else run.round_number - 1
        return f"{label} · {done}/{run.total_rounds} rounds"
    if run.mode == TimerMode.EMOM.value:
        return f"{label} · {run.round_number - 1} rounds · {clock}"
    return f"{label} · {clock}"


class RunHistoryWidget(QWidget):
    """Displays the most recently ended runs."""

    def __init__(self, parent: QWidget | None = None, *, limit: int = 5) -> None:
        super().__init__(parent)
        self._limit = limit
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 0)
        layout.setSpacing(6)

        header = QLabel("Recent Runs")
        header.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.setStyleSheet("font-size: 13px; font-weight: 600; color: #7A7A9A;")
        layout.addWidget(header)

        self._rows_container = QVBoxLayout()
        self._rows_container.setSpacing(4)
        layout.addLayout(self._rows_container)

        self._empty_label = QLabel("No runs yet")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet("font-size: 12px; color: #313154;")
        layout.addWidget(self._empty_label)

        self._row_widgets: list[QWidget] = []

    @property
    def row_count(self) -> int:
        return len(self._row_widgets)

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self) -> None:
        """Reload the recent runs from the database."""
        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()

        runs = recent_runs(self._limit)
        self._empty_label.setVisible(not runs)
        for run in runs:
            row = self._make_row(run)
            self._rows_container.addWidget(row)
            self._row_widgets.append(row)

    def _make_row(self, run: WorkoutRun) -> QWidget:
        frame = QFrame(self)
        row = QHBoxLayout(frame)
        row.setContentsMargins(8, 4, 8, 4)
        row.setSpacing(8)

        summary = QLabel(describe_run(run))
        summary.setStyleSheet("font-size: 12px; color: #E2E2F0;")

        status = QLabel("done" if run.finished else "stopped")
        status.setStyleSheet("font-size: 11px; color: #7A7A9A;")
        status.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        time_lbl = QLabel(run.end_time.strftime("%H:%M") if run.end_time else "")
        time_lbl.setStyleSheet("font-size: 11px; color: #7A7A9A;")
        time_lbl.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        row.addWidget(summary, stretch=1)
        row.addWidget(status)
        row.addWidget(time_lbl)
        return frame
