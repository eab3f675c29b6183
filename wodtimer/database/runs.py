"""Reading and writing the run history."""

from __future__ import annotations

import logging

from .db import get_session
from .models import WorkoutRun

log = logging.getLogger(__name__)

_CONFIG_COLUMNS = (
    "target_seconds",
    "interval_seconds",
    "work_seconds",
    "rest_seconds",
    "total_rounds",
)


def record_run(data: dict) -> int:
    """Persist a ``TimerEngine.run_ended`` payload.  Returns the row id."""
    config = data.get("config") or {}
    with get_session() as db:
        run = WorkoutRun(
            mode=data["mode"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            elapsed_seconds=data["elapsed_seconds"],
            round_number=data["round_number"],
            finished=data["finished"],
            **{k: config.get(k) for k in _CONFIG_COLUMNS},
        )
        db.add(run)
        db.flush()
        run_id = run.id
    log.debug("recorded %s run #%d", data["mode"], run_id)
    return run_id


def recent_runs(limit: int = 5) -> list[WorkoutRun]:
    """The most recently ended runs, newest first."""
    with get_session() as db:
        return (
            db.query(WorkoutRun)
            .order_by(WorkoutRun.end_time.desc(), WorkoutRun.id.desc())
            .limit(limit)
            .all()
        )
