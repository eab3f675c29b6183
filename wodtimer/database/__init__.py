"""Database package."""

from .db import get_session, init_db
from .models import WorkoutRun
from .runs import record_run, recent_runs

__all__ = ["get_session", "init_db", "WorkoutRun", "record_run", "recent_runs"]
