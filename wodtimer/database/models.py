"""SQLAlchemy ORM models for WodTimer."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class WorkoutRun(Base):
    """One ended timer run: finished on its own, or reset mid-way."""

    __tablename__ = "workout_runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mode = Column(String(20), nullable=False)  # amrap | emom | tabata | fortime | countdown
    start_time = Column(DateTime, nullable=False, default=datetime.now)
    end_time = Column(DateTime, nullable=False, default=datetime.now)
    elapsed_seconds = Column(Integer, nullable=False, default=0)
    round_number = Column(Integer, nullable=False, default=1)
    finished = Column(Boolean, nullable=False, default=False)

    # Parameters the run was started with; unused ones stay NULL.
    target_seconds = Column(Integer, nullable=True)
    interval_seconds = Column(Integer, nullable=True)
    work_seconds = Column(Integer, nullable=True)
    rest_seconds = Column(Integer, nullable=True)
    total_rounds = Column(Integer, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<WorkoutRun id={self.id} mode={self.mode} "
            f"elapsed={self.elapsed_seconds} finished={self.finished}>"
        )
