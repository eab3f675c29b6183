"""Per-mode timer parameters.

A ``TimerConfig`` is fixed for the lifetime of a run.  Only the fields
that apply to its mode are looked at:

    amrap, countdown   target_seconds
    emom               interval_seconds
    tabata             work_seconds, rest_seconds, total_rounds
    fortime            (none)
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum


class ConfigError(ValueError):
    """Raised when a timer is configured with unusable parameters."""


class TimerMode(Enum):
    AMRAP = "amrap"
    EMOM = "emom"
    TABATA = "tabata"
    FOR_TIME = "fortime"
    COUNTDOWN = "countdown"


MODE_LABELS: dict[TimerMode, str] = {
    TimerMode.AMRAP: "AMRAP",
    TimerMode.EMOM: "EMOM",
    TimerMode.TABATA: "Tabata",
    TimerMode.FOR_TIME: "For Time",
    TimerMode.COUNTDOWN: "Countdown",
}

MODE_DESCRIPTIONS: dict[TimerMode, str] = {
    TimerMode.AMRAP: "As Many Rounds As Possible",
    TimerMode.EMOM: "Every Minute On the Minute",
    TimerMode.TABATA: "20s work / 10s rest",
    TimerMode.FOR_TIME: "Counts up",
    TimerMode.COUNTDOWN: "Simple countdown",
}

_REQUIRED_FIELDS: dict[TimerMode, tuple[str, ...]] = {
    TimerMode.AMRAP: ("target_seconds",),
    TimerMode.COUNTDOWN: ("target_seconds",),
    TimerMode.EMOM: ("interval_seconds",),
    TimerMode.TABATA: ("work_seconds", "rest_seconds", "total_rounds"),
    TimerMode.FOR_TIME: (),
}

# Largest value each field accepts.  The parameter form's spin box ranges
# are built from these.
MAX_TARGET_SECONDS = 999 * 60 + 59
MAX_SECONDS = 3600
MAX_ROUNDS = 99

_MAX_VALUES: dict[str, int] = {
    "target_seconds": MAX_TARGET_SECONDS,
    "interval_seconds": MAX_SECONDS,
    "work_seconds": MAX_SECONDS,
    "rest_seconds": MAX_SECONDS,
    "total_rounds": MAX_ROUNDS,
}


@dataclass(frozen=True)
class TimerConfig:
    mode: TimerMode
    target_seconds: int | None = None
    interval_seconds: int | None = None
    work_seconds: int | None = None
    rest_seconds: int | None = None
    total_rounds: int | None = None

    def validate(self) -> None:
        """Raise ``ConfigError`` unless every field the mode uses is a
        positive integer no larger than its limit."""
        if not isinstance(self.mode, TimerMode):
            raise ConfigError(f"unknown timer mode: {self.mode!r}")
        for name in _REQUIRED_FIELDS[self.mode]:
            value = getattr(self, name)
            if value is None:
                raise ConfigError(f"{self.mode.value} requires {name}")
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(
                    f"{name} must be an integer, got {value!r}"
                )
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")
            if value > _MAX_VALUES[name]:
                raise ConfigError(
                    f"{name} must be at most {_MAX_VALUES[name]}, got {value}"
                )

    @property
    def initial_remaining(self) -> int:
        """``remaining_seconds`` at the start of a fresh run."""
        if self.mode in (TimerMode.AMRAP, TimerMode.COUNTDOWN):
            return self.target_seconds or 0
        if self.mode == TimerMode.EMOM:
            return self.interval_seconds or 0
        if self.mode == TimerMode.TABATA:
            return self.work_seconds or 0
        return 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["mode"] = self.mode.value
        return {k: v for k, v in data.items() if v is not None}


DEFAULT_CONFIGS: dict[TimerMode, TimerConfig] = {
    TimerMode.AMRAP: TimerConfig(TimerMode.AMRAP, target_seconds=10 * 60),
    TimerMode.EMOM: TimerConfig(TimerMode.EMOM, interval_seconds=60),
    TimerMode.TABATA: TimerConfig(
        TimerMode.TABATA, work_seconds=20, rest_seconds=10, total_rounds=8,
    ),
    TimerMode.FOR_TIME: TimerConfig(TimerMode.FOR_TIME),
    TimerMode.COUNTDOWN: TimerConfig(
        TimerMode.COUNTDOWN, target_seconds=10 * 60,
    ),
}
