"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/WodTimer/settings.json

Usage::

    settings = load_settings()
    settings.tabata_rounds = 10
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.config import TimerConfig, TimerMode

log = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "WodTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    last_mode: str = TimerMode.AMRAP.value
    amrap_seconds: int = 10 * 60
    countdown_seconds: int = 10 * 60
    emom_interval: int = 60
    tabata_work: int = 20
    tabata_rest: int = 10
    tabata_rounds: int = 8

    # ── history ───────────────────────────────────────────────────────
    history_enabled: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 640


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning("ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )


def last_mode(settings: Settings) -> TimerMode:
    try:
        return TimerMode(settings.last_mode)
    except ValueError:
        return TimerMode.AMRAP


def configs_from_settings(settings: Settings) -> dict[TimerMode, TimerConfig]:
    """Build the per-mode timer parameters stored in ``settings``."""
    return {
        TimerMode.AMRAP: TimerConfig(
            TimerMode.AMRAP, target_seconds=settings.amrap_seconds,
        ),
        TimerMode.COUNTDOWN: TimerConfig(
            TimerMode.COUNTDOWN, target_seconds=settings.countdown_seconds,
        ),
        TimerMode.EMOM: TimerConfig(
            TimerMode.EMOM, interval_seconds=settings.emom_interval,
        ),
        TimerMode.TABATA: TimerConfig(
            TimerMode.TABATA,
            work_seconds=settings.tabata_work,
            rest_seconds=settings.tabata_rest,
            total_rounds=settings.tabata_rounds,
        ),
        TimerMode.FOR_TIME: TimerConfig(TimerMode.FOR_TIME),
    }


def store_config(settings: Settings, config: TimerConfig) -> None:
    """Copy the parameters of ``config`` into ``settings``."""
    if config.mode == TimerMode.AMRAP:
        settings.amrap_seconds = config.target_seconds
    elif config.mode == TimerMode.COUNTDOWN:
        settings.countdown_seconds = config.target_seconds
    elif config.mode == TimerMode.EMOM:
        settings.emom_interval = config.interval_seconds
    elif config.mode == TimerMode.TABATA:
        settings.tabata_work = config.work_seconds
        settings.tabata_rest = config.rest_seconds
        settings.tabata_rounds = config.total_rounds
