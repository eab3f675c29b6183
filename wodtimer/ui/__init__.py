"""UI package."""

from .timer_widget import TimerWidget
from .run_history import RunHistoryWidget

__all__ = [
    "TimerWidget",
    "RunHistoryWidget",
]
