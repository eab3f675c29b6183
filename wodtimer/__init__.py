"""WodTimer: interval workout timer (AMRAP, EMOM, Tabata, For Time, Countdown)."""

__version__ = "0.1.0"
