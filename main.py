#!/usr/bin/env python3
"""WodTimer entry point.

Run with:
    python main.py
    python -m wodtimer
"""

from wodtimer.__main__ import main


if __name__ == "__main__":
    main()
