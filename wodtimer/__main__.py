"""Allow running WodTimer as a module: python -m wodtimer."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import WodTimerApp

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="wodtimer", description="Interval workout timer")
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    parser.add_argument(
        "--no-history", action="store_true",
        help="do not record ended runs in the history database",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format=LOG_FORMAT,
    )

    history_enabled = None
    if args.no_history:
        history_enabled = False
    else:
        init_db()

    app = QApplication(sys.argv[:1])
    app.setApplicationName("WodTimer")
    app.setOrganizationName("WodTimer")

    window = WodTimerApp(history_enabled=history_enabled)
    window.show()
    logging.getLogger(__name__).info("WodTimer ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
