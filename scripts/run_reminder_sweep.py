"""Run a single session reminder sweep, e.g. from cron instead of the in-app loop."""

from __future__ import annotations

import argparse
import logging
from datetime import timedelta

from mindmend.application.use_cases.reminders import sweep_session_reminders
from mindmend.config import get_settings
from mindmend.infrastructure.database import SessionLocal, initialize_database


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--window-minutes",
        type=int,
        default=get_settings().reminder_window_minutes,
        help="Remind sessions starting within this many minutes",
    )
    args = parser.parse_args()

    logging.basicConfig(level=get_settings().log_level)
    initialize_database()
    with SessionLocal() as session:
        reminded = sweep_session_reminders(
            session, window=timedelta(minutes=args.window_minutes)
        )
    print(f"Reminded {len(reminded)} booking(s)")


if __name__ == "__main__":
    main()
