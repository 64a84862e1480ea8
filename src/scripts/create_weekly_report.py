#!/usr/bin/env python3
"""
Create the weekly time allocation report from the configured calendar.

Loads category keywords, fetches the week's events from MS365, totals hours
per category and replaces the week's rows in the report store.

Usage:
    uv run python src/scripts/create_weekly_report.py --week previous
    uv run python src/scripts/create_weekly_report.py --week auto --date 2025-11-07 --email
"""

import argparse
import asyncio
import sys
from datetime import datetime, time
from pathlib import Path
from zoneinfo import ZoneInfo

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import TIME_ZONE
from core.week import WeekMode
from services.backends import get_collaborators
from services.email import send_error_email, send_report_email
from services.reports import format_report_summary
from services.weekly_report import RunOutcome, run_weekly_report


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate weekly time allocation report")
    parser.add_argument(
        "--week",
        choices=[m.value for m in WeekMode],
        default=WeekMode.CURRENT.value,
        help="Week to report on. 'auto' reports the previous week from Friday to Monday.",
    )
    parser.add_argument(
        "--date",
        help="Treat this date (YYYY-MM-DD) as today. Defaults to today.",
    )
    parser.add_argument(
        "--email",
        action="store_true",
        help="Email the summary (or the error) after the run.",
    )
    return parser.parse_args(argv)


def make_clock(date_str: str | None, tz: ZoneInfo):
    """Fixed clock for --date, None for the system clock."""
    if not date_str:
        return None
    as_of = datetime.combine(datetime.strptime(date_str, "%Y-%m-%d").date(), time.min, tzinfo=tz)
    return lambda: as_of


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    tz = ZoneInfo(TIME_ZONE)

    try:
        clock = make_clock(args.date, tz)
        collaborators = get_collaborators()
    except ValueError as e:
        # Bad --date or REPORT_BACKEND
        outcome = RunOutcome(ok=False, message=f"An error occurred: {e}", error=e)
    else:
        outcome = run_weekly_report(
            WeekMode(args.week),
            clock=clock,
            time_zone=TIME_ZONE,
            **collaborators,
        )

    if outcome.ok:
        print()
        print(format_report_summary(outcome.run.window, outcome.run.rows))
        print(f"\n{outcome.message}")
        if args.email:
            asyncio.run(send_report_email(outcome.run))
        return 0

    print(f"\n{outcome.message}", file=sys.stderr)
    if args.email:
        asyncio.run(send_error_email(outcome.message))
    return 1


if __name__ == "__main__":
    sys.exit(main())
