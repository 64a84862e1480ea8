"""
Weekly time allocation report generation.

One run: load categories -> pick the week -> fetch events -> classify ->
aggregate -> replace the week's rows in the report store.

Every collaborator is passed in (clock, category source, event source,
report store) so runs can be reproduced with fixed inputs.
"""

import traceback
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from core.aggregation import aggregate, build_report_rows
from core.classification import classify_event, load_categories
from core.config import TIME_ZONE
from core.errors import ConfigurationMissing, ExternalFetchFailure, ReportError
from core.week import WeekMode, WeekWindow, get_week_window, today_in_zone
from models.events import ReportRow
from services.reports import write_weekly_report


@dataclass
class ReportRun:
    """Result of a completed report run."""

    window: WeekWindow
    rows: list[ReportRow]
    event_count: int
    included_count: int

    @property
    def total_hours(self) -> float:
        return round(sum(row.hours for row in self.rows), 2)

    @property
    def message(self) -> str:
        return (
            f"Report complete for {self.window.description} "
            f"({self.window.start.isoformat()} to {self.window.end.isoformat()}). "
            f"{len(self.rows)} categor{'y' if len(self.rows) == 1 else 'ies'} written."
        )


@dataclass
class RunOutcome:
    """What the invoking surface shows the user."""

    ok: bool
    message: str
    run: ReportRun | None = None
    error: Exception | None = None


def read_categories(category_source) -> list[str]:
    """Load the keyword list, treating any read failure as missing configuration."""
    try:
        values = category_source.get_keywords()
    except ConfigurationMissing:
        raise
    except Exception as e:
        raise ConfigurationMissing(f"Error reading categories: {e}") from e
    return load_categories(values)


def generate_weekly_report(
    mode: WeekMode,
    *,
    category_source,
    event_source,
    report_store,
    clock: Callable[[], datetime] | None = None,
    time_zone: str = TIME_ZONE,
) -> ReportRun:
    """
    Generate and store the report for one week.

    Raises:
        ConfigurationMissing: no categories configured (nothing fetched or written).
        ExternalFetchFailure: the event source or report store failed. Stored
            rows are only touched after all events have been fetched.
    """
    tz = ZoneInfo(time_zone)
    categories = read_categories(category_source)

    today = today_in_zone(clock or (lambda: datetime.now(tz)), tz)
    window = get_week_window(today, mode)
    start_dt, end_dt = window.fetch_range(tz)
    print(f"Generating report for {window.start} to {window.end} ({len(categories)} categories)")

    try:
        events = event_source.get_events(start_dt, end_dt)
    except ExternalFetchFailure:
        raise
    except Exception as e:
        raise ExternalFetchFailure(f"Error fetching calendar events: {e}") from e

    classifications = [classify_event(event, categories) for event in events]
    included = [c for c in classifications if c is not None]
    print(f"Events: {len(events)} fetched, {len(included)} included")

    rows = build_report_rows(aggregate(included, categories), window)
    write_weekly_report(report_store, window, rows)

    return ReportRun(
        window=window,
        rows=rows,
        event_count=len(events),
        included_count=len(included),
    )


def run_weekly_report(mode: WeekMode, **collaborators) -> RunOutcome:
    """Run generate_weekly_report and turn any failure into a user-facing message."""
    try:
        run = generate_weekly_report(mode, **collaborators)
    except ConfigurationMissing as e:
        print(f"\nConfiguration error: {e}")
        return RunOutcome(ok=False, message=str(e), error=e)
    except ReportError as e:
        print(f"\nError: {e}")
        return RunOutcome(ok=False, message=f"An error occurred: {e}", error=e)
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        return RunOutcome(ok=False, message=f"An error occurred: {e}", error=e)

    return RunOutcome(ok=True, message=run.message, run=run)
