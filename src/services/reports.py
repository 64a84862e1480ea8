"""
Report writing and display helpers.
"""

from datetime import date

from core.config import TASK_SEPARATOR
from core.errors import ExternalFetchFailure
from core.week import WeekWindow
from models.events import ReportRow


def format_date_display(d: date) -> str:
    """Format date as M/D/YYYY (platform-safe, no zero-padding)."""
    return f"{d.month}/{d.day}/{d.year}"


def format_date_for_subject(d: date) -> str:
    """Format date for email subject, e.g. 'Nov 2nd 2025'."""
    day = d.day
    suffix = "th" if 11 <= day <= 13 else {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return d.strftime(f"%b {day}{suffix} %Y")


def format_hours(hours: float) -> str:
    return f"{hours:.2f}"


def write_weekly_report(store, window: WeekWindow, rows: list[ReportRow]) -> int:
    """
    Replace the stored rows for window.start with rows.

    The store swaps the week's rows in one step; re-running for the same
    week never duplicates rows. Returns the number of rows replaced.
    """
    try:
        removed = store.replace_week(window.start, rows)
    except Exception as e:
        raise ExternalFetchFailure(f"Error writing report rows: {e}") from e

    if removed:
        print(f"Replaced {removed} existing row(s) for week starting {window.start}")
    print(f"Wrote {len(rows)} row(s) for {window.start} to {window.end}")
    return removed


def format_report_summary(window: WeekWindow, rows: list[ReportRow]) -> str:
    """Plain-text summary of one week's rows."""
    lines = [
        f"Time report for {format_date_display(window.start)} - {format_date_display(window.end)}",
        "",
    ]

    if not rows:
        lines.append("No time recorded for this period.")
        return "\n".join(lines)

    width = max(len(row.category) for row in rows)
    for row in rows:
        lines.append(f"{row.category.ljust(width)}  {format_hours(row.hours):>7} h")
        for task in row.tasks.split(TASK_SEPARATOR):
            if task:
                lines.append(f"    - {task}")

    total = sum(row.hours for row in rows)
    lines.append("")
    lines.append(f"{'Total'.ljust(width)}  {format_hours(total):>7} h")
    return "\n".join(lines)
