"""
Report week selection.

A report week runs Sunday through Saturday. Events are fetched over the
half-open interval [Sunday 00:00, next Sunday 00:00) in the configured zone.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from zoneinfo import ZoneInfo


class WeekMode(str, Enum):
    CURRENT = "current"
    PREVIOUS = "previous"
    AUTO = "auto"


# Weekdays (Monday=0) on which AUTO reports the week that just ended
_AUTO_PREVIOUS_WEEKDAYS = {4, 5, 6, 0}


@dataclass(frozen=True)
class WeekWindow:
    """Sunday-to-Saturday report window."""

    start: date
    end: date
    mode: WeekMode

    @property
    def description(self) -> str:
        return "the previous week" if self.mode is WeekMode.PREVIOUS else "the current week"

    def fetch_range(self, tz: ZoneInfo) -> tuple[datetime, datetime]:
        """Half-open datetime range covering every day of the window."""
        start_dt = datetime.combine(self.start, time.min, tzinfo=tz)
        end_dt = datetime.combine(self.end + timedelta(days=1), time.min, tzinfo=tz)
        return start_dt, end_dt


def today_in_zone(clock: Callable[[], datetime], tz: ZoneInfo) -> date:
    """Current date in the configured zone."""
    now = clock()
    if now.tzinfo is None:
        now = now.replace(tzinfo=tz)
    return now.astimezone(tz).date()


def resolve_mode(today: date, mode: WeekMode) -> WeekMode:
    """Turn AUTO into CURRENT or PREVIOUS depending on the day of week."""
    if mode is not WeekMode.AUTO:
        return mode
    if today.weekday() in _AUTO_PREVIOUS_WEEKDAYS:
        return WeekMode.PREVIOUS
    return WeekMode.CURRENT


def get_week_window(today: date, mode: WeekMode = WeekMode.CURRENT) -> WeekWindow:
    """
    Calculate the report window for a given day.

    Args:
        today: Reference date (already truncated to the configured zone).
        mode: CURRENT, PREVIOUS or AUTO.

    Returns:
        WeekWindow with start on a Sunday and end six days later.
    """
    mode = resolve_mode(today, WeekMode(mode))

    # date.weekday(): Monday=0 ... Sunday=6
    days_since_sunday = (today.weekday() + 1) % 7
    start = today - timedelta(days=days_since_sunday)
    if mode is WeekMode.PREVIOUS:
        start -= timedelta(days=7)

    return WeekWindow(start=start, end=start + timedelta(days=6), mode=mode)
