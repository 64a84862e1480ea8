"""
Data models for calendar events, classifications and report rows.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum


class ResponseStatus(str, Enum):
    """The viewing user's response to an event, normalised across providers."""

    YES = "yes"
    NO = "no"
    MAYBE = "maybe"
    OWNER = "owner"
    UNKNOWN = "unknown"


ATTENDING_STATUSES = frozenset({ResponseStatus.YES, ResponseStatus.MAYBE, ResponseStatus.OWNER})


@dataclass(frozen=True)
class CalendarEvent:
    """Calendar event as seen by the report engine."""

    title: str
    start: datetime
    end: datetime
    description: str = ""
    cancelled: bool = False
    my_status: ResponseStatus = ResponseStatus.UNKNOWN
    creators: tuple[str, ...] = ()
    guests: tuple[str, ...] = ()

    @property
    def duration(self) -> timedelta:
        """Event length, never negative."""
        return max(self.end - self.start, timedelta(0))


@dataclass(frozen=True)
class Classification:
    """An event included in the report under exactly one category."""

    category: str
    task_label: str
    duration: timedelta
    fallback: bool = False  # True for the "Other" bucket


@dataclass
class CategoryTotal:
    """Running total for one category."""

    category: str
    duration: timedelta = timedelta(0)
    tasks: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReportRow:
    """One persisted (week, category, hours, tasks) record."""

    week_start: date
    week_end: date
    category: str
    hours: float
    tasks: str

    def as_values(self) -> list:
        """Values in report column order."""
        return [self.week_start, self.week_end, self.category, self.hours, self.tasks]
