"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
from faker import Faker

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.events import CalendarEvent, ReportRow, ResponseStatus  # noqa: E402

TZ = ZoneInfo("America/New_York")

Faker.seed(1234)
fake = Faker()


class ListCategorySource:
    """Category source backed by a plain list."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def get_keywords(self):
        self.calls += 1
        return list(self.values)


class FakeEventSource:
    """Returns canned events and records the requested ranges."""

    def __init__(self, events=None, error: Exception | None = None):
        self.events = list(events or [])
        self.error = error
        self.requests = []

    def get_events(self, start, end):
        self.requests.append((start, end))
        if self.error is not None:
            raise self.error
        return [e for e in self.events if e.start < end and e.end > start]


class MemoryReportStore:
    """In-memory report store with the same operations as the real stores."""

    def __init__(self, rows=None, fail_on_replace: Exception | None = None):
        self._rows: list[ReportRow] = list(rows or [])
        self.fail_on_replace = fail_on_replace
        self.replace_calls = 0

    def delete_week(self, week_start):
        before = len(self._rows)
        self._rows = [r for r in self._rows if r.week_start != week_start]
        return before - len(self._rows)

    def append_row(self, row):
        self._rows.append(row)

    def replace_week(self, week_start, rows):
        self.replace_calls += 1
        if self.fail_on_replace is not None:
            raise self.fail_on_replace
        removed = self.delete_week(week_start)
        self._rows.extend(rows)
        return removed

    def rows(self, week_start=None):
        if week_start is None:
            return list(self._rows)
        return [r for r in self._rows if r.week_start == week_start]


def fixed_clock(value: datetime):
    return lambda: value


@pytest.fixture
def tz():
    return TZ


@pytest.fixture
def make_event():
    """Factory for CalendarEvent with sensible defaults (1 hour, accepted)."""

    def _make(
        title="Planning",
        start=datetime(2025, 11, 4, 9, 0, tzinfo=TZ),
        hours=1.0,
        description="",
        cancelled=False,
        my_status=ResponseStatus.YES,
        creators=None,
        guests=None,
    ):
        return CalendarEvent(
            title=title,
            description=description,
            start=start,
            end=start + timedelta(hours=hours),
            cancelled=cancelled,
            my_status=my_status,
            creators=tuple(creators) if creators is not None else (fake.email(),),
            guests=tuple(guests) if guests is not None else (fake.email(), fake.email()),
        )

    return _make


@pytest.fixture
def wednesday_clock():
    """Wednesday 2025-11-05, 10:00 local; current week is Nov 2 - Nov 8."""
    return fixed_clock(datetime(2025, 11, 5, 10, 0, tzinfo=TZ))


@pytest.fixture
def sample_row():
    return ReportRow(
        week_start=date(2025, 11, 2),
        week_end=date(2025, 11, 8),
        category="ProjectX",
        hours=2.5,
        tasks="write spec\nreview",
    )
