"""Tests for the weekly report command line script."""

from datetime import datetime

from conftest import FakeEventSource, ListCategorySource, MemoryReportStore
from scripts import create_weekly_report as script


def patch_collaborators(monkeypatch, **collaborators):
    monkeypatch.setattr(script, "get_collaborators", lambda: collaborators)


def test_previous_week_from_fixed_date(monkeypatch, capsys, make_event, tz):
    store = MemoryReportStore()
    event = make_event(
        title="ProjectX - release", start=datetime(2025, 10, 28, 9, tzinfo=tz), hours=1.5,
        creators=[], guests=[],
    )
    patch_collaborators(
        monkeypatch,
        category_source=ListCategorySource(["ProjectX"]),
        event_source=FakeEventSource([event]),
        report_store=store,
    )

    assert script.main(["--week", "previous", "--date", "2025-11-05"]) == 0

    out = capsys.readouterr().out
    assert "Report complete for the previous week (2025-10-26 to 2025-11-01)" in out
    assert "    - release" in out
    assert [(r.category, r.hours) for r in store.rows()] == [("ProjectX", 1.5)]


def test_failure_exits_non_zero_and_emails(monkeypatch, capsys):
    sent = []

    async def fake_send_error_email(message):
        sent.append(message)

    monkeypatch.setattr(script, "send_error_email", fake_send_error_email)
    patch_collaborators(
        monkeypatch,
        category_source=ListCategorySource([]),
        event_source=FakeEventSource([]),
        report_store=MemoryReportStore(),
    )

    assert script.main(["--date", "2025-11-05", "--email"]) == 1
    assert "No categories configured" in capsys.readouterr().err
    assert len(sent) == 1 and sent[0].startswith("No categories configured")


def test_make_clock(tz):
    assert script.make_clock(None, tz) is None
    clock = script.make_clock("2025-11-05", tz)
    assert clock().date().isoformat() == "2025-11-05"


def test_malformed_date_exits_non_zero(monkeypatch, capsys):
    patch_collaborators(
        monkeypatch,
        category_source=ListCategorySource(["ProjectX"]),
        event_source=FakeEventSource([]),
        report_store=MemoryReportStore(),
    )

    assert script.main(["--date", "2025-13-40"]) == 1
    assert "An error occurred:" in capsys.readouterr().err


def test_unknown_backend_exits_non_zero(monkeypatch, capsys):
    def bad_backend():
        raise ValueError("Unknown REPORT_BACKEND 'csv', expected one of: excel, sqlite")

    monkeypatch.setattr(script, "get_collaborators", bad_backend)

    assert script.main(["--week", "previous"]) == 1
    assert "Unknown REPORT_BACKEND 'csv'" in capsys.readouterr().err
