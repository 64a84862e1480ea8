"""Tests for category loading, event classification and task labels."""

from datetime import timedelta

import pytest

from core.classification import (
    build_search_text,
    classify_event,
    extract_task_label,
    load_categories,
    match_category,
)
from core.errors import ConfigurationMissing
from models.events import ResponseStatus


# =============================================================================
# CATEGORY LOADING
# =============================================================================


def test_load_categories_trims_and_drops_blanks():
    assert load_categories(["  ProjectX ", "", None, "   ", "Hiring"]) == ["ProjectX", "Hiring"]


def test_load_categories_keeps_order_and_duplicates():
    assert load_categories(["b", "a", "b"]) == ["b", "a", "b"]


def test_load_categories_converts_numeric_cells():
    assert load_categories([2024, "Ops"]) == ["2024", "Ops"]


@pytest.mark.parametrize("values", [[], ["", "  ", None]])
def test_empty_configuration_is_an_error(values):
    with pytest.raises(ConfigurationMissing, match="No categories configured"):
        load_categories(values)


# =============================================================================
# CLASSIFICATION
# =============================================================================


def test_search_text_joins_all_fields(make_event):
    event = make_event(
        title="Sync",
        description="Agenda",
        creators=["Boss@Corp.com"],
        guests=["a@x.io", "B@Y.io"],
    )
    assert build_search_text(event) == "sync agenda boss@corp.com a@x.io b@y.io"


def test_first_configured_keyword_wins():
    assert match_category("kickoff for alphabeta", ["Alpha", "AlphaBeta"]) == "Alpha"
    assert match_category("kickoff for alphabeta", ["AlphaBeta", "Alpha"]) == "AlphaBeta"


def test_precedence_applies_to_events(make_event):
    event = make_event(title="AlphaBeta kickoff", creators=[], guests=[])
    result = classify_event(event, ["Alpha", "AlphaBeta"])
    assert result.category == "Alpha"


def test_match_is_case_insensitive_substring(make_event):
    event = make_event(title="Weekly PROJECTXYZ sync", creators=[], guests=[])
    result = classify_event(event, ["projectx"])
    assert result.category == "projectx"
    assert result.duration == timedelta(hours=1)
    assert not result.fallback


def test_keyword_in_guest_address_matches(make_event):
    event = make_event(title="Catch-up", creators=[], guests=["pm@acme-projectx.com"])
    assert classify_event(event, ["ProjectX"]).category == "ProjectX"


def test_keyword_in_description_keeps_full_title(make_event):
    event = make_event(title="Unrelated meeting", description="re: ProjectX budget", creators=[], guests=[])
    result = classify_event(event, ["ProjectX"])
    assert result.category == "ProjectX"
    assert result.task_label == "Unrelated meeting"


@pytest.mark.parametrize(
    "status",
    [ResponseStatus.YES, ResponseStatus.NO, ResponseStatus.MAYBE, ResponseStatus.OWNER, ResponseStatus.UNKNOWN],
)
def test_cancelled_events_are_always_excluded(make_event, status):
    event = make_event(title="ProjectX kickoff", cancelled=True, my_status=status)
    assert classify_event(event, ["ProjectX"]) is None


def test_declined_events_are_excluded_even_when_matching(make_event):
    event = make_event(title="ProjectX kickoff", my_status=ResponseStatus.NO)
    assert classify_event(event, ["ProjectX"]) is None


@pytest.mark.parametrize("hours", [0, -1])
def test_zero_and_negative_duration_events_are_excluded(make_event, hours):
    event = make_event(title="ProjectX kickoff", hours=hours)
    assert classify_event(event, ["ProjectX"]) is None


@pytest.mark.parametrize(
    "status, included",
    [
        (ResponseStatus.YES, True),
        (ResponseStatus.MAYBE, True),
        (ResponseStatus.OWNER, True),
        (ResponseStatus.UNKNOWN, False),
    ],
)
def test_unmatched_events_count_as_other_only_when_attending(make_event, status, included):
    event = make_event(title="  Lunch with team ", hours=1.5, my_status=status, creators=[], guests=[])
    result = classify_event(event, ["ProjectX"])
    if not included:
        assert result is None
        return
    assert result.category == "Other"
    assert result.fallback
    assert result.duration == timedelta(hours=1.5)
    # Other keeps the title untouched
    assert result.task_label == "  Lunch with team "


def test_matched_events_count_regardless_of_attendance(make_event):
    event = make_event(title="ProjectX: triage", my_status=ResponseStatus.UNKNOWN)
    result = classify_event(event, ["ProjectX"])
    assert result.category == "ProjectX"
    assert result.task_label == "triage"


# =============================================================================
# TASK LABELS
# =============================================================================


@pytest.mark.parametrize(
    "title, keyword, expected",
    [
        ("Work: ProjectX - write spec", "ProjectX", "write spec"),
        ("ProjectX: write spec", "ProjectX", "write spec"),
        ("projectx - write spec", "ProjectX", "write spec"),
        ("Client | ProjectX | review PR", "ProjectX", "review PR"),
        ("ProjectX – design review", "ProjectX", "design review"),
        ("Unrelated meeting", "ProjectX", "Unrelated meeting"),
        ("  Weekly ProjectX sync  ", "ProjectX", "Weekly ProjectX sync"),
        ("ProjectX:", "ProjectX", "ProjectX:"),
        ("ProjectXY: call", "ProjectX", "ProjectXY: call"),
        ("ProjectX-2 planning", "ProjectX", "ProjectX-2 planning"),
        ("Work: ProjectX-2 - plan", "ProjectX", "Work: ProjectX-2 - plan"),
        ("ProjectX- notes", "ProjectX", "notes"),
    ],
)
def test_extract_task_label(title, keyword, expected):
    assert extract_task_label(title, keyword) == expected


def test_keyword_special_characters_are_literal():
    assert extract_task_label("C++ (core): fix build", "C++ (core)") == "fix build"
    assert extract_task_label("Cxx core: fix build", "C++ (core)") == "Cxx core: fix build"
    assert extract_task_label("Ops: a.b - deploy", "a.b") == "deploy"
    assert extract_task_label("Ops: axb - deploy", "a.b") == "Ops: axb - deploy"


def test_marker_pattern_is_tried_before_plain_prefix():
    # Plain prefix would yield "ProjectX - write"; the marker form wins
    assert extract_task_label("ProjectX: ProjectX - write", "ProjectX") == "write"
