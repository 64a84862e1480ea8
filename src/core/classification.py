"""
Event classification by category keyword.
"""

import re
from collections.abc import Iterable

from core.config import OTHER_CATEGORY
from core.errors import ConfigurationMissing
from models.events import ATTENDING_STATUSES, CalendarEvent, Classification, ResponseStatus

# Separators accepted between title parts: "Work: ProjectX - write spec".
# A plain hyphen needs whitespace on at least one side so "ProjectX-2" stays whole.
_SEP = r"(?:\s*[:–—|]\s*|\s+-\s*|-\s+)"


def load_categories(values: Iterable) -> list[str]:
    """
    Build the ordered category keyword list from raw configuration values.

    Values are trimmed and blanks dropped. Order is kept and duplicates are
    not removed; the first matching keyword always wins anyway.

    Raises:
        ConfigurationMissing: if nothing is left after trimming.
    """
    categories = []
    for value in values:
        if value is None:
            continue
        keyword = str(value).strip()
        if keyword:
            categories.append(keyword)

    if not categories:
        raise ConfigurationMissing(
            "No categories configured. Add project keywords to the configuration "
            "(one per row) and run the report again."
        )
    return categories


def build_search_text(event: CalendarEvent) -> str:
    """Casefolded title, description, creators and guests joined by spaces."""
    parts = [
        event.title or "",
        event.description or "",
        " ".join(event.creators or ()),
        " ".join(event.guests or ()),
    ]
    return " ".join(parts).casefold()


def match_category(search_text: str, categories: list[str]) -> str | None:
    """Return the first keyword contained in search_text, in configured order."""
    for keyword in categories:
        if keyword.casefold() in search_text:
            return keyword
    return None


def extract_task_label(title: str, keyword: str) -> str:
    """
    Shorten an event title to its task part.

    Tries, in order:
    1. "<marker><sep><keyword><sep><task>", e.g. "Work: ProjectX - write spec"
    2. "<keyword><sep><task>", e.g. "ProjectX: write spec"

    Falls back to the trimmed title.
    """
    title = title or ""
    kw = re.escape(keyword)
    patterns = (
        rf"^\s*\w+{_SEP}{kw}{_SEP}(?P<task>.*\S)",
        rf"^\s*{kw}{_SEP}(?P<task>.*\S)",
    )
    for pattern in patterns:
        match = re.match(pattern, title, flags=re.IGNORECASE | re.DOTALL)
        if match:
            return match.group("task").strip()
    return title.strip()


def classify_event(event: CalendarEvent, categories: list[str]) -> Classification | None:
    """
    Decide whether an event counts towards the report and under which category.

    Returns None when the event is excluded:
    - cancelled, or declined by the viewer
    - zero duration
    - no keyword matched and the viewer is not attending
    """
    if event.cancelled or event.my_status is ResponseStatus.NO:
        return None

    duration = event.duration
    if not duration:
        return None

    keyword = match_category(build_search_text(event), categories)
    if keyword is None:
        if event.my_status not in ATTENDING_STATUSES:
            return None
        return Classification(
            category=OTHER_CATEGORY,
            task_label=event.title or "",
            duration=duration,
            fallback=True,
        )

    return Classification(
        category=keyword,
        task_label=extract_task_label(event.title, keyword),
        duration=duration,
    )
