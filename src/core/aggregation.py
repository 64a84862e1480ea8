"""
Per-category totals for one report week.
"""

from collections.abc import Iterable

from core.config import OTHER_CATEGORY, TASK_SEPARATOR
from core.week import WeekWindow
from models.events import CategoryTotal, Classification, ReportRow


class WeeklyAggregate:
    """
    Ordered category totals: configured keywords first, then "Other".

    Keywords are identified case-insensitively; a keyword configured twice
    shares one total under the spelling of its first occurrence. A keyword
    spelled "Other" is the Other bucket itself, in its configured position.
    """

    def __init__(self, categories: list[str]):
        self._totals: dict[str, CategoryTotal] = {}
        for keyword in categories:
            self._totals.setdefault(keyword.casefold(), CategoryTotal(category=keyword))
        self._totals.setdefault(OTHER_CATEGORY.casefold(), CategoryTotal(category=OTHER_CATEGORY))

    def add(self, classification: Classification):
        key = OTHER_CATEGORY if classification.fallback else classification.category
        total = self._totals[key.casefold()]
        total.duration += classification.duration
        total.tasks.append(classification.task_label)

    def totals(self) -> list[CategoryTotal]:
        return list(self._totals.values())

    def __getitem__(self, category: str) -> CategoryTotal:
        return self._totals[category.casefold()]


def aggregate(classifications: Iterable[Classification | None], categories: list[str]) -> WeeklyAggregate:
    """Accumulate included classifications in event order; None entries are skipped."""
    result = WeeklyAggregate(categories)
    for classification in classifications:
        if classification is not None:
            result.add(classification)
    return result


def build_report_rows(weekly: WeeklyAggregate, window: WeekWindow) -> list[ReportRow]:
    """One row per category with a positive total, hours rounded to 2 places."""
    rows = []
    for total in weekly.totals():
        if total.duration.total_seconds() <= 0:
            continue
        rows.append(
            ReportRow(
                week_start=window.start,
                week_end=window.end,
                category=total.category,
                hours=round(total.duration.total_seconds() / 3600, 2),
                tasks=TASK_SEPARATOR.join(total.tasks),
            )
        )
    return rows
