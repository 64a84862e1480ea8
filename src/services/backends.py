"""
Collaborator lookup from configuration.
"""

from core.config import DB_PATH, REPORT_BACKEND, WORKBOOK_PATH
from core.database import SqliteCategorySource, SqliteReportStore
from services.calendar import GraphEventSource
from services.workbook import WorkbookCategorySource, WorkbookReportStore

BACKENDS = {"sqlite", "excel"}


def _check_backend(backend: str) -> str:
    if backend not in BACKENDS:
        raise ValueError(f"Unknown REPORT_BACKEND '{backend}', expected one of: {', '.join(sorted(BACKENDS))}")
    return backend


def get_category_source(backend: str = REPORT_BACKEND):
    if _check_backend(backend) == "excel":
        return WorkbookCategorySource(WORKBOOK_PATH)
    return SqliteCategorySource(DB_PATH)


def get_report_store(backend: str = REPORT_BACKEND):
    if _check_backend(backend) == "excel":
        return WorkbookReportStore(WORKBOOK_PATH)
    return SqliteReportStore(DB_PATH)


def get_event_source():
    return GraphEventSource()


def store_available(backend: str = REPORT_BACKEND) -> bool:
    """Whether the configured backend's file exists."""
    path = WORKBOOK_PATH if _check_backend(backend) == "excel" else DB_PATH
    return path.exists()


def get_collaborators(backend: str = REPORT_BACKEND) -> dict:
    """Keyword arguments for generate_weekly_report / run_weekly_report."""
    return {
        "category_source": get_category_source(backend),
        "event_source": get_event_source(),
        "report_store": get_report_store(backend),
    }
