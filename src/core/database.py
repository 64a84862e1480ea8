"""
SQLite storage for category keywords and weekly report rows.
"""

import sqlite3
from datetime import date
from pathlib import Path

from core.config import DB_PATH
from core.errors import ConfigurationMissing
from models.events import ReportRow


def get_connection(db_path: Path = DB_PATH) -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(db_path)


class SqliteCategorySource:
    """Reads the ordered keyword column from the categories table."""

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = Path(db_path)

    def get_keywords(self) -> list[str]:
        if not self.db_path.exists():
            raise ConfigurationMissing(f"Database not found at {self.db_path}. Run init_db.py first.")

        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT keyword FROM categories ORDER BY position, id")
            return [keyword for (keyword,) in cursor.fetchall()]
        except sqlite3.OperationalError as e:
            raise ConfigurationMissing(f"Categories table not available: {e}") from e
        finally:
            conn.close()


def set_categories(conn: sqlite3.Connection, keywords: list[str]):
    """Replace the configured keyword list, keeping the given order."""
    with conn:
        conn.execute("DELETE FROM categories")
        conn.executemany(
            "INSERT INTO categories (position, keyword) VALUES (?, ?)",
            list(enumerate(keywords)),
        )


def _row_values(row: ReportRow) -> tuple:
    return (
        row.week_start.isoformat(),
        row.week_end.isoformat(),
        row.category,
        row.hours,
        row.tasks,
    )


class SqliteReportStore:
    """
    Report rows in the report_rows table.

    Rows keep insertion order (id); a week is identified by its start date.
    """

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = Path(db_path)

    def delete_week(self, week_start: date) -> int:
        """Delete every row for the week; returns the number of rows removed."""
        conn = get_connection(self.db_path)
        try:
            with conn:
                cursor = conn.execute(
                    "DELETE FROM report_rows WHERE week_start = ?", (week_start.isoformat(),)
                )
            return cursor.rowcount
        finally:
            conn.close()

    def append_row(self, row: ReportRow):
        conn = get_connection(self.db_path)
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO report_rows (week_start, week_end, category, hours, tasks)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    _row_values(row),
                )
        finally:
            conn.close()

    def replace_week(self, week_start: date, rows: list[ReportRow]) -> int:
        """
        Swap the week's rows for the given ones in a single transaction.

        Returns the number of rows removed.
        """
        conn = get_connection(self.db_path)
        try:
            with conn:
                cursor = conn.execute(
                    "DELETE FROM report_rows WHERE week_start = ?", (week_start.isoformat(),)
                )
                removed = cursor.rowcount
                conn.executemany(
                    """
                    INSERT INTO report_rows (week_start, week_end, category, hours, tasks)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [_row_values(row) for row in rows],
                )
            return removed
        finally:
            conn.close()

    def rows(self, week_start: date | None = None) -> list[ReportRow]:
        conn = get_connection(self.db_path)
        try:
            query = "SELECT week_start, week_end, category, hours, tasks FROM report_rows"
            params: tuple = ()
            if week_start is not None:
                query += " WHERE week_start = ?"
                params = (week_start.isoformat(),)
            cursor = conn.execute(query + " ORDER BY id", params)
            return [
                ReportRow(
                    week_start=date.fromisoformat(start),
                    week_end=date.fromisoformat(end),
                    category=category,
                    hours=hours,
                    tasks=tasks or "",
                )
                for start, end, category, hours, tasks in cursor.fetchall()
            ]
        finally:
            conn.close()
