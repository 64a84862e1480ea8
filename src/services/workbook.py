"""
Excel workbook backend: keywords in the Projects sheet, report rows in the Time sheet.
"""

import os
import tempfile
from datetime import date, datetime
from pathlib import Path

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font

from core.config import PROJECTS_SHEET, REPORT_HEADERS, TIME_SHEET, WORKBOOK_PATH
from core.errors import ConfigurationMissing
from models.events import ReportRow

DATE_FORMAT = "yyyy-mm-dd"


def cell_date(value) -> date | None:
    """Interpret a Week Start / Week End cell as a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class WorkbookCategorySource:
    """Reads keywords from column A of the Projects sheet."""

    def __init__(self, path: Path = WORKBOOK_PATH, sheet_name: str = PROJECTS_SHEET):
        self.path = Path(path)
        self.sheet_name = sheet_name

    def get_keywords(self) -> list:
        if not self.path.exists():
            raise ConfigurationMissing(f"Workbook not found at {self.path}.")

        wb = load_workbook(self.path, read_only=True, data_only=True)
        try:
            if self.sheet_name not in wb.sheetnames:
                raise ConfigurationMissing(f'Sheet "{self.sheet_name}" not found.')
            ws = wb[self.sheet_name]
            return [row[0] for row in ws.iter_rows(min_col=1, max_col=1, values_only=True)]
        finally:
            wb.close()


class WorkbookReportStore:
    """
    Report rows in the Time sheet, one header row then data rows.

    Every write saves to a temporary file first and replaces the workbook in
    one step, so a failed write leaves the previous file untouched.
    """

    def __init__(self, path: Path = WORKBOOK_PATH, sheet_name: str = TIME_SHEET):
        self.path = Path(path)
        self.sheet_name = sheet_name

    def _load(self):
        if self.path.exists():
            wb = load_workbook(self.path)
        else:
            wb = Workbook()
            wb.active.title = self.sheet_name

        if self.sheet_name in wb.sheetnames:
            ws = wb[self.sheet_name]
        else:
            ws = wb.create_sheet(title=self.sheet_name)

        if ws.max_row == 1 and ws.cell(row=1, column=1).value is None:
            for col_idx, header in enumerate(REPORT_HEADERS, start=1):
                cell = ws.cell(row=1, column=col_idx, value=header)
                cell.font = Font(bold=True)
        return wb, ws

    def _save(self, wb):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            dir=self.path.parent, prefix=f".{self.path.stem}-", suffix=".xlsx", delete=False
        )
        tmp_path = Path(tmp.name)
        tmp.close()
        try:
            wb.save(str(tmp_path))
            os.replace(tmp_path, self.path)
        finally:
            tmp_path.unlink(missing_ok=True)

    def _delete_rows(self, ws, week_start: date) -> int:
        removed = 0
        # Walk backwards so deleting a row does not shift the ones still to check
        for row_idx in range(ws.max_row, 1, -1):
            if cell_date(ws.cell(row=row_idx, column=1).value) == week_start:
                ws.delete_rows(row_idx)
                removed += 1
        return removed

    def _append(self, ws, row: ReportRow):
        ws.append(row.as_values())
        row_idx = ws.max_row
        ws.cell(row=row_idx, column=1).number_format = DATE_FORMAT
        ws.cell(row=row_idx, column=2).number_format = DATE_FORMAT
        ws.cell(row=row_idx, column=5).alignment = Alignment(wrap_text=True, vertical="top")

    def delete_week(self, week_start: date) -> int:
        wb, ws = self._load()
        removed = self._delete_rows(ws, week_start)
        self._save(wb)
        return removed

    def append_row(self, row: ReportRow):
        wb, ws = self._load()
        self._append(ws, row)
        self._save(wb)

    def replace_week(self, week_start: date, rows: list[ReportRow]) -> int:
        wb, ws = self._load()
        removed = self._delete_rows(ws, week_start)
        for row in rows:
            self._append(ws, row)
        self._save(wb)
        return removed

    def rows(self, week_start: date | None = None) -> list[ReportRow]:
        if not self.path.exists():
            return []

        wb = load_workbook(self.path, read_only=True, data_only=True)
        try:
            if self.sheet_name not in wb.sheetnames:
                return []
            result = []
            for values in wb[self.sheet_name].iter_rows(min_row=2, max_col=5, values_only=True):
                start = cell_date(values[0])
                if start is None:
                    continue
                if week_start is not None and start != week_start:
                    continue
                result.append(
                    ReportRow(
                        week_start=start,
                        week_end=cell_date(values[1]),
                        category=str(values[2]),
                        hours=float(values[3] or 0),
                        tasks=values[4] or "",
                    )
                )
            return result
        finally:
            wb.close()
