"""Spreadsheet export of report rows."""

from __future__ import annotations

from datetime import date
from io import BytesIO
from typing import Any, Iterable, Protocol

from openpyxl import Workbook
from openpyxl.styles import Font

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SHEET_NAMES = {
    "attendance": "Attendance Report",
    "leave": "Leave Report",
    "payroll": "Payroll Report",
}


class ExportableRow(Protocol):
    def export_dict(self) -> dict[str, Any]: ...


def rows_to_xlsx(rows: Iterable[ExportableRow], sheet_name: str) -> bytes:
    """One bold header row taken from the first row's keys, then one row each."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]  # Excel sheet-name limit

    header: list[str] = []
    for row in rows:
        data = row.export_dict()
        if not header:
            header = list(data)
            ws.append(header)
            for cell in ws[1]:
                cell.font = Font(bold=True)
        ws.append([data.get(col) for col in header])

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_filename(report_type: str, start: date | None = None, end: date | None = None) -> str:
    if start is None or end is None:
        return f"{report_type}_report.xlsx"
    return f"{report_type}_report_{start:%Y-%m-%d}_to_{end:%Y-%m-%d}.xlsx"
