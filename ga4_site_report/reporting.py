from __future__ import annotations

from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ga4_site_report.models import SiteReportRecord

SHEET_TITLE = "Website Performance"

REPORT_HEADERS: tuple[str, ...] = (
    "Website",
    "Users (Last Month)",
    "Users (Previous Week)",
    "New Users (Last Month)",
    "New Users (Previous Week)",
    "Sessions (Last Month)",
    "Sessions (Previous Week)",
    "Page Views (Last Month)",
    "Page Views (Previous Week)",
    "Event Count (Last Month)",
    "Event Count (Previous Week)",
    "Average Engagement Time (Last Month)",
    "Average Engagement Time (Previous Week)",
)


def _cell_value(value: float | str) -> float | int | str:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def build_report_rows(records: Sequence[SiteReportRecord]) -> list[list[float | int | str]]:
    rows: list[list[float | int | str]] = [list(REPORT_HEADERS)]
    for record in records:
        rows.append([_cell_value(value) for value in record.as_row()])
    return rows


def write_report(records: Sequence[SiteReportRecord], output_path: str | Path) -> Path:
    """Write the header row plus one row per record, in input order, to an xlsx file."""
    if not records:
        raise ValueError("write_report requires at least one site record.")

    path = Path(output_path).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = SHEET_TITLE
    for row in build_report_rows(records):
        worksheet.append(row)

    bold = Font(bold=True)
    for cell in worksheet[1]:
        cell.font = bold
    for index, header in enumerate(REPORT_HEADERS, start=1):
        worksheet.column_dimensions[get_column_letter(index)].width = max(12, len(header) + 2)
    worksheet.freeze_panes = "B2"

    workbook.save(path)
    return path
