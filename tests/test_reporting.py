from __future__ import annotations

import pytest
from openpyxl import load_workbook

from ga4_site_report.models import MetricSnapshot, SiteReportRecord
from ga4_site_report.reporting import REPORT_HEADERS, SHEET_TITLE, build_report_rows, write_report


def _record(name: str, week_users: float, month_users: float) -> SiteReportRecord:
    week = MetricSnapshot(week_users, 10.0, 100.0, 450.0, 1300.0, "50s")
    month = MetricSnapshot(month_users, 40.0, 400.0, 1800.0, 5200.0, "1m 0s")
    return SiteReportRecord(site_name=name, week=week, month=month)


def test_header_text_and_order() -> None:
    assert list(REPORT_HEADERS) == [
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
    ]


def test_build_report_rows_puts_month_before_week() -> None:
    rows = build_report_rows([_record("a.com", 120.0, 500.0)])
    assert rows[1] == ["a.com", 500, 120, 40, 10, 400, 100, 1800, 450, 5200, 1300, "1m 0s", "50s"]


def test_write_report_keeps_input_order(tmp_path) -> None:
    path = write_report(
        [_record("b.example", 1.0, 2.0), _record("a.example", 3.5, 4.0)],
        tmp_path / "out" / "website_performance_report.xlsx",
    )

    assert path.exists()
    sheet = load_workbook(path).active
    rows = list(sheet.iter_rows(values_only=True))
    assert sheet.title == SHEET_TITLE
    assert len(rows) == 3
    assert rows[0] == REPORT_HEADERS
    assert rows[1][0] == "b.example"
    assert rows[2][0] == "a.example"
    assert rows[2][2] == 3.5


def test_write_report_refuses_empty_records(tmp_path) -> None:
    with pytest.raises(ValueError):
        write_report([], tmp_path / "report.xlsx")
    assert not (tmp_path / "report.xlsx").exists()
