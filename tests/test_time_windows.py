from datetime import date, timedelta

from ga4_site_report.time_windows import compute_report_windows


def test_week_window_is_sunday_to_saturday_for_every_weekday() -> None:
    start = date(2024, 2, 25)
    for offset in range(21):
        run_date = start + timedelta(days=offset)
        week = compute_report_windows(run_date).previous_week

        assert week.days == 7
        assert week.end.weekday() == 5  # Saturday
        assert week.start.weekday() == 6  # Sunday
        assert week.start == week.end - timedelta(days=6)
        assert week.end < run_date
        # Closes before the Sunday that opens run_date's week.
        current_week_sunday = run_date - timedelta(days=(run_date.weekday() + 1) % 7)
        assert week.end == current_week_sunday - timedelta(days=1)


def test_week_window_on_sunday_and_saturday_runs() -> None:
    sunday = compute_report_windows(date(2024, 3, 10)).previous_week
    assert (sunday.start, sunday.end) == (date(2024, 3, 3), date(2024, 3, 9))

    saturday = compute_report_windows(date(2024, 1, 20)).previous_week
    assert (saturday.start, saturday.end) == (date(2024, 1, 7), date(2024, 1, 13))


def test_month_window_crosses_year_boundary() -> None:
    windows = compute_report_windows(date(2024, 1, 15))

    assert windows.previous_month.start == date(2023, 12, 1)
    assert windows.previous_month.end == date(2023, 12, 31)
    assert windows.previous_week.start_iso == "2024-01-07"
    assert windows.previous_week.end_iso == "2024-01-13"


def test_month_window_handles_leap_february() -> None:
    month = compute_report_windows(date(2024, 3, 1)).previous_month
    assert month.start == date(2024, 2, 1)
    assert month.end == date(2024, 2, 29)
    assert month.days == 29
    assert "2024-02" in month.name


def test_month_window_covers_full_previous_month_all_year() -> None:
    for month_number in range(1, 13):
        run_date = date(2025, month_number, 28)
        month = compute_report_windows(run_date).previous_month
        assert month.start.day == 1
        assert (month.end + timedelta(days=1)) == date(2025, month_number, 1)
