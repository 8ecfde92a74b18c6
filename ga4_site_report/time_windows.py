from __future__ import annotations

from datetime import date, timedelta

from ga4_site_report.models import DateWindow, ReportWindows


def compute_report_windows(run_date: date | None = None) -> ReportWindows:
    """Build the previous Sunday-Saturday week and the previous calendar month.

    The week window always closes on the Saturday before the week containing
    ``run_date`` (a Sunday run closes on yesterday). The month window is the
    full calendar month before ``run_date``'s month; January runs roll back to
    December of the previous year.
    """
    run_date = run_date or date.today()

    # Python counts Monday=0; shift so Sunday=0 ... Saturday=6.
    sunday_index = (run_date.weekday() + 1) % 7
    last_saturday = run_date - timedelta(days=sunday_index + 1)
    last_sunday = last_saturday - timedelta(days=6)

    first_of_current_month = date(run_date.year, run_date.month, 1)
    month_end = first_of_current_month - timedelta(days=1)
    month_start = date(month_end.year, month_end.month, 1)

    return ReportWindows(
        previous_week=DateWindow("Previous week (Sun-Sat)", last_sunday, last_saturday),
        previous_month=DateWindow(
            f"Previous month ({month_start.strftime('%Y-%m')})",
            month_start,
            month_end,
        ),
    )
