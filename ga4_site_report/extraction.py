from __future__ import annotations

from typing import Any

from ga4_site_report.formatting import format_duration
from ga4_site_report.models import (
    NO_SESSIONS,
    Failure,
    FailureKind,
    MetricSnapshot,
    Outcome,
)

# Request order; row metricValues come back in the same order.
REPORT_METRICS: tuple[str, ...] = (
    "userEngagementDuration",
    "totalUsers",
    "newUsers",
    "sessions",
    "screenPageViews",
    "eventCount",
)


def metric_value(row: dict[str, Any], index: int) -> float:
    values = row.get("metricValues", [])
    if not isinstance(values, list) or index >= len(values):
        return 0.0
    raw = values[index]
    if isinstance(raw, dict):
        raw = raw.get("value")
    if raw in (None, ""):
        return 0.0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


def average_engagement_time(engagement_seconds: float, sessions: float) -> str:
    if sessions > 0:
        return format_duration(engagement_seconds / sessions)
    return NO_SESSIONS


def extract_snapshot(payload: dict[str, Any]) -> Outcome[MetricSnapshot]:
    """Decode the first row of a GA4 ``runReport`` payload.

    A payload without rows is reported as a ``DATA_ABSENT`` failure rather
    than raised.
    """
    rows = payload.get("rows") if isinstance(payload, dict) else None
    if not isinstance(rows, list) or not rows:
        return Outcome.failed(
            Failure(kind=FailureKind.DATA_ABSENT, message="Report returned no rows.")
        )
    row = rows[0] if isinstance(rows[0], dict) else {}

    engagement = metric_value(row, 0)
    sessions = metric_value(row, 3)
    return Outcome.success(
        MetricSnapshot(
            total_users=metric_value(row, 1),
            new_users=metric_value(row, 2),
            sessions=sessions,
            page_views=metric_value(row, 4),
            event_count=metric_value(row, 5),
            average_engagement_time=average_engagement_time(engagement, sessions),
        )
    )
