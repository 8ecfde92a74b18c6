from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Protocol

from ga4_site_report.errors import ReportError
from ga4_site_report.extraction import extract_snapshot
from ga4_site_report.models import (
    DateWindow,
    MetricSnapshot,
    Outcome,
    ReportWindows,
    SiteConfig,
    SiteReportRecord,
)


class ReportClient(Protocol):
    def fetch_access_token(self) -> str: ...

    def run_report(self, window: DateWindow) -> dict[str, Any]: ...


ClientFactory = Callable[[SiteConfig], ReportClient]


def _fetch_window_snapshot(
    client: ReportClient,
    site: SiteConfig,
    window: DateWindow,
    logger: logging.Logger,
) -> Outcome[MetricSnapshot]:
    try:
        payload = client.run_report(window)
    except ReportError as exc:
        logger.error(
            "Failed to fetch data for %s (property %s, %s %s..%s): %s",
            site.display_name,
            site.property_id,
            window.name,
            window.start_iso,
            window.end_iso,
            exc,
        )
        return Outcome.failed(exc.to_failure(site.display_name, window.name))

    outcome = extract_snapshot(payload)
    if outcome.failure is not None:
        logger.warning(
            "No data found for %s (property %s, %s %s..%s)",
            site.display_name,
            site.property_id,
            window.name,
            window.start_iso,
            window.end_iso,
        )
        return Outcome.failed(
            replace(outcome.failure, site_name=site.display_name, window_name=window.name)
        )

    logger.info(
        "Data fetched successfully for %s (property %s, %s)",
        site.display_name,
        site.property_id,
        window.name,
    )
    return outcome


def collect_site_record(
    site: SiteConfig,
    windows: ReportWindows,
    client_factory: ClientFactory,
    logger: logging.Logger,
) -> Outcome[SiteReportRecord]:
    """Fetch both windows for one site and merge them into a report record.

    Any failure (credentials, transport, empty report) yields a failed outcome
    for this site only; no partial record is produced.
    """
    client = client_factory(site)
    try:
        client.fetch_access_token()
    except ReportError as exc:
        logger.error("Error fetching access token for %s: %s", site.display_name, exc)
        logger.error("Could not obtain access token for %s. Skipping...", site.display_name)
        return Outcome.failed(exc.to_failure(site.display_name))
    logger.info(
        "Access token fetched successfully for %s (key: %s)",
        site.display_name,
        site.credentials_path,
    )

    snapshots: list[MetricSnapshot] = []
    for window in (windows.previous_week, windows.previous_month):
        outcome = _fetch_window_snapshot(client, site, window, logger)
        if outcome.value is None:
            logger.error("Metrics could not be processed for %s.", site.display_name)
            return Outcome(failure=outcome.failure)
        snapshots.append(outcome.value)

    week, month = snapshots
    logger.info("Metrics processed successfully for %s", site.display_name)
    return Outcome.success(
        SiteReportRecord(site_name=site.display_name, week=week, month=month)
    )
