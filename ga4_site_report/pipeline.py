from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from functools import partial

from ga4_site_report.aggregator import ClientFactory, collect_site_record
from ga4_site_report.clients.ga4_client import GA4Client
from ga4_site_report.config import ReportConfig
from ga4_site_report.errors import NoValidResults
from ga4_site_report.models import (
    Outcome,
    ReportWindows,
    RunOutcome,
    SiteConfig,
    SiteReportRecord,
)
from ga4_site_report.reporting import write_report
from ga4_site_report.time_windows import compute_report_windows


def default_client_factory(config: ReportConfig) -> ClientFactory:
    def _factory(site: SiteConfig) -> GA4Client:
        return GA4Client(
            property_id=site.property_id,
            credentials_path=site.credentials_path,
            scopes=list(config.ga4_scopes),
            api_base=config.ga4_api_base,
            timeout_sec=config.http_timeout_sec,
        )

    return _factory


def _collect_all(
    config: ReportConfig,
    windows: ReportWindows,
    client_factory: ClientFactory,
    logger: logging.Logger,
) -> list[Outcome[SiteReportRecord]]:
    collect = partial(
        collect_site_record,
        windows=windows,
        client_factory=client_factory,
        logger=logger,
    )
    sites = list(config.sites)
    force_serial = config.max_workers <= 1 or len(sites) <= 1
    if force_serial:
        return [collect(site) for site in sites]

    workers = min(config.max_workers, len(sites))
    logger.debug("Fetching %d sites on %d worker threads", len(sites), workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() keeps configuration order.
        return list(executor.map(collect, sites))


def run_report(
    config: ReportConfig,
    logger: logging.Logger,
    client_factory: ClientFactory | None = None,
    run_date: date | None = None,
) -> RunOutcome:
    """Collect week/month metrics for every configured site and write the xlsx report.

    Sites that fail are dropped and their failures kept on the outcome. When no
    site succeeds nothing is written and a ``NO_VALID_RESULTS`` failure is added.
    """
    logger.info("Script started at %s", datetime.now().isoformat(timespec="seconds"))
    factory = client_factory or default_client_factory(config)

    windows = compute_report_windows(run_date)
    logger.info(
        "Date ranges calculated successfully: week %s..%s, month %s..%s",
        windows.previous_week.start_iso,
        windows.previous_week.end_iso,
        windows.previous_month.start_iso,
        windows.previous_month.end_iso,
    )

    outcome = RunOutcome()
    for site_outcome in _collect_all(config, windows, factory, logger):
        if site_outcome.value is not None:
            outcome.records.append(site_outcome.value)
        elif site_outcome.failure is not None:
            outcome.failures.append(site_outcome.failure)

    if not outcome.records:
        logger.error("No valid data found to generate report.")
        outcome.failures.append(
            NoValidResults(
                f"All {len(config.sites)} configured sites failed; report not written."
            ).to_failure()
        )
    else:
        try:
            outcome.report_path = write_report(outcome.records, config.output_path)
        except OSError:
            logger.exception("Excel report could not be written to %s", config.output_path)
            raise
        logger.info("Excel report generated successfully at: %s", outcome.report_path)

    for failure in outcome.failures:
        logger.debug("Run failure: %s", failure.describe())
    logger.info("Script finished at %s", datetime.now().isoformat(timespec="seconds"))
    return outcome
