from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import date

from dotenv import find_dotenv, load_dotenv

from ga4_site_report.config import ReportConfig, load_sites_file
from ga4_site_report.errors import ConfigError
from ga4_site_report.logging_setup import setup_logger
from ga4_site_report.pipeline import run_report


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="GA4 website performance report (week + month)")
    parser.add_argument(
        "--run-date",
        dest="run_date",
        help="Execution date in YYYY-MM-DD format (default: today)",
    )
    parser.add_argument(
        "--output",
        dest="output_path",
        help="Path of the xlsx report (default: REPORT_OUTPUT_PATH or website_performance_report.xlsx).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_path",
        help="Append-mode log file (default: REPORT_LOG_PATH or script_log.log).",
    )
    parser.add_argument(
        "--sites-file",
        dest="sites_file",
        help="JSON file with site entries; replaces sites from the environment.",
    )
    parser.add_argument(
        "--max-workers",
        dest="max_workers",
        type=int,
        help="Fetch sites in parallel on this many threads (default: 1, sequential).",
    )
    return parser.parse_args(argv)


def _parse_run_date(raw: str | None) -> date:
    if not raw:
        return date.today()
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise SystemExit(f"Invalid --run-date {raw!r}; expected YYYY-MM-DD.") from exc


def _apply_cli_overrides(config: ReportConfig, args: argparse.Namespace) -> ReportConfig:
    updated = config
    if args.output_path:
        updated = replace(updated, output_path=args.output_path)
    if args.log_path:
        updated = replace(updated, log_path=args.log_path)
    if args.sites_file:
        updated = replace(updated, sites=load_sites_file(args.sites_file))
    if args.max_workers is not None:
        updated = replace(updated, max_workers=max(1, int(args.max_workers)))
    return updated


def main(argv: list[str] | None = None) -> None:
    load_dotenv(find_dotenv(usecwd=True), override=False)

    args = _parse_args(argv)
    run_date = _parse_run_date(args.run_date)
    try:
        config = _apply_cli_overrides(ReportConfig.from_env(), args)
    except ConfigError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc

    logger = setup_logger(config.log_path, config.log_level)
    if not config.sites:
        logger.error("No sites configured. Set GA4_SITES, GA4_SITES_FILE or pass --sites-file.")

    run_report(config, logger, run_date=run_date)


if __name__ == "__main__":
    main()
