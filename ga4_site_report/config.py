from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from ga4_site_report.errors import ConfigError
from ga4_site_report.models import SiteConfig


def _env(name: str, default: str = "") -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default.strip()
    value = raw.strip()
    placeholder = f"{name}="
    unquoted = value.strip("'\"").strip()
    if unquoted.lower() == placeholder.lower():
        return default.strip()
    return value if value else default.strip()


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}.") from exc


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from exc


def _env_csv(name: str, default: str = "") -> tuple[str, ...]:
    raw = _env(name, default)
    values = [part.strip() for part in raw.split(",") if part.strip()]
    return tuple(values)


def parse_sites_inline(raw: str) -> tuple[SiteConfig, ...]:
    """Parse ``name|key_path|property_id`` entries separated by ``;``."""
    sites: list[SiteConfig] = []
    for chunk in raw.split(";"):
        entry = chunk.strip()
        if not entry:
            continue
        parts = [part.strip() for part in entry.split("|")]
        if len(parts) != 3 or not all(parts):
            raise ConfigError(
                f"Invalid GA4_SITES entry {entry!r}; expected name|key_path|property_id."
            )
        name, key_path, property_id = parts
        sites.append(SiteConfig(name, key_path, property_id))
    return tuple(sites)


def load_sites_file(path: str | Path) -> tuple[SiteConfig, ...]:
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigError(f"Sites file not found: {file_path}")
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in sites file: {file_path}") from exc
    if isinstance(payload, dict):
        payload = payload.get("sites", [])
    if not isinstance(payload, list):
        raise ConfigError(f"Sites file must hold a list of sites: {file_path}")

    sites: list[SiteConfig] = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ConfigError(f"Site #{index} in {file_path} is not an object.")
        name = str(item.get("name", "")).strip()
        key_path = str(item.get("credentials_path", "")).strip()
        property_id = str(item.get("property_id", "")).strip()
        if not (name and key_path and property_id):
            raise ConfigError(
                f"Site #{index} in {file_path} needs name, credentials_path and property_id."
            )
        sites.append(SiteConfig(name, key_path, property_id))
    return tuple(sites)


@dataclass(frozen=True)
class ReportConfig:
    sites: tuple[SiteConfig, ...]
    output_path: str
    log_path: str
    log_level: str
    ga4_scopes: tuple[str, ...]
    ga4_api_base: str
    http_timeout_sec: float
    max_workers: int

    @classmethod
    def from_env(cls) -> "ReportConfig":
        sites: list[SiteConfig] = []
        sites_file = _env("GA4_SITES_FILE")
        if sites_file:
            sites.extend(load_sites_file(sites_file))
        sites.extend(parse_sites_inline(_env("GA4_SITES")))

        return cls(
            sites=tuple(sites),
            output_path=_env("REPORT_OUTPUT_PATH", "website_performance_report.xlsx"),
            log_path=_env("REPORT_LOG_PATH", "script_log.log"),
            log_level=_env("REPORT_LOG_LEVEL", "DEBUG").upper(),
            ga4_scopes=_env_csv(
                "GA4_SCOPE", "https://www.googleapis.com/auth/analytics.readonly"
            ),
            ga4_api_base=_env("GA4_API_BASE", "https://analyticsdata.googleapis.com/v1beta"),
            http_timeout_sec=_env_float("GA4_HTTP_TIMEOUT_SEC", 40.0),
            max_workers=max(1, _env_int("REPORT_MAX_WORKERS", 1)),
        )
