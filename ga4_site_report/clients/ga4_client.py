from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession, Request
from google.oauth2 import service_account

from ga4_site_report.errors import CredentialError, TransportError
from ga4_site_report.extraction import REPORT_METRICS
from ga4_site_report.models import DateWindow


class GA4Client:
    """Small GA4 Data API client (REST) for the website performance report."""

    SCOPES = ["https://www.googleapis.com/auth/analytics.readonly"]
    API_BASE = "https://analyticsdata.googleapis.com/v1beta"
    HTTP_TIMEOUT_SEC = 40

    def __init__(
        self,
        property_id: str,
        credentials_path: str,
        scopes: list[str] | None = None,
        api_base: str = "",
        timeout_sec: float | None = None,
    ) -> None:
        self.property_id = self._normalize_property_id(property_id)
        self.credentials_path = credentials_path.strip()
        self.scopes = list(scopes or self.SCOPES)
        self.api_base = (api_base or self.API_BASE).rstrip("/")
        self.timeout_sec = timeout_sec if timeout_sec else self.HTTP_TIMEOUT_SEC
        self._session: AuthorizedSession | None = None

    @staticmethod
    def _normalize_property_id(raw: str) -> str:
        value = str(raw).strip()
        if value.startswith("properties/"):
            value = value.split("/", 1)[1]
        return value

    def _load_credentials(self) -> service_account.Credentials:
        if not self.credentials_path:
            raise CredentialError("GA4 credentials path is missing.")
        path = Path(self.credentials_path)
        if not path.exists():
            raise CredentialError(f"GA4 credentials file not found: {self.credentials_path}")

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CredentialError(
                f"Invalid JSON in GA4 credentials file: {self.credentials_path}"
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise CredentialError(
                f"Cannot read GA4 credentials file {self.credentials_path}: {exc}"
            ) from exc

        if not isinstance(payload, dict) or payload.get("type") != "service_account":
            raise CredentialError(
                "GA4 client expects service-account credentials "
                "(JSON with type=service_account)."
            )

        try:
            return service_account.Credentials.from_service_account_info(
                payload,
                scopes=self.scopes,
            )
        except (ValueError, KeyError) as exc:
            raise CredentialError(
                f"Malformed service-account key in {self.credentials_path}: {exc}"
            ) from exc

    def fetch_access_token(self) -> str:
        """Exchange the service-account key for a bearer token (one fetch per client)."""
        creds = self._load_credentials()
        try:
            creds.refresh(Request())
        except GoogleAuthError as exc:
            raise CredentialError(
                f"Error fetching access token for key {self.credentials_path}: {exc}"
            ) from exc
        except requests.RequestException as exc:
            raise CredentialError(
                f"Network failure fetching access token for key {self.credentials_path}: {exc}"
            ) from exc
        if not creds.token:
            raise CredentialError(
                f"Token endpoint returned no access token for key {self.credentials_path}."
            )
        self._session = AuthorizedSession(creds)
        return str(creds.token)

    def _build_session(self) -> AuthorizedSession:
        if self._session is not None:
            return self._session
        self.fetch_access_token()
        if self._session is None:
            raise CredentialError("GA4 session was not initialised.")
        return self._session

    def build_report_body(self, window: DateWindow) -> dict[str, Any]:
        return {
            "property": f"properties/{self.property_id}",
            "metrics": [{"name": name} for name in REPORT_METRICS],
            "dateRanges": [
                {
                    "startDate": window.start_iso,
                    "endDate": window.end_iso,
                }
            ],
        }

    def run_report(self, window: DateWindow) -> dict[str, Any]:
        if not self.property_id:
            raise TransportError("GA4 property ID is missing.")
        session = self._build_session()
        url = f"{self.api_base}/properties/{self.property_id}:runReport"
        try:
            response = session.post(
                url,
                json=self.build_report_body(window),
                timeout=self.timeout_sec,
            )
        except requests.RequestException as exc:
            raise TransportError(f"GA4 Data API request failed: {exc}") from exc
        except GoogleAuthError as exc:
            # AuthorizedSession re-refreshes the token on 401.
            raise CredentialError(f"GA4 token refresh failed during report request: {exc}") from exc
        if not response.ok:
            detail = response.text.strip()
            if len(detail) > 400:
                detail = detail[:397] + "..."
            raise TransportError(
                f"GA4 Data API request failed ({response.status_code}): {detail or 'No response body.'}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError("GA4 Data API returned invalid JSON.") from exc
        if isinstance(payload, dict):
            return payload
        raise TransportError("GA4 Data API returned non-object payload.")
