from __future__ import annotations

from ga4_site_report.models import Failure, FailureKind


class ConfigError(RuntimeError):
    """Raised when the site list or report settings cannot be parsed."""


class ReportError(RuntimeError):
    kind: FailureKind = FailureKind.TRANSPORT_ERROR

    def to_failure(
        self,
        site_name: str | None = None,
        window_name: str | None = None,
    ) -> Failure:
        return Failure(
            kind=self.kind,
            message=str(self),
            site_name=site_name,
            window_name=window_name,
        )


class CredentialError(ReportError):
    kind = FailureKind.CREDENTIAL_ERROR


class TransportError(ReportError):
    kind = FailureKind.TRANSPORT_ERROR


class DataAbsent(ReportError):
    kind = FailureKind.DATA_ABSENT


class NoValidResults(ReportError):
    kind = FailureKind.NO_VALID_RESULTS
