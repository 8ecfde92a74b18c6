from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

T = TypeVar("T")

NO_SESSIONS = "No sessions"


@dataclass(frozen=True)
class DateWindow:
    name: str
    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    @property
    def start_iso(self) -> str:
        return self.start.isoformat()

    @property
    def end_iso(self) -> str:
        return self.end.isoformat()


@dataclass(frozen=True)
class ReportWindows:
    previous_week: DateWindow
    previous_month: DateWindow


@dataclass(frozen=True)
class SiteConfig:
    display_name: str
    credentials_path: str
    property_id: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "property_id", str(self.property_id).strip())
        object.__setattr__(self, "display_name", self.display_name.strip())
        object.__setattr__(self, "credentials_path", self.credentials_path.strip())


@dataclass(frozen=True)
class MetricSnapshot:
    total_users: float
    new_users: float
    sessions: float
    page_views: float
    event_count: float
    average_engagement_time: str


@dataclass(frozen=True)
class SiteReportRecord:
    """Week and month snapshots for one site, merged under the site name."""

    site_name: str
    week: MetricSnapshot
    month: MetricSnapshot

    def as_dict(self) -> dict[str, float | str]:
        out: dict[str, float | str] = {"site_name": self.site_name}
        for name in (
            "total_users",
            "new_users",
            "sessions",
            "page_views",
            "event_count",
            "average_engagement_time",
        ):
            out[name] = getattr(self.week, name)
            out[f"{name}_month"] = getattr(self.month, name)
        return out

    def as_row(self) -> list[float | str]:
        return [
            self.site_name,
            self.month.total_users,
            self.week.total_users,
            self.month.new_users,
            self.week.new_users,
            self.month.sessions,
            self.week.sessions,
            self.month.page_views,
            self.week.page_views,
            self.month.event_count,
            self.week.event_count,
            self.month.average_engagement_time,
            self.week.average_engagement_time,
        ]


class FailureKind(str, Enum):
    CREDENTIAL_ERROR = "credential_error"
    DATA_ABSENT = "data_absent"
    TRANSPORT_ERROR = "transport_error"
    NO_VALID_RESULTS = "no_valid_results"


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    site_name: str | None = None
    window_name: str | None = None

    def describe(self) -> str:
        scope = " / ".join(part for part in (self.site_name, self.window_name) if part)
        prefix = f"[{self.kind.value}]"
        return f"{prefix} {scope}: {self.message}" if scope else f"{prefix} {self.message}"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)


@dataclass
class RunOutcome:
    records: list[SiteReportRecord] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)
    report_path: Path | None = None

    @property
    def ok(self) -> bool:
        return self.report_path is not None
