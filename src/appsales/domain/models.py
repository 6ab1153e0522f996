# src/appsales/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Per-app sales figures and the three-way comparison snapshot
- Report availability returned by the report service
- App metadata used to decorate the summary
- The display message handed to a delivery channel

Files that USE this module:
- appsales.application.* (parser, aggregator and coordinator build these objects)
- appsales.adapters.* (adapters create and consume domain models)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from dataclasses import dataclass, field  # Decorators for creating data classes
from datetime import date  # Calendar dates for run results
from enum import Enum  # Enumerations for classification and outcomes
from typing import Any, Optional  # Type hints for optional values


class ProductTypeClass(Enum):
    """How a report row's product type contributes to the totals."""
    INSTALL = "install"
    IN_APP_PURCHASE = "in_app_purchase"
    OTHER = "other"


@dataclass(frozen=True)
class AppSalesRecord:
    """
    Sales figures for one app on one day.

    Attributes:
        title: App title as reported by Apple
        country: Country code of the first row seen for this app
        installs: Number of Install-class units
        revenue: Developer proceeds converted to USD
        icon: Artwork URL, filled in after the metadata lookup
    """
    title: str
    country: str
    installs: int = 0
    revenue: float = 0.0
    icon: Optional[str] = None


# Baseline used when an app has no figures for a comparison date
ZERO_SALES = AppSalesRecord(title="", country="")


@dataclass(frozen=True)
class SalesSnapshot:
    """
    Parsed sales for a target date and its two comparison dates.

    Attributes:
        day: Sales on the target date, keyed by app identifier
        prev_day: Sales one day earlier
        prev_week: Sales seven days earlier
    """
    day: dict[str, AppSalesRecord]
    prev_day: dict[str, AppSalesRecord] = field(default_factory=dict)
    prev_week: dict[str, AppSalesRecord] = field(default_factory=dict)

    @property
    def has_sales(self) -> bool:
        return bool(self.day)


class ReportStatus(Enum):
    AVAILABLE = "available"
    NOT_YET_PUBLISHED = "not_yet_published"
    NO_SALES = "no_sales"


@dataclass(frozen=True)
class ReportAvailability:
    """
    Outcome of a daily report fetch.

    NOT_YET_PUBLISHED means Apple has not generated the report yet and the
    run should be retried later. NO_SALES means the report exists but is empty.
    """
    status: ReportStatus
    rows: tuple[tuple[Optional[str], ...], ...] = ()

    @classmethod
    def available(cls, rows) -> "ReportAvailability":
        return cls(ReportStatus.AVAILABLE, tuple(tuple(row) for row in rows))

    @classmethod
    def not_yet_published(cls) -> "ReportAvailability":
        return cls(ReportStatus.NOT_YET_PUBLISHED)

    @classmethod
    def no_sales(cls) -> "ReportAvailability":
        return cls(ReportStatus.NO_SALES)

    @property
    def is_published(self) -> bool:
        return self.status is not ReportStatus.NOT_YET_PUBLISHED


@dataclass(frozen=True)
class AppMetadata:
    """Store listing details for an app in a given country."""
    title: str
    icon: str


@dataclass(frozen=True)
class MessageField:
    """One labeled value inside a message section."""
    value: str
    title: Optional[str] = None
    short: bool = True

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"value": self.value, "short": self.short}
        if self.title is not None:
            payload = {"title": self.title, **payload}
        return payload


@dataclass(frozen=True)
class MessageSection:
    """
    A colored block of fields, rendered as a Slack attachment.

    Attributes:
        color: "good" or "danger"
        fields: Ordered labeled values
        author_name: App title for per-app sections
        author_icon: App artwork URL
        title: Section heading (used by the totals section)
        pretext: Text shown above the section
        fallback: Plain-text summary for clients without attachment support
    """
    color: str
    fields: tuple[MessageField, ...]
    author_name: Optional[str] = None
    author_icon: Optional[str] = None
    title: Optional[str] = None
    pretext: Optional[str] = None
    fallback: str = ""

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"fallback": self.fallback, "color": self.color}
        if self.pretext is not None:
            payload["pretext"] = self.pretext
        if self.title is not None:
            payload["title"] = self.title
        if self.author_name is not None:
            payload["author_name"] = self.author_name
            payload["author_icon"] = self.author_icon
        payload["fields"] = [f.to_payload() for f in self.fields]
        return payload


@dataclass(frozen=True)
class DisplayMessage:
    """Summary message ready for delivery: either plain text or sections."""
    text: Optional[str] = None
    sections: tuple[MessageSection, ...] = ()

    def to_slack_payload(self) -> dict[str, Any]:
        """Build the JSON body accepted by a Slack incoming webhook."""
        if not self.sections:
            return {"text": self.text or ""}
        payload: dict[str, Any] = {"attachments": [s.to_payload() for s in self.sections]}
        if self.text:
            payload["text"] = self.text
        return payload


class RunOutcome(Enum):
    NO_NEW_REPORT = "No new sales report"
    NO_SALES = "No sales"
    SUCCESS = "Success"


@dataclass(frozen=True)
class RunResult:
    """Result of one reporting run, returned to the invoker."""
    outcome: RunOutcome
    report_date: Optional[date] = None

    @property
    def delivered(self) -> bool:
        return self.outcome is not RunOutcome.NO_NEW_REPORT

    def __str__(self) -> str:
        return self.outcome.value
