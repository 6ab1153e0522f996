# src/appsales/application/sales_aggregator.py
"""
Sales Aggregator - Three-Way Sales Comparison

This module fetches the daily sales report for a target date together with
the reports for the previous day and the same weekday one week earlier, and
parses all three with a single exchange-rate table so the comparison is not
skewed by rate movements within a run.

Files that USE this module:
- appsales.application.run_coordinator (RunCoordinator aggregates the target date)
- tests.test_sales_aggregator (unit tests)

Files that this module USES:
- appsales.application.currency (normalize_rates for the run's rate table)
- appsales.application.report_parser (parse_sales_report)
- appsales.domain.models (ReportAvailability, SalesSnapshot)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from datetime import date, timedelta  # Date arithmetic for comparison dates
from typing import Mapping, Optional, Protocol  # Type hints for protocols

from appsales.application.currency import normalize_rates  # USD-anchored rate table
from appsales.application.report_parser import parse_sales_report  # Report rows -> per-app figures
from appsales.domain.models import AppSalesRecord, ReportAvailability, SalesSnapshot

log = logging.getLogger(__name__)


class ReportSource(Protocol):
    """Protocol for daily sales report sources."""
    def get_daily_report(self, vendor: str, report_date: date) -> ReportAvailability:
        ...


class RateSource(Protocol):
    """Protocol for exchange rate sources (units per 1 USD)."""
    def get_rates(self) -> Mapping[str, float]:
        ...


class SalesAggregator:
    """
    Builds the SalesSnapshot for one reporting date.

    Fetches are strictly sequential: the comparison reports are only
    requested once the target date is known to have sales.
    """

    def __init__(self, reports: ReportSource, rates: RateSource, vendor: str):
        """
        Args:
            reports: Source of daily sales summaries
            rates: Source of exchange rates
            vendor: App Store Connect vendor number
        """
        self.reports = reports
        self.rates = rates
        self.vendor = vendor

    def _parse(self, report: ReportAvailability, rates: Mapping[str, float]) -> dict[str, AppSalesRecord]:
        # NOT_YET_PUBLISHED and NO_SALES both carry no rows
        return parse_sales_report(report.rows, rates)

    def aggregate(self, target_date: date) -> Optional[SalesSnapshot]:
        """
        Fetch and parse the target date and its comparison dates.

        Args:
            target_date: Day to report on

        Returns:
            None if Apple has not published the target date's report yet.
            A snapshot with an empty `day` (and empty comparisons) if the
            report exists but has no sales. Otherwise the full snapshot.
        """
        report = self.reports.get_daily_report(self.vendor, target_date)
        if not report.is_published:
            log.info("Sales report for %s is not available yet", target_date.isoformat())
            return None

        rates = normalize_rates(self.rates.get_rates())
        day = self._parse(report, rates)

        if not day:
            log.info("No sales on %s", target_date.isoformat())
            return SalesSnapshot(day={})

        prev_day_date = target_date - timedelta(days=1)
        prev_week_date = target_date - timedelta(weeks=1)

        prev_day = self._parse(self.reports.get_daily_report(self.vendor, prev_day_date), rates)
        prev_week = self._parse(self.reports.get_daily_report(self.vendor, prev_week_date), rates)

        log.info(
            "Aggregated %d apps for %s (prev day: %d apps, prev week: %d apps)",
            len(day), target_date.isoformat(), len(prev_day), len(prev_week),
        )
        return SalesSnapshot(day=day, prev_day=prev_day, prev_week=prev_week)
