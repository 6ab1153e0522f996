# src/appsales/application/run_coordinator.py
"""
Run Coordinator - One Reporting Run

This module sequences a single reporting run:
1. Check that the report service is up
2. Pick the date after the last reported one (or two days ago on first run)
3. Aggregate sales for that date and its comparison dates
4. Add app icons, build the summary and deliver it
5. Store the date as the new cursor

The cursor is only written after a successful delivery, so a failed date
is retried on the next run. If Apple has not published the report yet the
run ends without delivering anything and the cursor stays where it was.

Files that USE this module:
- appsales.app (main builds and runs a RunCoordinator)
- tests.test_run_coordinator (unit tests)

Files that this module USES:
- appsales.application.sales_aggregator (SalesAggregator)
- appsales.adapters.formatting.formatter (build_sales_message)
- appsales.domain.models (SalesSnapshot, RunResult)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from concurrent.futures import ThreadPoolExecutor  # Parallel icon lookups
from dataclasses import replace  # Copy frozen records with the icon filled in
from datetime import date, datetime, timedelta, timezone  # Date arithmetic for the cursor
from typing import Callable, Optional, Protocol  # Type hints for protocols

from appsales.adapters.formatting.formatter import build_sales_message  # Summary message builder
from appsales.application.sales_aggregator import RateSource, ReportSource, SalesAggregator
from appsales.domain.errors import MalformedResponseError
from appsales.domain.models import AppMetadata, DisplayMessage, RunOutcome, RunResult, SalesSnapshot

log = logging.getLogger(__name__)

# Apple publishes daily reports with a delay; start two days back on the first run
FIRST_RUN_LAG = timedelta(days=2)


class StatusSource(Protocol):
    def get_status(self) -> str:
        ...


class MetadataSource(Protocol):
    def lookup(self, app_id: str, country: str) -> AppMetadata:
        ...


class CursorStore(Protocol):
    def get(self) -> Optional[date]:
        ...

    def set(self, last_date: date) -> None:
        ...


class Notifier(Protocol):
    def send(self, message: DisplayMessage) -> None:
        ...


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class RunCoordinator:
    """Runs one report cycle against injected collaborators."""

    def __init__(
        self,
        reports: ReportSource,
        rates: RateSource,
        metadata: MetadataSource,
        cursor: CursorStore,
        notifier: Notifier,
        vendor: str,
        max_lookup_workers: int = 8,
        today: Callable[[], date] = _utc_today,
    ):
        """
        Args:
            reports: Report service, also answers the status check
            rates: Exchange rate source
            metadata: App metadata lookup for icons
            cursor: Last processed date store
            notifier: Delivery channel
            vendor: App Store Connect vendor number
            max_lookup_workers: Upper bound on concurrent icon lookups
            today: Returns the current UTC date
        """
        self.reports = reports
        self.rates = rates
        self.metadata = metadata
        self.cursor = cursor
        self.notifier = notifier
        self.vendor = vendor
        self.max_lookup_workers = max_lookup_workers
        self.today = today
        self.aggregator = SalesAggregator(reports, rates, vendor)

    def check_status(self) -> str:
        """
        Raises:
            MalformedResponseError: If the status message is missing or empty
        """
        status = self.reports.get_status()
        if not status or not isinstance(status, str):
            raise MalformedResponseError(f"Unrecognized Sales Report status: {status!r}")
        return status

    def next_report_date(self) -> date:
        """Day after the stored cursor, or FIRST_RUN_LAG before today on the first run."""
        last_date = self.cursor.get()
        if last_date is not None:
            return last_date + timedelta(days=1)
        return self.today() - FIRST_RUN_LAG

    def enrich_icons(self, sales: SalesSnapshot) -> SalesSnapshot:
        """
        Return a copy of `sales` whose day records carry app icons.

        Lookups run concurrently; any failed lookup is re-raised and aborts the run.
        """
        if not sales.day:
            return sales

        app_ids = list(sales.day)
        workers = min(self.max_lookup_workers, len(app_ids))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                app_id: pool.submit(self.metadata.lookup, app_id, sales.day[app_id].country)
                for app_id in app_ids
            }
            infos = {app_id: future.result() for app_id, future in futures.items()}

        day = {app_id: replace(record, icon=infos[app_id].icon) for app_id, record in sales.day.items()}
        return replace(sales, day=day)

    def run(self) -> RunResult:
        """
        Execute one reporting run.

        Returns:
            RunResult with NO_NEW_REPORT when the report is not published
            yet, NO_SALES when the "no sales" notice was delivered, or
            SUCCESS when the summary was delivered

        Raises:
            AppSalesError: Or any collaborator exception; the cursor is not advanced
        """
        self.check_status()

        report_date = self.next_report_date()
        log.info("Setting reporting date to %s", report_date.isoformat())

        sales = self.aggregator.aggregate(report_date)
        if sales is None:
            return RunResult(RunOutcome.NO_NEW_REPORT, report_date)

        sales = self.enrich_icons(sales)
        message = build_sales_message(sales, report_date)
        self.notifier.send(message)
        self.cursor.set(report_date)

        outcome = RunOutcome.SUCCESS if sales.has_sales else RunOutcome.NO_SALES
        return RunResult(outcome, report_date)
