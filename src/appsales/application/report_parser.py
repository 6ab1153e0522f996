# src/appsales/application/report_parser.py
"""
Report Parser - Daily Sales Summary Parsing

This module turns Apple's tab-separated daily sales summary into per-app
install and revenue figures. Columns are located by header name on every
parse because Apple does not guarantee column order. Proceeds are converted
to USD row by row before they are added to an app's totals.

Files that USE this module:
- appsales.application.sales_aggregator (parses each fetched report)
- appsales.adapters.providers.apple_reporter (split_report_text for response bodies)
- tests.test_report_parser (unit tests)

Files that this module USES:
- appsales.application.currency (resolve_fx_rate for USD conversion)
- appsales.domain.models (AppSalesRecord, ProductTypeClass)
- appsales.domain.errors (ReportFormatError for missing columns)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from appsales.application.currency import resolve_fx_rate
from appsales.domain.errors import ReportFormatError
from appsales.domain.models import AppSalesRecord, ProductTypeClass

log = logging.getLogger(__name__)

# Product Type Identifiers, see "Product Type Identifiers" in the Reporter user guide
INSTALL_TYPES = frozenset({"1", "1F", "1T", "F1", "1E", "1EP", "1EU"})
IAP_TYPES = frozenset({"IA1", "IA9", "IAY", "IAC", "FI1"})

COL_APP_ID = "Apple Identifier"
COL_COUNTRY = "Country Code"
COL_CURRENCY = "Currency of Proceeds"
COL_TITLE = "Title"
COL_UNITS = "Units"
COL_PROCEEDS = "Developer Proceeds"
COL_PRODUCT_TYPE = "Product Type Identifier"

Row = Sequence[Optional[str]]


def classify_product_type(code: Optional[str]) -> ProductTypeClass:
    """
    Classify a Product Type Identifier.

    Args:
        code: Identifier from the report row (e.g. '1F', 'IA1')

    Returns:
        INSTALL for app downloads, IN_APP_PURCHASE for in-app items, OTHER otherwise
    """
    if code in INSTALL_TYPES:
        return ProductTypeClass.INSTALL
    if code in IAP_TYPES:
        return ProductTypeClass.IN_APP_PURCHASE
    return ProductTypeClass.OTHER


def split_report_text(text: str) -> list[list[Optional[str]]]:
    """
    Split a tab-separated report body into rows of cells.

    Lines of one character or less are dropped, cells are trimmed and
    blank cells become None.
    """
    return [
        [cell.strip() or None for cell in line.split("\t")]
        for line in text.split("\n")
        if len(line) > 1
    ]


def _to_float(value: Optional[str]) -> float:
    """Parse a numeric cell, treating anything unparseable as zero."""
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class ReportColumns:
    """Column positions resolved from a report header row."""
    app_id: int
    country: int
    currency: int
    title: int
    units: int
    proceeds: int
    product_type: int

    @classmethod
    def from_header(cls, header: Row) -> "ReportColumns":
        """
        Resolve required column positions by exact header name.

        Raises:
            ReportFormatError: If any required column is missing
        """
        names = list(header)
        wanted = {
            "app_id": COL_APP_ID,
            "country": COL_COUNTRY,
            "currency": COL_CURRENCY,
            "title": COL_TITLE,
            "units": COL_UNITS,
            "proceeds": COL_PROCEEDS,
            "product_type": COL_PRODUCT_TYPE,
        }
        missing = [name for name in wanted.values() if name not in names]
        if missing:
            raise ReportFormatError(f"Sales report is missing columns: {', '.join(missing)}")
        return cls(**{attr: names.index(name) for attr, name in wanted.items()})


@dataclass
class _AppAccumulator:
    """Mutable running totals for one app while a report is parsed."""
    title: str
    country: str
    installs: int = 0
    revenue: float = 0.0

    def freeze(self) -> AppSalesRecord:
        return AppSalesRecord(
            title=self.title,
            country=self.country,
            installs=self.installs,
            revenue=self.revenue,
        )


def _cell(row: Row, idx: int) -> Optional[str]:
    return row[idx] if idx < len(row) else None


def parse_sales_report(rows: Iterable[Row], rates: Mapping[str, float]) -> dict[str, AppSalesRecord]:
    """
    Aggregate a daily sales summary into per-app figures.

    Install-class rows add to installs and revenue, in-app purchase rows add
    to revenue only. Revenue is units * proceeds converted to USD with the
    rate for the row's currency. Rows in a currency missing from `rates` are
    logged and contribute nothing, but their app still appears in the result.

    Args:
        rows: Header row followed by data rows
        rates: Units of each currency per 1 USD

    Returns:
        Mapping of Apple Identifier to AppSalesRecord; empty when the
        report has no data rows

    Raises:
        ReportFormatError: If the header lacks a required column
    """
    rows = list(rows)
    apps: dict[str, _AppAccumulator] = {}

    if len(rows) < 2:
        return {}

    cols = ReportColumns.from_header(rows[0])

    for row in rows[1:]:
        app_id = _cell(row, cols.app_id)

        app = apps.get(app_id)
        if app is None:
            app = _AppAccumulator(
                title=_cell(row, cols.title) or "",
                country=_cell(row, cols.country) or "",
            )
            apps[app_id] = app

        product_class = classify_product_type(_cell(row, cols.product_type))
        units = _to_float(_cell(row, cols.units))
        local_proceeds = _to_float(_cell(row, cols.proceeds))
        currency = _cell(row, cols.currency)
        fx_rate = resolve_fx_rate(rates, currency)

        if fx_rate is None:
            log.warning("Unrecognized proceeds: %s %s", local_proceeds, currency)
            continue

        if product_class is ProductTypeClass.INSTALL:
            app.installs += int(units)
            app.revenue += units * local_proceeds / fx_rate
        elif product_class is ProductTypeClass.IN_APP_PURCHASE:
            app.revenue += units * local_proceeds / fx_rate

    return {app_id: app.freeze() for app_id, app in apps.items()}
