# src/appsales/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the reporting pipeline: report parsing, currency
normalization, three-way aggregation and the run coordinator.
No direct I/O dependencies - collaborators are passed in.
"""

from appsales.application.currency import normalize_rates, resolve_fx_rate
from appsales.application.report_parser import classify_product_type, parse_sales_report, split_report_text
from appsales.application.sales_aggregator import SalesAggregator
from appsales.application.run_coordinator import RunCoordinator

__all__ = [
    "normalize_rates",
    "resolve_fx_rate",
    "classify_product_type",
    "parse_sales_report",
    "split_report_text",
    "SalesAggregator",
    "RunCoordinator",
]
