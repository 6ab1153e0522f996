# src/appsales/application/currency.py
"""
Currency Normalizer - USD Conversion Table

Exchange rates arrive as "units of currency per 1 USD". This module cleans
the table handed to the report parser: USD is always present at 1.0, and
entries that cannot be used as a divisor are dropped so rows priced in them
are skipped instead of breaking the conversion.

Files that USE this module:
- appsales.application.sales_aggregator (normalize_rates once per run)
- appsales.application.report_parser (resolve_fx_rate per report row)
- tests.test_currency (unit tests)

Files that this module USES:
- None
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

log = logging.getLogger(__name__)

BASE_CURRENCY = "USD"


def normalize_rates(rates: Mapping[str, object]) -> dict[str, float]:
    """
    Build the exchange-rate table used for a run.

    Args:
        rates: Currency code to rate, as returned by the rate source

    Returns:
        New dict of positive float rates that always maps USD to 1.0
    """
    table: dict[str, float] = {}
    for code, raw in rates.items():
        try:
            rate = float(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            log.warning("Ignoring non-numeric exchange rate for %s: %r", code, raw)
            continue
        if rate <= 0:
            log.warning("Ignoring non-positive exchange rate for %s: %s", code, rate)
            continue
        table[code] = rate

    table[BASE_CURRENCY] = 1.0
    return table


def resolve_fx_rate(rates: Mapping[str, float], currency: Optional[str]) -> Optional[float]:
    """Return units of `currency` per 1 USD, or None when it is unknown."""
    if currency is None:
        return None
    return rates.get(currency)
