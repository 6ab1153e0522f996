# src/appsales/adapters/providers/openexchangerates.py
"""
Open Exchange Rates Provider for USD Conversion Rates

This module fetches the latest USD-based rates from openexchangerates.org.
The API returns units of each currency per 1 USD, which is exactly the
divisor the report parser needs to convert proceeds to USD.

Files that USE this module:
- appsales.app (wires OpenExchangeRatesProvider into the run coordinator)
- tests.test_providers (unit tests)

Files that this module USES:
- appsales.adapters.providers.base (RateProvider interface)
- appsales.config (settings for API configuration)
"""
import logging
from typing import Optional

import requests

from appsales.adapters.providers.base import RateProvider
from appsales.config import settings
from appsales.domain.errors import MalformedResponseError, TransportError

log = logging.getLogger(__name__)


class OpenExchangeRatesProvider(RateProvider):
    def __init__(self, app_id: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize Open Exchange Rates provider.

        Args:
            app_id: API app id (defaults to settings.open_exchange_rates_app_id)
            base_url: Optional custom API URL (defaults to settings.open_exchange_rates_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)

        Raises:
            ValueError: If the app id is missing
        """
        self.app_id = app_id or settings.open_exchange_rates_app_id
        if not self.app_id:
            raise ValueError("Open Exchange Rates app id not configured (OPEN_EXCHANGE_RATES_APP_ID)")
        self.url = base_url or settings.open_exchange_rates_url
        self.timeout = timeout or settings.http_timeout_seconds

    def get_rates(self) -> dict[str, float]:
        """
        Get the latest exchange rates.

        Returns:
            Mapping of currency code to units per 1 USD, including USD itself

        Raises:
            TransportError: If the request fails or times out
            MalformedResponseError: If the body has no 'rates' object
        """
        log.info("GET %s", self.url)
        try:
            resp = requests.get(self.url, params={"app_id": self.app_id}, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout:
            log.error("Open Exchange Rates timeout after %d seconds", self.timeout)
            raise TransportError(f"Open Exchange Rates timeout after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            log.error("Open Exchange Rates request failed: %s", e)
            raise TransportError(f"Open Exchange Rates request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            log.error("Open Exchange Rates returned invalid JSON: %s", e)
            raise MalformedResponseError(f"Open Exchange Rates returned invalid JSON: {e}") from e

        # Expect: {"base": "USD", "rates": {"EUR": 0.86, ...}}
        if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
            log.error("Open Exchange Rates unexpected response structure: %s", data)
            raise MalformedResponseError(f"Unrecognized response from {self.url}: {data!r}")

        rates = dict(data["rates"])
        rates["USD"] = 1
        log.info("Fetched %d exchange rates (base=%s)", len(rates), data.get("base", "USD"))
        return rates
