# src/appsales/adapters/providers/base.py
"""
Base Provider Interfaces for External Data Sources

This module defines the abstract base classes for the services a reporting
run reads from: the sales report service, the exchange rate API and the
App Store metadata lookup.

Files that USE this module:
- appsales.adapters.providers.apple_reporter (AppleReporterClient implements ReportProvider)
- appsales.adapters.providers.openexchangerates (OpenExchangeRatesProvider implements RateProvider)
- appsales.adapters.providers.itunes_lookup (ITunesLookupProvider implements AppMetadataProvider)

Files that this module USES:
- appsales.domain.models (ReportAvailability, AppMetadata)
"""
from abc import ABC, abstractmethod
from datetime import date

from appsales.domain.models import AppMetadata, ReportAvailability


class ReportProvider(ABC):
    @abstractmethod
    def get_status(self) -> str:
        """Return the report service status message."""
        raise NotImplementedError

    @abstractmethod
    def get_daily_report(self, vendor: str, report_date: date) -> ReportAvailability:
        """Return the daily sales summary for a vendor and date."""
        raise NotImplementedError


class RateProvider(ABC):
    @abstractmethod
    def get_rates(self) -> dict[str, float]:
        """Return units of each currency per 1 USD."""
        raise NotImplementedError


class AppMetadataProvider(ABC):
    @abstractmethod
    def lookup(self, app_id: str, country: str) -> AppMetadata:
        """Return title and icon for an app in a storefront country."""
        raise NotImplementedError
