# src/appsales/adapters/providers/__init__.py
"""
Provider Adapters - External API Clients

This package contains adapters for the external services a run reads from.
"""

from appsales.adapters.providers.base import AppMetadataProvider, RateProvider, ReportProvider
from appsales.adapters.providers.apple_reporter import AppleReporterClient
from appsales.adapters.providers.itunes_lookup import ITunesLookupProvider
from appsales.adapters.providers.openexchangerates import OpenExchangeRatesProvider

__all__ = [
    "AppMetadataProvider",
    "RateProvider",
    "ReportProvider",
    "AppleReporterClient",
    "ITunesLookupProvider",
    "OpenExchangeRatesProvider",
]
