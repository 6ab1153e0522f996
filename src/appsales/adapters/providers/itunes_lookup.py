# src/appsales/adapters/providers/itunes_lookup.py
"""
iTunes Lookup Provider for App Metadata

Looks up an app's store title and 60px artwork through the public iTunes
Search API. The icon is shown next to each app in the daily summary.

Files that USE this module:
- appsales.app (wires ITunesLookupProvider into the run coordinator)
- tests.test_providers (unit tests)

Files that this module USES:
- appsales.adapters.providers.base (AppMetadataProvider interface)
- appsales.config (settings for the lookup URL and timeout)
"""
import logging
from typing import Optional

import requests

from appsales.adapters.providers.base import AppMetadataProvider
from appsales.config import settings
from appsales.domain.errors import MalformedResponseError, TransportError
from appsales.domain.models import AppMetadata

log = logging.getLogger(__name__)


class ITunesLookupProvider(AppMetadataProvider):
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.url = base_url or settings.itunes_lookup_url
        self.timeout = timeout or settings.http_timeout_seconds

    def lookup(self, app_id: str, country: str) -> AppMetadata:
        """
        Look up an app in a country storefront.

        Args:
            app_id: Apple Identifier of the app
            country: Two-letter storefront country code

        Returns:
            AppMetadata with the track name and artworkUrl60

        Raises:
            TransportError: If the request fails
            MalformedResponseError: If the app is not found or the result lacks a title or icon
        """
        log.info("GET %s?id=%s&country=%s", self.url, app_id, country)
        try:
            resp = requests.get(self.url, params={"id": app_id, "country": country}, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout:
            log.error("iTunes lookup timeout after %d seconds", self.timeout)
            raise TransportError(f"iTunes lookup timeout after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            log.error("iTunes lookup request failed for %s: %s", app_id, e)
            raise TransportError(f"iTunes lookup request failed for {app_id}: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"iTunes lookup returned invalid JSON for {app_id}: {e}") from e

        results = data.get("results") if isinstance(data, dict) else None
        first = results[0] if isinstance(results, list) and results else None
        if not isinstance(first, dict) or not first.get("trackName") or not first.get("artworkUrl60"):
            log.error("iTunes lookup unexpected response for %s (%s): %s", app_id, country, data)
            raise MalformedResponseError(f"Unrecognized response from {self.url} for {app_id}: {data!r}")

        return AppMetadata(title=first["trackName"], icon=first["artworkUrl60"])
