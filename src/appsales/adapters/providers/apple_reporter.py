# src/appsales/adapters/providers/apple_reporter.py
"""
Apple Reporter API Client for Daily Sales Reports

This module implements a client for Apple's Reporter service (the API
behind Reporter.jar). Commands are sent as a form-encoded `jsonRequest`
carrying the user id, access token and a Reporter query. Successful report
downloads are gzip-compressed tab-separated text; failures come back as
XML `<Error>` documents with a numeric code.

Files that USE this module:
- appsales.app (wires AppleReporterClient into the run coordinator)
- tests.test_providers (unit tests)

Files that this module USES:
- appsales.adapters.providers.base (ReportProvider interface)
- appsales.application.report_parser (split_report_text for report bodies)
- appsales.config (settings for credentials and endpoint)
- appsales.domain (ReportAvailability and errors)
"""
import gzip
import json
import logging
from datetime import date
from typing import Optional

import requests
from bs4 import BeautifulSoup

from appsales.adapters.providers.base import ReportProvider
from appsales.application.report_parser import split_report_text
from appsales.config import settings
from appsales.domain.errors import MalformedResponseError, ReportServiceError, TransportError
from appsales.domain.models import ReportAvailability

log = logging.getLogger(__name__)

# 210: older than 365 days, 211: not available yet, 212: not available for the date
NO_REPORT_ERRORS = frozenset({210, 211, 212})
ERR_NO_SALES = 213

GZIP_MAGIC = b"\x1f\x8b"


class AppleReporterClient(ReportProvider):
    def __init__(
        self,
        user_id: Optional[str] = None,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        version: Optional[str] = None,
    ):
        """
        Initialize the Reporter client.

        Args:
            user_id: Apple ID used for App Store Connect (defaults to settings.apple_user_id)
            access_token: Reporter access token (defaults to settings.apple_access_token)
            base_url: Sales endpoint URL (defaults to settings.reporter_url)
            timeout: HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            version: Reporter protocol version (defaults to settings.reporter_version)

        Raises:
            ValueError: If the user id or access token is empty
        """
        self.user_id = user_id or settings.apple_user_id
        self.access_token = access_token or settings.apple_access_token
        if not self.user_id or not self.access_token:
            raise ValueError("Apple Reporter user id and access token are required")
        self.url = base_url or settings.reporter_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.version = version or settings.reporter_version

    def _post(self, query: str) -> requests.Response:
        """
        Send a Reporter command.

        Args:
            query: Command and arguments, e.g. 'Sales.getStatus'

        Raises:
            TransportError: If the request fails at the network level
        """
        payload = {
            "userid": self.user_id,
            "accesstoken": self.access_token,
            "version": self.version,
            "mode": "Robot.XML",
            "queryInput": f"[p=Reporter.properties, {query}]",
        }
        try:
            return requests.post(
                self.url,
                data={"jsonRequest": json.dumps(payload)},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            log.error("Reporter API timeout after %d seconds", self.timeout)
            raise TransportError(f"Reporter API timeout after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            log.error("Reporter API request failed: %s", e)
            raise TransportError(f"Reporter API request failed: {e}") from e

    @staticmethod
    def _parse_error(text: str) -> Optional[tuple[int, str]]:
        """
        Extract the code and message from an XML <Error> body.

        Returns:
            (code, message), or None if the body is not an error document
        """
        soup = BeautifulSoup(text, "html.parser")
        error = soup.find("error")
        if error is None:
            return None
        code_tag = error.find("code")
        message_tag = error.find("message")
        try:
            code = int(code_tag.get_text(strip=True)) if code_tag else -1
        except ValueError:
            code = -1
        message = message_tag.get_text(strip=True) if message_tag else ""
        return code, message

    @staticmethod
    def _decode_body(resp: requests.Response) -> str:
        content = resp.content or b""
        if content[:2] == GZIP_MAGIC:
            content = gzip.decompress(content)
        return content.decode("utf-8")

    def get_status(self) -> str:
        """
        Check that the Sales and Trends service is up.

        Returns:
            The status message, e.g. 'Sales and Trends is currently available.'

        Raises:
            MalformedResponseError: If the response carries no status message
            TransportError: If the request fails
        """
        log.info("Checking sales report status...")
        resp = self._post("Sales.getStatus")
        text = self._decode_body(resp)

        soup = BeautifulSoup(text, "html.parser")
        status = soup.find("status")
        message = status.find("message") if status else None
        if message is None or not message.get_text(strip=True):
            raise MalformedResponseError(f"Unrecognized Sales Report status: {text[:500]!r}")

        status_text = message.get_text(strip=True)
        log.info(status_text)
        return status_text

    def get_daily_report(self, vendor: str, report_date: date) -> ReportAvailability:
        """
        Download the daily Sales Summary report.

        Args:
            vendor: Vendor number
            report_date: Day to fetch

        Returns:
            ReportAvailability with the report rows, NOT_YET_PUBLISHED for
            Reporter errors 210-212, or NO_SALES for error 213

        Raises:
            ReportServiceError: For any other Reporter error code
            TransportError: If the request fails
        """
        date_str = report_date.strftime("%Y%m%d")
        log.info("POST %s (%s @ %s)", self.url, vendor, date_str)

        resp = self._post(f"Sales.getReport, {vendor},Sales,Summary,Daily,{date_str}")
        text = self._decode_body(resp)

        error = self._parse_error(text) if text.lstrip().startswith("<") else None
        if error is not None:
            code, message = error
            if code in NO_REPORT_ERRORS:
                log.info(message)
                return ReportAvailability.not_yet_published()
            if code == ERR_NO_SALES:
                log.info(message)
                return ReportAvailability.no_sales()
            raise ReportServiceError(code, message)

        if resp.status_code >= 400:
            log.error("Reporter API returned HTTP %d without an error document", resp.status_code)
            raise TransportError(f"Reporter API HTTP {resp.status_code}")

        rows = split_report_text(text)
        if not rows:
            return ReportAvailability.no_sales()
        return ReportAvailability.available(rows)
