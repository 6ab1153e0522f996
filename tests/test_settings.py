# tests/test_settings.py
"""
Settings Tests - Unit Tests for Configuration and Validators
"""
import pytest  # Testing framework for writing and running tests
from pydantic import ValidationError  # Raised by Settings field validators

from appsales.app import build_coordinator
from appsales.application.run_coordinator import RunCoordinator
from appsales.config import Settings
from appsales.domain import ConfigurationError
from appsales.shared.validators import (
    parse_iso_date,
    validate_vendor_number,
    validate_webhook_url,
)

BASE = {
    "APPLE_USER_ID": "dev@example.com",
    "APPLE_ACCESS_TOKEN": "token-123",
    "APPLE_VENDOR_NUMBER": "85012345",
    "OPEN_EXCHANGE_RATES_APP_ID": "abcdef123456",
    "SLACK_WEBHOOK": "https://hooks.slack.com/services/T000/B000/XXXX",
}


def make_settings(**overrides):
    values = {**BASE, **overrides}
    return Settings(_env_file=None, **values)


class TestSettings:
    def test_nothing_missing(self):
        assert make_settings().missing_required() == []

    def test_missing_in_order(self):
        settings = make_settings(APPLE_USER_ID="", SLACK_WEBHOOK="")
        assert settings.missing_required() == ["APPLE_USER_ID", "SLACK_WEBHOOK"]

    def test_telegram_needs_bot_credentials(self):
        settings = make_settings(DELIVERY_CHANNEL="telegram", SLACK_WEBHOOK="")
        assert settings.missing_required() == ["BOT_TOKEN", "CHANNEL_ID"]

    def test_invalid_delivery_channel(self):
        with pytest.raises(ValidationError):
            make_settings(DELIVERY_CHANNEL="email")

    def test_invalid_vendor_number(self):
        with pytest.raises(ValidationError):
            make_settings(APPLE_VENDOR_NUMBER="vendor")

    def test_webhook_must_be_https(self):
        with pytest.raises(ValidationError):
            make_settings(SLACK_WEBHOOK="http://hooks.slack.com/services/x")


class TestBuildCoordinator:
    def test_missing_setting(self):
        with pytest.raises(ConfigurationError, match="APPLE_ACCESS_TOKEN is not set"):
            build_coordinator(make_settings(APPLE_ACCESS_TOKEN=""))

    def test_wires_adapters(self, tmp_path):
        coordinator = build_coordinator(make_settings(LAST_DATE_FILE=str(tmp_path / "last_date.json")))

        assert isinstance(coordinator, RunCoordinator)
        assert coordinator.vendor == "85012345"
        assert coordinator.cursor.path == tmp_path / "last_date.json"


class TestValidators:
    def test_vendor_number(self):
        assert validate_vendor_number("85012345")
        assert not validate_vendor_number("85-012")
        assert not validate_vendor_number("")

    def test_webhook_url(self):
        assert validate_webhook_url("https://hooks.slack.com/services/a")
        assert not validate_webhook_url("ftp://example.com")
        assert not validate_webhook_url("")

    def test_parse_iso_date(self):
        assert parse_iso_date("2026-10-15").day == 15
        assert parse_iso_date("15/10/2026") is None
        assert parse_iso_date(None) is None
