# src/appsales/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines the exceptions that abort a reporting run.
Anything raised from here is fatal: the run stops before delivery
and the date cursor is left untouched.
"""


class AppSalesError(Exception):
    """Base exception for reporting errors."""
    pass


class ConfigurationError(AppSalesError):
    """Raised when a required setting is missing or invalid."""
    pass


class ReportFormatError(AppSalesError):
    """Raised when a sales report is missing a required column."""
    pass


class MalformedResponseError(AppSalesError):
    """Raised when an upstream service returns an unexpected payload."""
    pass


class ReportServiceError(AppSalesError):
    """Raised when the report service answers with an unrecognized error code."""

    def __init__(self, code: int, message: str):
        super().__init__(f"Report service error {code}: {message}")
        self.code = code
        self.message = message


class InvalidCursorError(AppSalesError):
    """Raised when the persisted last-processed date cannot be parsed."""
    pass


class TransportError(AppSalesError, RuntimeError):
    """Raised when a network request to a collaborator fails."""
    pass
