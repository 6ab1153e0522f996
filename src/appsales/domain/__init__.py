# src/appsales/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and business errors.
No dependencies on infrastructure or external systems.
"""

from appsales.domain.models import (
    ZERO_SALES,
    AppMetadata,
    AppSalesRecord,
    DisplayMessage,
    MessageField,
    MessageSection,
    ProductTypeClass,
    ReportAvailability,
    ReportStatus,
    RunOutcome,
    RunResult,
    SalesSnapshot,
)
from appsales.domain.errors import (
    AppSalesError,
    ConfigurationError,
    InvalidCursorError,
    MalformedResponseError,
    ReportFormatError,
    ReportServiceError,
    TransportError,
)

__all__ = [
    "ZERO_SALES",
    "AppMetadata",
    "AppSalesRecord",
    "DisplayMessage",
    "MessageField",
    "MessageSection",
    "ProductTypeClass",
    "ReportAvailability",
    "ReportStatus",
    "RunOutcome",
    "RunResult",
    "SalesSnapshot",
    "AppSalesError",
    "ConfigurationError",
    "InvalidCursorError",
    "MalformedResponseError",
    "ReportFormatError",
    "ReportServiceError",
    "TransportError",
]
