# src/appsales/adapters/formatting/__init__.py
"""
Formatting Adapters - Message Formatting

This package builds the daily summary message and its text rendering.
"""

from appsales.adapters.formatting.formatter import (
    build_sales_message,
    format_currency,
    format_number,
    format_percent,
    render_plain_text,
)

__all__ = [
    "build_sales_message",
    "format_currency",
    "format_number",
    "format_percent",
    "render_plain_text",
]
