# src/appsales/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (Apple Reporter, exchange rates, app metadata)
- Persistence (cursor storage)
- Formatting (output)
- Slack and Telegram (delivery)
"""

__all__ = []
