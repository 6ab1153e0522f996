# src/appsales/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
"""

from appsales.config.settings import DELIVERY_SLACK, DELIVERY_TELEGRAM, Settings, settings

__all__ = ["DELIVERY_SLACK", "DELIVERY_TELEGRAM", "Settings", "settings"]
