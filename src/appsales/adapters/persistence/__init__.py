# src/appsales/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting the reporting cursor.
"""

from appsales.adapters.persistence.cursor_store import CursorRecord, FileCursorStore

__all__ = [
    "CursorRecord",
    "FileCursorStore",
]
