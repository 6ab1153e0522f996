# src/appsales/adapters/persistence/cursor_store.py
"""
Cursor Store - Last Processed Date Persistence

This module persists the last sales date that was successfully reported,
so the next run knows which day to report on. The date is kept in a small
JSON file that is replaced atomically on every write.

Files that USE this module:
- appsales.app (wires FileCursorStore into the run coordinator)
- tests.test_cursor_store (unit tests)

Files that this module USES:
- appsales.config (settings for the file path)
- appsales.shared.validators (parse_iso_date)
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional, Union

from appsales.config import settings
from appsales.domain.errors import InvalidCursorError
from appsales.shared.validators import parse_iso_date

log = logging.getLogger(__name__)


@dataclass
class CursorRecord:
    last_date: date
    updated_at: Optional[datetime] = None  # UTC

    def to_json(self) -> dict:
        """
        Convert to a JSON-serializable dictionary.

        Returns:
            Dictionary with ISO-formatted date and timestamp
        """
        updated_at = self.updated_at or datetime.now(timezone.utc)
        return {
            "last_date": self.last_date.isoformat(),
            "updated_at": updated_at.isoformat(),
        }

    @staticmethod
    def from_json(data: dict) -> "CursorRecord":
        """
        Create a CursorRecord from a JSON dictionary.

        Raises:
            InvalidCursorError: If 'last_date' is missing or not a YYYY-MM-DD date
        """
        raw = data.get("last_date") if isinstance(data, dict) else None
        last_date = parse_iso_date(raw)
        if last_date is None:
            raise InvalidCursorError(f"Invalid date in cursor file: {raw!r}")

        ts_raw = data.get("updated_at")
        updated_at = None
        if isinstance(ts_raw, str):
            try:
                updated_at = datetime.fromisoformat(ts_raw.replace("Z", "+00:00")).astimezone(timezone.utc)
            except ValueError:
                updated_at = None
        return CursorRecord(last_date=last_date, updated_at=updated_at)


class FileCursorStore:
    """Keeps the last processed date in a JSON file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Args:
            path: File location (defaults to settings.last_date_file)
        """
        self.path = Path(path) if path is not None else settings.last_date_file

    def get(self) -> Optional[date]:
        """
        Load the last processed date.

        Returns:
            The stored date, or None if nothing has been stored yet

        Raises:
            InvalidCursorError: If the file exists but cannot be parsed
        """
        if not self.path.exists():
            log.info("No cursor found at %s", self.path)
            return None

        log.info("GET %s", self.path)
        with self.path.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidCursorError(f"Invalid date in {self.path}: {e}") from e

        try:
            return CursorRecord.from_json(data).last_date
        except InvalidCursorError as e:
            raise InvalidCursorError(f"{e} ({self.path})") from e

    def set(self, last_date: date) -> None:
        """
        Save the last processed date using an atomic write.

        Uses temporary file + atomic rename so a crash never leaves a
        half-written cursor behind.

        Args:
            last_date: Date that was just reported
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        record = CursorRecord(last_date=last_date)
        log.info("SET %s %s", self.path, last_date.isoformat())

        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(record.to_json(), f, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise RuntimeError(f"Failed to save cursor file: {e}") from e
