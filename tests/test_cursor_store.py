# tests/test_cursor_store.py
"""
Cursor Store Tests - Unit Tests for Last Processed Date Persistence
"""
import json
from datetime import date

import pytest  # Testing framework for writing and running tests

from appsales.adapters.persistence.cursor_store import CursorRecord, FileCursorStore
from appsales.domain import InvalidCursorError


class TestFileCursorStore:
    def test_missing_file(self, tmp_path):
        assert FileCursorStore(tmp_path / "last_date.json").get() is None

    def test_round_trip(self, tmp_path):
        store = FileCursorStore(tmp_path / "state" / "last_date.json")

        store.set(date(2026, 10, 15))

        assert store.get() == date(2026, 10, 15)
        data = json.loads((tmp_path / "state" / "last_date.json").read_text(encoding="utf-8"))
        assert data["last_date"] == "2026-10-15"
        assert "updated_at" in data

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        store = FileCursorStore(tmp_path / "last_date.json")

        store.set(date(2026, 10, 15))
        store.set(date(2026, 10, 16))

        assert store.get() == date(2026, 10, 16)
        assert [p.name for p in tmp_path.iterdir()] == ["last_date.json"]

    def test_corrupt_json(self, tmp_path):
        path = tmp_path / "last_date.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(InvalidCursorError):
            FileCursorStore(path).get()

    def test_invalid_date(self, tmp_path):
        path = tmp_path / "last_date.json"
        path.write_text(json.dumps({"last_date": "2026-13-40"}), encoding="utf-8")

        with pytest.raises(InvalidCursorError, match="Invalid date"):
            FileCursorStore(path).get()


class TestCursorRecord:
    def test_from_json_without_timestamp(self):
        record = CursorRecord.from_json({"last_date": "2026-01-31"})
        assert record.last_date == date(2026, 1, 31)
        assert record.updated_at is None

    def test_from_json_with_zulu_timestamp(self):
        record = CursorRecord.from_json({"last_date": "2026-01-31", "updated_at": "2026-02-01T06:00:00Z"})
        assert record.updated_at.hour == 6
