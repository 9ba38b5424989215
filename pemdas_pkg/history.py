"""Persistent calculation history.

This module provides:
- The ``HistoryStore`` interface the session appends records to
- An in-memory store for tests and embedding
- A JSON file store that survives process restarts
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from . import config
from .logging_config import get_logger
from .types import HistoryRecord

logger = get_logger("history")

_HISTORY_VERSION = 1  # Increment when file format changes


def _newest_first(records: list[HistoryRecord]) -> list[HistoryRecord]:
    # Reverse first so that records with equal timestamps keep newest-appended first
    return sorted(reversed(records), key=lambda r: r.timestamp, reverse=True)


class HistoryStore(Protocol):
    def append(self, record: HistoryRecord) -> None: ...

    def list_all(self) -> list[HistoryRecord]:
        """All records, timestamp descending."""
        ...

    def clear(self) -> None: ...


class InMemoryHistoryStore:
    """List-backed store; contents vanish with the process."""

    def __init__(self, records: list[HistoryRecord] | None = None):
        self._records: list[HistoryRecord] = list(records or [])

    def append(self, record: HistoryRecord) -> None:
        self._records.append(record)

    def list_all(self) -> list[HistoryRecord]:
        return _newest_first(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)


class JsonHistoryStore:
    """Store backed by a JSON file.

    File layout::

        {"version": 1, "calculations": [{"id": ..., "expression": ...,
                                         "result": ..., "timestamp": ...}]}

    The file is read lazily on first use and rewritten atomically after
    every append. An unreadable file starts an empty history.
    """

    def __init__(self, path: str | Path | None = None, limit: int | None = None):
        self.path = Path(path) if path is not None else config.HISTORY_FILE
        self.limit = limit if limit is not None else config.HISTORY_LIMIT
        self._records: list[HistoryRecord] | None = None

    def _load(self) -> list[HistoryRecord]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load history: {e}, starting with empty history")
            return []

        if not isinstance(data, dict) or data.get("version") != _HISTORY_VERSION:
            logger.warning("History version mismatch, starting with empty history")
            return []

        entries = data.get("calculations")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            logger.warning("History calculations are not a list, starting with empty history")
            return []

        records = []
        for entry in entries:
            try:
                records.append(HistoryRecord.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed history entry: {e}")
        logger.debug(f"Loaded {len(records)} history entries from {self.path}")
        return records

    def _save(self, records: list[HistoryRecord]) -> None:
        data: dict[str, Any] = {
            "version": _HISTORY_VERSION,
            "calculations": [r.to_dict() for r in records],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Write atomically (write to temp file then rename)
            temp_file = self.path.with_suffix(".tmp")
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            temp_file.replace(self.path)
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to save history: {e}")

    @property
    def records(self) -> list[HistoryRecord]:
        if self._records is None:
            self._records = self._load()
        return self._records

    def append(self, record: HistoryRecord) -> None:
        records = self.records
        records.append(record)
        if self.limit > 0 and len(records) > self.limit:
            # Keep only the most recent entries
            del records[: len(records) - self.limit]
        self._save(records)

    def list_all(self) -> list[HistoryRecord]:
        return _newest_first(self.records)

    def clear(self) -> None:
        self._records = []
        self._save(self._records)

    def __len__(self) -> int:
        return len(self.records)
