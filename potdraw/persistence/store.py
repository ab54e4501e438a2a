"""
Pluggable schedule stores.

Every backend exposes the same small surface (save / get / list_recent), so
the draw never depends on where it ends up. The backend is chosen by
POTDRAW_STORE; the SQLite store is wrapped so that a failed write lands in
the local JSON file instead of being lost.
"""
from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from potdraw.config import Settings
from potdraw.models import SavedSchedule, SaveResult, Schedule

from .db import get_connection, init_db
from .repositories import ScheduleRepository

logger = logging.getLogger(__name__)

# Local history keeps only the most recent draws
LOCAL_HISTORY_LIMIT = 20

# One lock per history file, shared by every store instance writing it
_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _file_locks_guard:
        if key not in _file_locks:
            _file_locks[key] = threading.Lock()
        return _file_locks[key]


class StoreUnavailableError(RuntimeError):
    """Backend cannot be reached or written."""


class ScheduleStore(Protocol):
    name: str

    def save(self, schedule: Schedule) -> SaveResult: ...

    def get(self, schedule_id: str) -> SavedSchedule | None: ...

    def list_recent(self, limit: int = 20) -> list[SavedSchedule]: ...


# ---------- No backend ----------


class NullScheduleStore:
    """Draws are shown but not kept anywhere."""

    name = "none"

    def save(self, schedule: Schedule) -> SaveResult:
        return SaveResult(ok=True, backend=self.name)

    def get(self, schedule_id: str) -> SavedSchedule | None:
        return None

    def list_recent(self, limit: int = 20) -> list[SavedSchedule]:
        return []


# ---------- SQLite ----------


class SqliteScheduleStore:
    """Durable store. One connection per call."""

    name = "sqlite"

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self._repo = ScheduleRepository()
        self._ready = False

    def _connect(self) -> sqlite3.Connection:
        try:
            if not self._ready:
                init_db(self.db_path)
                self._ready = True
            return get_connection(self.db_path)
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailableError(f"SQLite store unavailable at {self.db_path}: {e}") from e

    def save(self, schedule: Schedule) -> SaveResult:
        conn = self._connect()
        try:
            saved = self._repo.create(conn, schedule)
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Could not write schedule: {e}") from e
        finally:
            conn.close()
        logger.info("Saved schedule %s to %s", saved.id, self.db_path)
        return SaveResult(ok=True, backend=self.name, record_id=saved.id)

    def get(self, schedule_id: str) -> SavedSchedule | None:
        conn = self._connect()
        try:
            return self._repo.get(conn, schedule_id)
        finally:
            conn.close()

    def list_recent(self, limit: int = 20) -> list[SavedSchedule]:
        conn = self._connect()
        try:
            return self._repo.list_recent(conn, limit=limit)
        finally:
            conn.close()


# ---------- Local JSON file ----------


class LocalFileScheduleStore:
    """
    Fallback history kept in a single JSON file, newest first,
    capped at LOCAL_HISTORY_LIMIT entries.
    """

    name = "local"

    def __init__(self, path: str | Path, limit: int = LOCAL_HISTORY_LIMIT) -> None:
        self.path = Path(path)
        self.limit = limit

    def _read(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable local history at %s", self.path)
            return []
        return data if isinstance(data, list) else []

    def _write(self, entries: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Unique temp file per write; readers only ever see a complete file
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=self.path.parent, suffix=".tmp", delete=False
        ) as tmp:
            json.dump(entries, tmp, ensure_ascii=False, indent=2)
        try:
            os.replace(tmp.name, self.path)
        except OSError:
            os.unlink(tmp.name)
            raise

    @staticmethod
    def _to_saved(entry: dict) -> SavedSchedule:
        return SavedSchedule(
            id=entry["id"],
            schedule=Schedule.from_dict(entry),
            created_at=datetime.fromisoformat(entry["created_at"]),
            backend=LocalFileScheduleStore.name,
        )

    def save(self, schedule: Schedule) -> SaveResult:
        saved = SavedSchedule(
            id=str(uuid.uuid4()),
            schedule=schedule,
            created_at=datetime.now(timezone.utc),
            backend=self.name,
        )
        try:
            with _lock_for(self.path):
                entries = [saved.to_dict()] + self._read()
                self._write(entries[: self.limit])
        except OSError as e:
            logger.error("Could not write local history %s: %s", self.path, e)
            return SaveResult(ok=False, backend=self.name, error=str(e))
        logger.info("Saved schedule %s to local history %s", saved.id, self.path)
        return SaveResult(ok=True, backend=self.name, record_id=saved.id)

    def get(self, schedule_id: str) -> SavedSchedule | None:
        for entry in self._read():
            if entry.get("id") == schedule_id:
                return self._to_saved(entry)
        return None

    def list_recent(self, limit: int = 20) -> list[SavedSchedule]:
        return [self._to_saved(e) for e in self._read()[:limit]]


# ---------- Primary with fallback ----------


class FallbackScheduleStore:
    """Write to primary; if it is unreachable, write to fallback instead."""

    def __init__(self, primary: ScheduleStore, fallback: ScheduleStore) -> None:
        self.primary = primary
        self.fallback = fallback
        self.name = primary.name

    def save(self, schedule: Schedule) -> SaveResult:
        try:
            return self.primary.save(schedule)
        except (StoreUnavailableError, sqlite3.Error, OSError) as e:
            logger.warning("%s store failed (%s); saving to %s", self.primary.name, e, self.fallback.name)
            primary_error = str(e)
        try:
            result = self.fallback.save(schedule)
        except (StoreUnavailableError, OSError) as e:
            logger.error("Fallback store %s failed too: %s", self.fallback.name, e)
            return SaveResult(ok=False, backend=self.fallback.name, fallback_used=True, error=str(e))
        result.fallback_used = True
        if result.ok:
            result.error = primary_error
        return result

    def get(self, schedule_id: str) -> SavedSchedule | None:
        try:
            found = self.primary.get(schedule_id)
        except (StoreUnavailableError, sqlite3.Error, OSError):
            found = None
        return found if found is not None else self.fallback.get(schedule_id)

    def list_recent(self, limit: int = 20) -> list[SavedSchedule]:
        """
        Both histories merged, newest first. Draws saved to the fallback during
        an outage stay listed after the primary comes back.
        """
        try:
            records = self.primary.list_recent(limit)
        except (StoreUnavailableError, sqlite3.Error, OSError) as e:
            logger.warning("%s store failed (%s); listing %s history", self.primary.name, e, self.fallback.name)
            records = []
        seen = {r.id for r in records}
        records += [r for r in self.fallback.list_recent(limit) if r.id not in seen]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:limit]


def build_store(settings: Settings) -> ScheduleStore:
    """Pick the backend named by settings.store_backend."""
    if settings.store_backend == "none":
        return NullScheduleStore()
    local = LocalFileScheduleStore(settings.fallback_path)
    if settings.store_backend == "local":
        return local
    return FallbackScheduleStore(SqliteScheduleStore(settings.db_path), local)
