"""
Repository interface for saved draws.
No business logic — only read/write operations.
"""
from __future__ import annotations

import json
import sqlite3
import uuid
from datetime import datetime, timezone

from potdraw.models import MatchDay, SavedSchedule, Schedule

BACKEND_NAME = "sqlite"


def _parse_datetime(s: str | None) -> datetime:
    if s is None:
        raise ValueError("expected datetime string")
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _row_to_saved(row: sqlite3.Row) -> SavedSchedule:
    r = dict(row)
    schedule = Schedule(
        days=tuple(MatchDay.from_dict(d) for d in json.loads(r["schedule"])),
        pot_a=tuple(json.loads(r["pot_a"])),
        pot_b=tuple(json.loads(r["pot_b"])),
        teams=tuple(json.loads(r["teams"])),
    )
    return SavedSchedule(
        id=r["id"],
        schedule=schedule,
        created_at=_parse_datetime(r["created_at"]),
        backend=BACKEND_NAME,
    )


# ---------- ScheduleRepository ----------


class ScheduleRepository:
    """CRUD for draws. Newest first when listing."""

    def create(
        self,
        conn: sqlite3.Connection,
        schedule: Schedule,
        id: str | None = None,
        created_at: datetime | None = None,
    ) -> SavedSchedule:
        sid = id or str(uuid.uuid4())
        now = created_at or datetime.now(timezone.utc)
        conn.execute(
            "INSERT INTO schedules (id, teams, pot_a, pot_b, schedule, created_at) VALUES (?, ?, ?, ?, ?, ?)",
            (
                sid,
                json.dumps(list(schedule.teams)),
                json.dumps(list(schedule.pot_a)),
                json.dumps(list(schedule.pot_b)),
                json.dumps([d.to_dict() for d in schedule.days]),
                now.isoformat(),
            ),
        )
        conn.commit()
        return SavedSchedule(id=sid, schedule=schedule, created_at=now, backend=BACKEND_NAME)

    def get(self, conn: sqlite3.Connection, schedule_id: str) -> SavedSchedule | None:
        row = conn.execute(
            "SELECT id, teams, pot_a, pot_b, schedule, created_at FROM schedules WHERE id = ?",
            (schedule_id,),
        ).fetchone()
        if row is None:
            return None
        return _row_to_saved(row)

    def list_recent(self, conn: sqlite3.Connection, limit: int = 20) -> list[SavedSchedule]:
        rows = conn.execute(
            "SELECT id, teams, pot_a, pot_b, schedule, created_at FROM schedules "
            "ORDER BY created_at DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [_row_to_saved(r) for r in rows]

    def count(self, conn: sqlite3.Connection) -> int:
        row = conn.execute("SELECT COUNT(*) FROM schedules").fetchone()
        return int(row[0])
