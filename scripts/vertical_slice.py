#!/usr/bin/env python3
"""
Vertical slice: Draw pots → Build schedule → Persist → Retrieve.
Run from project root: python3 scripts/vertical_slice.py
"""
from __future__ import annotations

import sys
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from potdraw.persistence import ScheduleRepository, get_connection, init_db
from potdraw.persistence.db import set_db_path
from potdraw.render import format_schedule_text
from potdraw.rng import SeededRNG
from potdraw.services.draw_service import compose_schedule


def main() -> None:
    # Use data/vertical_slice.db for demo (distinct from potdraw.db)
    db_path = PROJECT_ROOT / "data" / "vertical_slice.db"
    set_db_path(db_path)
    init_db(db_path=db_path)

    conn = get_connection()
    try:
        repo = ScheduleRepository()

        # 1. Draw with a fixed seed so reruns match
        teams = [f"Team {i:02d}" for i in range(1, 17)]
        schedule = compose_schedule(teams, SeededRNG(2026))
        print(f"Pot A: {', '.join(schedule.pot_a)}")
        print(f"Pot B: {', '.join(schedule.pot_b)}")

        # 2. Persist
        saved = repo.create(conn, schedule)
        print(f"Persisted schedule: {saved.id}")

        # 3. Retrieve
        retrieved = repo.get(conn, saved.id)
        assert retrieved is not None
        assert retrieved.schedule == schedule
        print(f"Retrieved schedule: id={retrieved.id}, days={len(retrieved.schedule.days)}")
        print()
        print(format_schedule_text(retrieved.schedule))

        print("Vertical slice complete.")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
