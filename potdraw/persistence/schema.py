"""
SQLite schema for saved draws.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def schedules_schema() -> str:
    """One row per draw. teams/pot_a/pot_b/schedule are JSON text."""
    return """
    CREATE TABLE IF NOT EXISTS schedules (
        id TEXT PRIMARY KEY,
        teams TEXT NOT NULL,
        pot_a TEXT NOT NULL,
        pot_b TEXT NOT NULL,
        schedule TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS ix_schedules_created ON schedules(created_at);
    """


def all_schema_sql() -> str:
    return schedules_schema()
