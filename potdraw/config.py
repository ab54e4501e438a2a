"""
Runtime settings, read from the environment.

POTDRAW_STORE           none | sqlite | local   (default sqlite, with local fallback)
POTDRAW_DB_PATH         SQLite file             (default data/potdraw.db)
POTDRAW_FALLBACK_PATH   local JSON history      (default data/schedules_local.json)
POTDRAW_REVEAL_SECONDS  delay between revealed matches
POTDRAW_CORS_ORIGINS    comma-separated origins for the API
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

STORE_BACKENDS = ("none", "sqlite", "local")
DEFAULT_REVEAL_SECONDS = 0.8


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    store_backend: str
    db_path: Path
    fallback_path: Path
    reveal_seconds: float
    cors_origins: tuple[str, ...]


def load_settings() -> Settings:
    """Build Settings from the current environment. Raises ValueError on bad values."""
    root = _project_root()
    backend = os.environ.get("POTDRAW_STORE", "sqlite").strip().lower()
    if backend not in STORE_BACKENDS:
        raise ValueError(f"POTDRAW_STORE must be one of {STORE_BACKENDS}, got {backend!r}")
    db_path = os.environ.get("POTDRAW_DB_PATH", "").strip()
    fallback_path = os.environ.get("POTDRAW_FALLBACK_PATH", "").strip()
    raw_seconds = os.environ.get("POTDRAW_REVEAL_SECONDS", "").strip()
    try:
        reveal_seconds = float(raw_seconds) if raw_seconds else DEFAULT_REVEAL_SECONDS
    except ValueError as e:
        raise ValueError(f"POTDRAW_REVEAL_SECONDS must be a number, got {raw_seconds!r}") from e
    if reveal_seconds < 0:
        raise ValueError("POTDRAW_REVEAL_SECONDS must not be negative")
    origins = os.environ.get("POTDRAW_CORS_ORIGINS", "*")
    return Settings(
        store_backend=backend,
        db_path=Path(db_path) if db_path else root / "data" / "potdraw.db",
        fallback_path=Path(fallback_path) if fallback_path else root / "data" / "schedules_local.json",
        reveal_seconds=reveal_seconds,
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
