"""
Persistence layer for saved draws.
No business logic, no drawing — only read/write interfaces.
"""
from .db import get_connection, init_db
from .repositories import ScheduleRepository
from .store import (
    FallbackScheduleStore,
    LocalFileScheduleStore,
    NullScheduleStore,
    ScheduleStore,
    SqliteScheduleStore,
    StoreUnavailableError,
    build_store,
)

__all__ = [
    "get_connection",
    "init_db",
    "ScheduleRepository",
    "ScheduleStore",
    "NullScheduleStore",
    "SqliteScheduleStore",
    "LocalFileScheduleStore",
    "FallbackScheduleStore",
    "StoreUnavailableError",
    "build_store",
]
