"""
Tests for environment-driven settings.
"""
from __future__ import annotations

from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from potdraw.config import DEFAULT_REVEAL_SECONDS, load_settings

_VARS = (
    "POTDRAW_STORE",
    "POTDRAW_DB_PATH",
    "POTDRAW_FALLBACK_PATH",
    "POTDRAW_REVEAL_SECONDS",
    "POTDRAW_CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = load_settings()
    assert s.store_backend == "sqlite"
    assert s.db_path.name == "potdraw.db"
    assert s.fallback_path.name == "schedules_local.json"
    assert s.reveal_seconds == DEFAULT_REVEAL_SECONDS
    assert s.cors_origins == ("*",)


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("POTDRAW_STORE", "Local")
    monkeypatch.setenv("POTDRAW_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("POTDRAW_FALLBACK_PATH", str(tmp_path / "x.json"))
    monkeypatch.setenv("POTDRAW_REVEAL_SECONDS", "0")
    monkeypatch.setenv("POTDRAW_CORS_ORIGINS", "http://a.test, http://b.test")
    s = load_settings()
    assert s.store_backend == "local"
    assert s.db_path == tmp_path / "x.db"
    assert s.fallback_path == tmp_path / "x.json"
    assert s.reveal_seconds == 0.0
    assert s.cors_origins == ("http://a.test", "http://b.test")


@pytest.mark.parametrize(
    "name,value",
    [("POTDRAW_STORE", "mongo"), ("POTDRAW_REVEAL_SECONDS", "soon"), ("POTDRAW_REVEAL_SECONDS", "-1")],
)
def test_bad_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        load_settings()
