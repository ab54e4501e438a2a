"""
Tests for paced reveal: ordering, delays, skip and cancel.
"""
from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from potdraw.reveal import (
    RevealConfig,
    RevealSession,
    SyncRevealer,
    async_reveal,
    reveal_events,
)
from potdraw.rng import SeededRNG
from potdraw.services.draw_service import compose_schedule

TEAMS = [f"T{i}" for i in range(1, 17)]


@pytest.fixture
def schedule():
    return compose_schedule(TEAMS, SeededRNG(11))


def test_reveal_events_in_day_order(schedule):
    events = list(reveal_events(schedule))
    assert len(events) == 64
    assert [e.day for e in events] == sorted(e.day for e in events)
    assert [e.match for e in events] == schedule.all_matches()
    assert sum(e.done for e in events) == 1 and events[-1].done
    assert sum(e.first_of_day for e in events) == 8


def test_event_to_dict(schedule):
    first = next(reveal_events(schedule))
    d = first.to_dict()
    assert d["type"] == "match"
    assert d["day"] == 1
    assert d["phase"] == "same-pot"
    assert d["phase_label"] == "Internal (Same Pot)"
    assert {d["side1"], d["side2"]} == set(first.match.pair())


def test_sync_reveal_sleeps_between_matches(schedule):
    sleeps = []
    revealer = SyncRevealer(RevealConfig(seconds_per_match=0.5), sleep=sleeps.append)
    shown = []
    session = revealer.run(schedule, shown.append)
    assert len(shown) == 64
    assert session.revealed == 64
    assert sleeps == [0.5] * 64


def test_sync_reveal_pause_between_days(schedule):
    sleeps = []
    config = RevealConfig(seconds_per_match=1.0, pause_between_days_seconds=2.0)
    SyncRevealer(config, sleep=sleeps.append).run(schedule, lambda ev: None)
    # Days 2..8 start with an extra pause
    assert sleeps.count(3.0) == 7
    assert sleeps.count(1.0) == 57


def test_fast_forward_never_sleeps(schedule):
    sleeps = []
    revealer = SyncRevealer(RevealConfig(fast_forward=True), sleep=sleeps.append)
    revealer.run(schedule, lambda ev: None)
    assert sleeps == []


def test_skip_flushes_the_rest(schedule):
    sleeps = []
    session = RevealSession()
    shown = []

    def on_event(ev):
        shown.append(ev)
        if len(shown) == 3:
            session.skip()

    SyncRevealer(RevealConfig(seconds_per_match=1.0), sleep=sleeps.append).run(schedule, on_event, session)
    assert len(shown) == 64
    assert len(sleeps) == 3
    assert session.skipped


def test_cancel_stops_emission(schedule):
    session = RevealSession()
    shown = []

    def on_event(ev):
        shown.append(ev)
        if len(shown) == 10:
            session.cancel()

    SyncRevealer(RevealConfig(fast_forward=True)).run(schedule, on_event, session)
    assert len(shown) == 10
    assert session.revealed == 10


def test_sessions_are_independent(schedule):
    a, b = RevealSession(), RevealSession()
    a.skip()
    assert not b.skipped


def test_async_reveal_yields_all(schedule):
    async def collect():
        return [ev async for ev in async_reveal(schedule, RevealConfig(seconds_per_match=0.0))]

    events = asyncio.run(collect())
    assert len(events) == 64
    assert events[-1].done


def test_async_reveal_cancel(schedule):
    session = RevealSession()

    async def collect():
        out = []
        async for ev in async_reveal(schedule, RevealConfig(fast_forward=True), session):
            out.append(ev)
            if len(out) == 5:
                session.cancel()
        return out

    assert len(asyncio.run(collect())) == 5


def test_interrupt_during_event_counts_the_match(schedule):
    session = RevealSession()
    shown = []

    def on_event(ev):
        shown.append(ev)
        if len(shown) == 3:
            raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        SyncRevealer(RevealConfig(fast_forward=True)).run(schedule, on_event, session)
    assert session.revealed == 3
    rest = list(reveal_events(schedule))[session.revealed:]
    assert rest[0].match == schedule.all_matches()[3]
