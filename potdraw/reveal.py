"""
Reveal layer: discloses a drawn schedule one match at a time.

Separates draw time from disclosure time. The schedule is complete before
the first match is shown; this module only paces it. Skip and cancel live on
an explicit RevealSession owned by the caller, so two reveals never share
state.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Iterator

from potdraw.models import Match, Phase, Schedule


@dataclass
class RevealConfig:
    """Reveal timing."""
    seconds_per_match: float = 0.8
    pause_between_days_seconds: float = 0.0
    fast_forward: bool = False  # if True, emit immediately (batch)


@dataclass
class RevealSession:
    """
    Per-reveal state. skip(): show everything left without waiting.
    cancel(): stop emitting.
    """
    skipped: bool = False
    cancelled: bool = False
    revealed: int = 0

    def skip(self) -> None:
        self.skipped = True

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(frozen=True)
class RevealEvent:
    day: int
    phase: Phase
    index: int  # position within the day, 0-based
    match: Match
    done: bool = False  # last match of the schedule
    first_of_day: bool = field(default=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "type": "match",
            "day": self.day,
            "phase": self.phase.value,
            "phase_label": self.phase.label,
            "index": self.index,
            "side1": self.match.side1,
            "side2": self.match.side2,
            "done": self.done,
        }


def reveal_events(schedule: Schedule) -> Iterator[RevealEvent]:
    """Every match in day order, then match order within the day."""
    total = len(schedule.all_matches())
    seen = 0
    for day in schedule.days:
        for idx, match in enumerate(day.matches):
            seen += 1
            yield RevealEvent(
                day=day.day,
                phase=day.phase,
                index=idx,
                match=match,
                done=seen == total,
                first_of_day=idx == 0,
            )


def _delay_before(event: RevealEvent, config: RevealConfig, session: RevealSession) -> float:
    if config.fast_forward or session.skipped:
        return 0.0
    delay = config.seconds_per_match
    if event.first_of_day and event.day > 1:
        delay += config.pause_between_days_seconds
    return delay


class SyncRevealer:
    """
    Re-emits a schedule's matches with delays between them.
    Blocking (sync); for async use async_reveal.
    """

    def __init__(
        self,
        config: RevealConfig | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or RevealConfig()
        self._sleep = sleep

    def run(
        self,
        schedule: Schedule,
        on_event: Callable[[RevealEvent], None],
        session: RevealSession | None = None,
    ) -> RevealSession:
        """Call on_event for each match. Returns the session with final counts."""
        session = session or RevealSession()
        for event in reveal_events(schedule):
            if session.cancelled:
                break
            delay = _delay_before(event, self.config, session)
            if delay > 0:
                self._sleep(delay)
            if session.cancelled:
                break
            # Counted before on_event runs; an interrupted match is not replayed
            session.revealed += 1
            on_event(event)
        return session


async def async_reveal(
    schedule: Schedule,
    config: RevealConfig | None = None,
    session: RevealSession | None = None,
) -> AsyncIterator[RevealEvent]:
    """
    Async generator: yields matches with delays between them.
    Suitable for WebSocket consumers; skip/cancel may be set from another task.
    """
    cfg = config or RevealConfig()
    state = session or RevealSession()
    for event in reveal_events(schedule):
        if state.cancelled:
            return
        delay = _delay_before(event, cfg, state)
        if delay > 0:
            await asyncio.sleep(delay)
        if state.cancelled:
            return
        state.revealed += 1
        yield event
