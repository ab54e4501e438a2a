"""
Draw service: validate teams, split into pots, build the 8 match days.
compose_schedule is pure apart from randomness; DrawService adds persistence.
"""
from __future__ import annotations

import logging
import sqlite3
from typing import Iterable

from potdraw.models import MatchDay, Phase, SavedSchedule, SaveResult, Schedule
from potdraw.persistence.store import NullScheduleStore, ScheduleStore, StoreUnavailableError
from potdraw.services.randomizer import RandomSource, shuffle
from potdraw.services.scheduling import (
    EXTERNAL_ROUNDS,
    INTERNAL_ROUNDS,
    generate_external_fixtures,
    generate_internal_fixtures,
)
from potdraw.services.validation import POT_SIZE, parse_team_input, validate_teams

logger = logging.getLogger(__name__)


def split_pots(teams: list[str], rng: RandomSource | None = None) -> tuple[list[str], list[str]]:
    """Shuffle and cut in half. Position within a pot is the team's seed."""
    drawn = shuffle(teams, rng)
    return drawn[:POT_SIZE], drawn[POT_SIZE:]


def compose_schedule(teams: Iterable[str], rng: RandomSource | None = None) -> Schedule:
    """
    Draw a full schedule for 16 teams.
    Days 1–4: one same-pot round from each pot, merged and shuffled.
    Days 5–8: one cross-pot round each, shuffled.
    Raises InvalidTeamCount / DuplicateTeamError before anything is drawn.
    """
    entered = validate_teams(teams)
    pot_a, pot_b = split_pots(entered, rng)

    internal_a = generate_internal_fixtures(pot_a)
    internal_b = generate_internal_fixtures(pot_b)
    external = generate_external_fixtures(pot_a, pot_b)

    days: list[MatchDay] = []
    for i in range(INTERNAL_ROUNDS):
        combined = shuffle(internal_a[i] + internal_b[i], rng)
        days.append(MatchDay(day=i + 1, phase=Phase.SAME_POT, matches=tuple(combined)))
    for i in range(EXTERNAL_ROUNDS):
        matches = shuffle(external[i], rng)
        days.append(MatchDay(day=INTERNAL_ROUNDS + i + 1, phase=Phase.CROSS_POT, matches=tuple(matches)))

    return Schedule(days=tuple(days), pot_a=tuple(pot_a), pot_b=tuple(pot_b), teams=tuple(entered))


# ---------- DrawService ----------


class DrawService:
    """
    Draws schedules and hands them to a store.
    The store never influences schedule content.
    """

    def __init__(self, store: ScheduleStore | None = None) -> None:
        self.store: ScheduleStore = store if store is not None else NullScheduleStore()

    def draw(self, teams: Iterable[str], rng: RandomSource | None = None) -> tuple[Schedule, SaveResult]:
        schedule = compose_schedule(teams, rng)
        logger.info(
            "Drew schedule: pot A %s, pot B %s",
            ", ".join(schedule.pot_a),
            ", ".join(schedule.pot_b),
        )
        try:
            result = self.store.save(schedule)
        except (StoreUnavailableError, sqlite3.Error, OSError) as e:
            result = SaveResult(ok=False, backend=self.store.name, error=str(e))
        if not result.ok:
            logger.error("Schedule drawn but not saved: %s", result.error)
        return schedule, result

    def draw_from_text(self, text: str, rng: RandomSource | None = None) -> tuple[Schedule, SaveResult]:
        """Same as draw, for one-team-per-line input."""
        return self.draw(parse_team_input(text), rng)

    def save(self, schedule: Schedule) -> SaveResult:
        return self.store.save(schedule)

    def get(self, schedule_id: str) -> SavedSchedule | None:
        return self.store.get(schedule_id)

    def history(self, limit: int = 20) -> list[SavedSchedule]:
        return self.store.list_recent(limit)
