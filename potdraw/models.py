"""
Data models for the pot draw.
Domain objects only — no persistence or API logic.

A draw splits 16 teams into two pots of eight; days 1–4 are same-pot
rounds, days 5–8 are cross-pot rounds. Everything here is immutable value
data created fresh for each draw.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


# ---------- Phase ----------
class Phase(str, Enum):
    """Which half of the draw a match day belongs to."""
    SAME_POT = "same-pot"    # Days 1–4, internal fixtures
    CROSS_POT = "cross-pot"  # Days 5–8, external fixtures

    @property
    def label(self) -> str:
        return _PHASE_LABELS[self]


_PHASE_LABELS = {
    Phase.SAME_POT: "Internal (Same Pot)",
    Phase.CROSS_POT: "External (Cross Pot)",
}


# ---------- Match ----------
@dataclass(frozen=True)
class Match:
    """
    Two distinct teams. side1/side2 are display positions only; there is
    no home/away meaning.
    """
    side1: str
    side2: str

    def __post_init__(self) -> None:
        if self.side1 == self.side2:
            raise ValueError(f"A team cannot be paired with itself: {self.side1!r}")

    def pair(self) -> frozenset[str]:
        return frozenset((self.side1, self.side2))

    def involves(self, team: str) -> bool:
        return team == self.side1 or team == self.side2

    def to_dict(self) -> dict[str, str]:
        return {"side1": self.side1, "side2": self.side2}

    @classmethod
    def from_dict(cls, data: Any) -> Match:
        # Older clients sent positional pairs: ["Team A", "Team B"]
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"Match needs exactly two teams, got {len(data)}")
            return cls(side1=str(data[0]), side2=str(data[1]))
        return cls(side1=str(data["side1"]), side2=str(data["side2"]))


# One day's games, as produced by the fixture generators.
Round = list[Match]


# ---------- MatchDay ----------
@dataclass(frozen=True)
class MatchDay:
    """One numbered day (1–8) of the schedule."""
    day: int
    phase: Phase
    matches: tuple[Match, ...]

    def teams(self) -> list[str]:
        out: list[str] = []
        for m in self.matches:
            out.extend((m.side1, m.side2))
        return out

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "phase": self.phase.value,
            "matches": [m.to_dict() for m in self.matches],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MatchDay:
        return cls(
            day=int(data["day"]),
            phase=_parse_phase(data.get("phase") or data.get("type", "")),
            matches=tuple(Match.from_dict(m) for m in data["matches"]),
        )


def _parse_phase(value: str) -> Phase:
    try:
        return Phase(value)
    except ValueError:
        pass
    # Accept the display labels as well, e.g. "Internal (Same Pot)"
    for phase, label in _PHASE_LABELS.items():
        if value == label:
            return phase
    raise ValueError(f"Unknown phase: {value!r}")


# ---------- Schedule ----------
@dataclass(frozen=True)
class Schedule:
    """
    The full draw: 8 match days plus the two pots and the team list as
    entered. Pot order is seed order (display only).
    """
    days: tuple[MatchDay, ...]
    pot_a: tuple[str, ...]
    pot_b: tuple[str, ...]
    teams: tuple[str, ...] = field(default=())

    def same_pot_days(self) -> list[MatchDay]:
        return [d for d in self.days if d.phase == Phase.SAME_POT]

    def cross_pot_days(self) -> list[MatchDay]:
        return [d for d in self.days if d.phase == Phase.CROSS_POT]

    def all_matches(self) -> list[Match]:
        return [m for d in self.days for m in d.matches]

    def pot_of(self, team: str) -> str | None:
        if team in self.pot_a:
            return "A"
        if team in self.pot_b:
            return "B"
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": [d.to_dict() for d in self.days],
            "pot_a": list(self.pot_a),
            "pot_b": list(self.pot_b),
            "teams": list(self.teams),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Schedule:
        return cls(
            days=tuple(MatchDay.from_dict(d) for d in data["days"]),
            pot_a=tuple(data.get("pot_a", ())),
            pot_b=tuple(data.get("pot_b", ())),
            teams=tuple(data.get("teams", ())),
        )


# ---------- SavedSchedule ----------
@dataclass
class SavedSchedule:
    """A schedule as stored by one of the persistence backends."""
    id: str
    schedule: Schedule
    created_at: datetime
    backend: str

    def to_dict(self) -> dict[str, Any]:
        d = self.schedule.to_dict()
        d.update({
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "backend": self.backend,
        })
        return d


# ---------- SaveResult ----------
@dataclass
class SaveResult:
    """Outcome of ScheduleStore.save. ok=False only when every backend failed."""
    ok: bool
    backend: str
    record_id: str | None = None
    fallback_used: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "ok": self.ok,
            "backend": self.backend,
            "record_id": self.record_id,
            "fallback_used": self.fallback_used,
        }
        if self.error is not None:
            d["error"] = self.error
        return d
