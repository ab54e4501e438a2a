"""
Input checks that run before any pot is drawn.
"""
from __future__ import annotations

from collections import Counter
from typing import Iterable

TEAM_COUNT = 16
POT_SIZE = TEAM_COUNT // 2


class DrawValidationError(ValueError):
    """Team list cannot be drawn. Caller should fix the input and retry."""


class InvalidTeamCount(DrawValidationError):
    """Not exactly TEAM_COUNT teams after trimming and dropping blanks."""

    def __init__(self, count: int, expected: int = TEAM_COUNT) -> None:
        self.count = count
        self.expected = expected
        super().__init__(f"Invalid number of teams: got {count}, need {expected}")


class DuplicateTeamError(DrawValidationError):
    """The same team name was entered more than once."""

    def __init__(self, duplicates: list[str]) -> None:
        self.duplicates = duplicates
        super().__init__(f"Duplicate team names: {', '.join(duplicates)}")


def clean_team_names(names: Iterable[str]) -> list[str]:
    """Trim each name and drop the ones left empty."""
    return [n.strip() for n in names if n and n.strip()]


def parse_team_input(text: str) -> list[str]:
    """One team per line, as typed into the entry box."""
    return clean_team_names(text.splitlines())


def validate_teams(names: Iterable[str], expected: int = TEAM_COUNT) -> list[str]:
    """Return the cleaned list, or raise if it cannot be drawn."""
    teams = clean_team_names(names)
    if len(teams) != expected:
        raise InvalidTeamCount(len(teams), expected)
    dupes = [name for name, c in Counter(teams).items() if c > 1]
    if dupes:
        raise DuplicateTeamError(dupes)
    return teams
