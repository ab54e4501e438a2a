"""
Deterministic fixture generation for the two-pot format.

Same-pot days use the circle method: fix the first team, rotate the rest one
place each round. A full round-robin of 8 teams takes 7 rounds; the format
only plays 4 same-pot days, so the first 4 rounds are kept and each team
meets 4 of its 7 pot-mates, each at most once.

Cross-pot days use a cyclic offset: in round r, pot_a[i] meets
pot_b[(i + r) % n]. Offsets 0..3 are distinct, so no pairing repeats.

Same pot order yields the same fixtures; randomness comes only from the
caller shuffling teams into pots and shuffling match order afterwards.
"""
from __future__ import annotations

from typing import Sequence

from potdraw.models import Match, Round

# Same-pot and cross-pot days in the format
INTERNAL_ROUNDS = 4
EXTERNAL_ROUNDS = 4


class PotSizeError(ValueError):
    """Generator called with pots it cannot pair (odd size, mismatched sizes)."""


def _circle_rounds(pot: Sequence[str]) -> list[Round]:
    n = len(pot)
    fixed = pot[0]
    rotating = list(pot[1:])
    rounds: list[Round] = []
    for _ in range(n - 1):
        # Fixed team meets the head; remaining pairs close in from both ends
        matches = [Match(fixed, rotating[0])]
        for j in range(1, n // 2):
            matches.append(Match(rotating[j], rotating[len(rotating) - j]))
        rounds.append(matches)
        rotating.append(rotating.pop(0))
    return rounds


def _check_pot(pot: Sequence[str]) -> None:
    if len(pot) < 2 or len(pot) % 2 == 1:
        raise PotSizeError(f"Pot size must be even and at least 2, got {len(pot)}")


def full_round_robin(pot: Sequence[str]) -> list[Round]:
    """All n-1 circle-method rounds for an even-sized pot."""
    _check_pot(pot)
    return _circle_rounds(pot)


def generate_internal_fixtures(pot: Sequence[str], rounds: int = INTERNAL_ROUNDS) -> list[Round]:
    """
    First `rounds` circle-method rounds for one pot.
    Each round is a perfect matching over the pot; no pair appears twice.
    """
    _check_pot(pot)
    if rounds < 0 or rounds > len(pot) - 1:
        raise PotSizeError(f"A pot of {len(pot)} has {len(pot) - 1} rounds, asked for {rounds}")
    return _circle_rounds(pot)[:rounds]


def generate_external_fixtures(
    pot_a: Sequence[str],
    pot_b: Sequence[str],
    rounds: int = EXTERNAL_ROUNDS,
) -> list[Round]:
    """
    Cyclic-offset pairings between two equal pots.
    Round r: pot_a[i] vs pot_b[(i + r) % n], for every i.
    """
    n = len(pot_a)
    if n == 0 or n != len(pot_b):
        raise PotSizeError(f"Pots must be non-empty and equal in size, got {n} and {len(pot_b)}")
    if rounds < 0 or rounds > n:
        raise PotSizeError(f"At most {n} distinct offsets for pots of {n}, asked for {rounds}")
    return [
        [Match(pot_a[i], pot_b[(i + r) % n]) for i in range(n)]
        for r in range(rounds)
    ]
