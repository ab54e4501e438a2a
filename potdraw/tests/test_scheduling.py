"""
Tests for same-pot (circle method) and cross-pot (cyclic offset) fixtures.
Deterministic; perfect matching per round; no repeated pairing.
"""
from __future__ import annotations

from itertools import combinations
from pathlib import Path

import pytest

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from potdraw.services.scheduling import (
    PotSizeError,
    full_round_robin,
    generate_external_fixtures,
    generate_internal_fixtures,
)

POT_A = [f"T{i}" for i in range(1, 9)]
POT_B = [f"T{i}" for i in range(9, 17)]


def _pairs(rnd):
    return [(m.side1, m.side2) for m in rnd]


def test_internal_first_round_matches_circle_method():
    """Fixed team meets the head of the rotation; the rest pair from both ends inward."""
    rounds = generate_internal_fixtures(POT_A)
    assert _pairs(rounds[0]) == [("T1", "T2"), ("T3", "T8"), ("T4", "T7"), ("T5", "T6")]


def test_internal_second_round_after_rotation():
    """Rotation moves the head to the back: [T3..T8, T2]."""
    rounds = generate_internal_fixtures(POT_A)
    assert _pairs(rounds[1]) == [("T1", "T3"), ("T4", "T2"), ("T5", "T8"), ("T6", "T7")]


def test_internal_returns_four_rounds_of_four():
    rounds = generate_internal_fixtures(POT_A)
    assert len(rounds) == 4
    assert all(len(r) == 4 for r in rounds)


def test_internal_each_round_is_perfect_matching():
    for rnd in generate_internal_fixtures(POT_A):
        seen = [t for m in rnd for t in (m.side1, m.side2)]
        assert sorted(seen) == sorted(POT_A)


def test_internal_no_pair_repeats():
    pairs = [m.pair() for rnd in generate_internal_fixtures(POT_A) for m in rnd]
    assert len(pairs) == 16
    assert len(set(pairs)) == 16


def test_internal_each_team_meets_four_potmates():
    rounds = generate_internal_fixtures(POT_A)
    for team in POT_A:
        opponents = {
            (m.side2 if m.side1 == team else m.side1)
            for rnd in rounds for m in rnd if m.involves(team)
        }
        assert len(opponents) == 4
        assert team not in opponents


def test_internal_is_prefix_of_full_round_robin():
    full = full_round_robin(POT_A)
    assert len(full) == 7
    assert generate_internal_fixtures(POT_A) == full[:4]
    # All 28 pairs exactly once across the full 7 rounds
    pairs = {m.pair() for rnd in full for m in rnd}
    assert pairs == {frozenset(p) for p in combinations(POT_A, 2)}


def test_internal_deterministic():
    assert generate_internal_fixtures(POT_A) == generate_internal_fixtures(list(POT_A))


def test_internal_generalises_to_other_even_sizes():
    rounds = generate_internal_fixtures(["A", "B", "C", "D"], rounds=3)
    pairs = {m.pair() for rnd in rounds for m in rnd}
    assert pairs == {frozenset(p) for p in combinations("ABCD", 2)}


@pytest.mark.parametrize("size", [0, 1, 7])
def test_internal_rejects_odd_or_tiny_pot(size):
    with pytest.raises(PotSizeError):
        generate_internal_fixtures([f"X{i}" for i in range(size)])


def test_internal_rejects_too_many_rounds():
    with pytest.raises(PotSizeError):
        generate_internal_fixtures(POT_A, rounds=8)


def test_external_first_round_is_index_aligned():
    rounds = generate_external_fixtures(POT_A, POT_B)
    assert _pairs(rounds[0]) == [(f"T{i}", f"T{i + 8}") for i in range(1, 9)]


def test_external_offsets_follow_index_plus_round():
    rounds = generate_external_fixtures(POT_A, POT_B)
    assert len(rounds) == 4
    for r, rnd in enumerate(rounds):
        for i, m in enumerate(rnd):
            assert m.side1 == POT_A[i]
            assert m.side2 == POT_B[(i + r) % 8]


def test_external_each_team_meets_four_distinct_opponents():
    rounds = generate_external_fixtures(POT_A, POT_B)
    for team in POT_A:
        opponents = [m.side2 for rnd in rounds for m in rnd if m.side1 == team]
        assert len(opponents) == 4
        assert len(set(opponents)) == 4
        assert set(opponents) <= set(POT_B)


def test_external_each_round_covers_both_pots():
    for rnd in generate_external_fixtures(POT_A, POT_B):
        assert sorted(m.side1 for m in rnd) == sorted(POT_A)
        assert sorted(m.side2 for m in rnd) == sorted(POT_B)


def test_external_rejects_mismatched_pots():
    with pytest.raises(PotSizeError):
        generate_external_fixtures(POT_A, POT_B[:7])
    with pytest.raises(PotSizeError):
        generate_external_fixtures([], [])
