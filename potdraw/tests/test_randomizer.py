"""
Tests for the Fisher–Yates shuffle and the RNG wrappers.
"""
from __future__ import annotations

from collections import Counter
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from potdraw.rng import IdentityRNG, SeededRNG
from potdraw.services.randomizer import shuffle


class _RecordingRNG:
    """Returns scripted picks and remembers the bounds it was asked for."""

    def __init__(self, picks):
        self.picks = list(picks)
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.picks.pop(0)


def test_shuffle_keeps_every_element():
    items = list(range(16))
    out = shuffle(items)
    assert sorted(out) == items


def test_shuffle_does_not_modify_input():
    items = ["a", "b", "c", "d"]
    shuffle(items, SeededRNG(3))
    assert items == ["a", "b", "c", "d"]


def test_shuffle_duplicates_are_distinct_positions():
    items = ["x", "x", "y", "y", "y"]
    assert Counter(shuffle(items, SeededRNG(1))) == Counter(items)


def test_identity_rng_leaves_order_unchanged():
    items = [f"T{i}" for i in range(1, 17)]
    assert shuffle(items, IdentityRNG()) == items


def test_shuffle_walks_down_from_last_index():
    """i runs len-1..1 and j is drawn from 0..i inclusive."""
    rng = _RecordingRNG([0, 0, 0])
    out = shuffle(["a", "b", "c", "d"], rng)
    assert rng.calls == [(0, 3), (0, 2), (0, 1)]
    # swap(3,0) -> d b c a; swap(2,0) -> c b d a; swap(1,0) -> b c d a
    assert out == ["b", "c", "d", "a"]


def test_seeded_shuffle_is_reproducible():
    items = list(range(20))
    assert shuffle(items, SeededRNG(42)) == shuffle(items, SeededRNG(42))
    assert SeededRNG(42).seed == 42


def test_shuffle_trivial_inputs():
    assert shuffle([]) == []
    assert shuffle(["solo"]) == ["solo"]


def test_shuffle_reaches_every_permutation_of_three():
    rng = SeededRNG(7)
    seen = {tuple(shuffle("abc", rng)) for _ in range(300)}
    assert len(seen) == 6


def test_rng_wrappers_only_offer_randint():
    # shuffle is the only consumer and draws through randint alone
    for rng in (SeededRNG(3), IdentityRNG()):
        assert not hasattr(rng, "random")
    assert not hasattr(IdentityRNG(), "seed")
