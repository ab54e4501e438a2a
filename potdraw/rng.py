"""
RNG wrappers for the draw: seeded for reproducible draws, identity for tests.
"""
from __future__ import annotations

import random


class SeededRNG:
    """Wrapper around random.Random so a draw can be replayed from its seed."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


class IdentityRNG:
    """
    Always picks the upper bound. Under Fisher–Yates this swaps every
    element with itself, so shuffles leave their input order unchanged.
    """

    def randint(self, a: int, b: int) -> int:
        return b
