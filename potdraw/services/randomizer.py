"""
Unbiased shuffle used for pot assignment and per-day match order.
"""
from __future__ import annotations

import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def shuffle(items: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """
    Return a uniformly random permutation of items (Fisher–Yates).
    The input is not modified. Equal values are treated as distinct positions.
    rng defaults to the random module's shared generator.
    """
    source = rng if rng is not None else random
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = source.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out
