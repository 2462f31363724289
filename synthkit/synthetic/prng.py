"""Stateless seeded pseudo-random source.

Every draw is a pure function of its integer seed. Callers decorrelate
independent draws by offsetting the seed, using ``base + index * stride``
between records and a small field offset within a record.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")


def seeded_random(seed: int) -> float:
    """Return a float in ``[0, 1)`` derived from ``seed``.

    NaN or infinite seeds are not guarded against.
    """
    x = math.sin(seed) * 10000
    r = x - math.floor(x)
    # Rounding can push the fractional part of a tiny negative value to 1.0
    if r >= 1.0:
        return 0.0
    return r


def seeded_int(seed: int, low: int, high: int) -> int:
    """Integer in the inclusive range ``[low, high]``."""
    if high < low:
        raise ValueError(f"high ({high}) must be >= low ({low})")
    return low + int(seeded_random(seed) * (high - low + 1))


def seeded_choice(seed: int, options: Sequence[T]) -> T:
    """Pick one element of a non-empty sequence."""
    if not options:
        raise ValueError("cannot choose from an empty sequence")
    return options[int(seeded_random(seed) * len(options))]


def seeded_bool(seed: int, probability: float) -> bool:
    """True with the given probability."""
    return seeded_random(seed) < probability


def seeded_weighted_choice(seed: int, weighted: Sequence[tuple[T, float]]) -> T:
    """Pick from ``(value, weight)`` pairs in proportion to their weights."""
    if not weighted:
        raise ValueError("cannot choose from an empty sequence")
    total = sum(weight for _, weight in weighted)
    if total <= 0:
        raise ValueError("weights must sum to a positive value")
    target = seeded_random(seed) * total
    cumulative = 0.0
    for value, weight in weighted:
        cumulative += weight
        if target < cumulative:
            return value
    return weighted[-1][0]
