"""Deterministic linear congruential random generator used by the game."""

from __future__ import annotations

import math

RANDOM_MOD = 1 << 31
RANDOM_MASK = RANDOM_MOD - 1
_MAX_RANGE = 10**6


class RandomGenerator:
    """A small seeded generator that gives the same sequence on every platform."""

    def __init__(self, seed: int = 0):
        self._seed = 0
        self.set_random_seed(seed)

    def set_random_seed(self, seed: int) -> None:
        """Restart the sequence from ``seed``; negative seeds act as their absolute value."""
        self._seed = abs(seed) & RANDOM_MASK

    def _next(self) -> None:
        self._seed = (843314861 * self._seed + 453816693) & RANDOM_MASK

    def uniform(self) -> float:
        """Return a real number in [0, 1)."""
        self._next()
        return self._seed / RANDOM_MOD

    def random(self, low: int, high: int) -> int:
        """Return an integer in [low, high]; an empty or too long interval gives ``low``."""
        if low > high:
            return low
        if high - low + 1 > _MAX_RANGE:
            return low
        self._next()
        return low + int((high - low + 1) * self.uniform())

    def random_permutation(self, n: int) -> list[int]:
        """Return a random permutation of range(n); an out-of-range n gives []."""
        if n < 0 or n > _MAX_RANGE:
            return []
        values = list(range(n))
        for i in range(n):
            k = self.random(i, n - 1)
            values[i], values[k] = values[k], values[i]
        return values

    def bernoulli(self, p: float) -> bool:
        """Return True with probability ``p`` (in steps of 1/10000)."""
        n = 10000
        draw = self.random(1, n)
        scaled = n * p
        if math.isnan(scaled):
            threshold = 0
        else:
            threshold = int(max(-1.0, min(scaled, n + 1.0)))
        return draw <= threshold