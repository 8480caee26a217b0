"""Seedable source of uniformly distributed random numbers."""

from __future__ import annotations

import math
import random as _random
from typing import MutableSequence, TypeVar

_T = TypeVar("_T")
_N = TypeVar("_N", int, float)


class Random:
    """Uniform random floats over a few fixed ranges, optionally seeded."""

    def __init__(self, seed: int | None = None) -> None:
        self._gen = _random.Random(seed)

    def _uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self._gen.random()

    def rand01(self) -> float:
        """Return a float in [0, 1)."""
        return self._gen.random()

    def rand005(self) -> float:
        """Return a float in [0, 0.5)."""
        return self._uniform(0.0, 0.5)

    def rand051(self) -> float:
        """Return a float in [0.5, 1)."""
        return self._uniform(0.5, 1.0)

    def rand11(self) -> float:
        """Return a float in [-1, 1)."""
        return self._uniform(-1.0, 1.0)

    def rand0pi(self) -> float:
        """Return an angle in [0, 2*pi)."""
        return self._uniform(0.0, 2.0 * math.pi)

    def rand(self, a: _N, b: _N) -> _N:
        """Return a value between ``a`` and ``b`` converted to the type of ``a``.

        For integers the result lies in ``[a, b)``.
        """
        return a + type(a)(self.rand01() * (b - a))

    def shuffle(self, items: MutableSequence[_T]) -> None:
        """Shuffle ``items`` in place."""
        for i in range(len(items)):
            r = self.rand(0, i + 1)
            items[i], items[r] = items[r], items[i]


static_rand = Random()
"""Process-wide generator used when no explicit one is given."""