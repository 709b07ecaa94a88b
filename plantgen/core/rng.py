"""
Random source for one generation run.
"""

from typing import Optional
import numpy as np


class PlantRng:
    """
    Pseudo-random source owned by exactly one generation run.

    Wraps a local ``numpy.random.Generator`` (never the global numpy
    state), so concurrent runs cannot disturb each other's streams.

    Parameters
    ----------
    seed : int, optional
        Seed for a reproducible stream. None draws fresh OS entropy.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._gen = np.random.default_rng(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._gen.random())

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high); returns ``low`` for an empty range."""
        if high <= low:
            return float(low)
        return float(self._gen.uniform(low, high))

    def symmetric(self, bound: float) -> float:
        """Uniform float in [-bound, bound)."""
        return self.uniform(-bound, bound)

    def angle(self) -> float:
        """Uniform angle in [-pi, pi)."""
        return self.uniform(-np.pi, np.pi)

    def integers_inclusive(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]."""
        return int(self._gen.integers(low, high, endpoint=True))
