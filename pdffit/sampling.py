"""
Uniform random sampling for accept-reject generation.

Thin wrapper over numpy.random.Generator so that generation can be seeded
and reproduced.
"""

from __future__ import annotations
from typing import Optional

import numpy as np


class Sampler:

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng(seed)

    def flat(self, low: float, high: float) -> float:
        """Uniform draw in [low, high)."""
        return float(self.rng.uniform(low, high))
