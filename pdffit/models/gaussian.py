"""
Simple one-dimensional pdf models.

Useful as resolution or background factors next to a Dalitz model, e.g. a
Gaussian in the reconstructed mother mass times a Decay3Body.
"""

from __future__ import annotations
import math
from typing import Dict

from .base import PdfModel
from ..variables import Parameter, Variable


class Gaussian(PdfModel):
    """Normal density in `x` with mean `mu` and width `sigma`."""

    def __init__(self, x: Variable, mu: Parameter, sigma: Parameter):
        super().__init__([x], [mu, sigma])
        self._x, self._mu, self._sigma = x.name, mu.name, sigma.name

    def _evaluate_point(self, point: Dict[str, float]) -> float:
        mu = self._par_map[self._mu].value
        sigma = self._par_map[self._sigma].value
        z = (point[self._x] - mu) / sigma
        return math.exp(-0.5 * z * z) / (math.sqrt(2.0 * math.pi) * abs(sigma))

    def evaluate(self) -> float:
        return self._evaluate_point({self._x: self._var_map[self._x].value})


class Exponential(PdfModel):
    """
    Exponential density exp(-λ x) normalised on [low, high].

    The normalisation depends on λ and is recomputed by cache().
    """

    def __init__(self, x: Variable, lam: Parameter, low: float, high: float):
        if not high > low:
            raise ValueError(f"Invalid range [{low}, {high}]")
        super().__init__([x], [lam])
        self._x, self._lam = x.name, lam.name
        self.low, self.high = float(low), float(high)
        self._norm = 1.0
        self.cache()

    def cache(self) -> None:
        lam = self._par_map[self._lam].value
        if lam == 0.0:
            self._norm = self.high - self.low
        else:
            self._norm = (math.exp(-lam * self.low) - math.exp(-lam * self.high)) / lam

    def _evaluate_point(self, point: Dict[str, float]) -> float:
        x = point[self._x]
        if not self.low <= x <= self.high:
            return 0.0
        return math.exp(-self._par_map[self._lam].value * x) / self._norm

    def evaluate(self) -> float:
        return self._evaluate_point({self._x: self._var_map[self._x].value})
