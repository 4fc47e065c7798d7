"""
Three-body phase space (Dalitz plot) of a decay M -> 1 2 3.

Provides the kinematic limits of the squared invariant masses
    m12² = (p1 + p2)²,  m13² = (p1 + p3)²,  m23² = (p2 + p3)²
and the membership test of the kinematically allowed region. The three
squared masses are not independent:
    m12² + m13² + m23² = M² + m1² + m2² + m3².

Axis indices used throughout: 0 -> m12², 1 -> m13², 2 -> m23².
"""

from __future__ import annotations
import numpy as np

from .kinematics import msq23_limits


class PhaseSpace:

    def __init__(self, m_mother: float, m1: float, m2: float, m3: float, tolerance: float = 1e-9):
        masses = [m1, m2, m3]
        if any(m < 0 for m in masses):
            raise ValueError("All masses must be non-negative.")
        if m_mother <= 0:
            raise ValueError("Mother mass must be positive.")
        if sum(masses) >= m_mother:
            raise ValueError(f"Kinematically forbidden: Σm={sum(masses):.6f} >= M={m_mother:.6f}")

        self._m_mother = float(m_mother)
        self._masses = tuple(float(m) for m in masses)
        self.tolerance = tolerance

    # -------------------- Masses --------------------

    @property
    def m_mother(self) -> float:
        return self._m_mother

    @property
    def m1(self) -> float:
        return self._masses[0]

    @property
    def m2(self) -> float:
        return self._masses[1]

    @property
    def m3(self) -> float:
        return self._masses[2]

    @property
    def msq_mother(self) -> float:
        return self._m_mother ** 2

    @property
    def msq1(self) -> float:
        return self.m1 ** 2

    @property
    def msq2(self) -> float:
        return self.m2 ** 2

    @property
    def msq3(self) -> float:
        return self.m3 ** 2

    @property
    def msq_sum(self) -> float:
        """Sum of the squared masses of the mother and the three daughters."""
        return self.msq_mother + self.msq1 + self.msq2 + self.msq3

    # -------------------- Limits --------------------

    def _pair(self, index: int):
        """Masses (a, b) of the pair of axis `index` and the spectator c."""
        m1, m2, m3 = self._masses
        pairs = {0: (m1, m2, m3), 1: (m1, m3, m2), 2: (m2, m3, m1)}
        try:
            return pairs[index]
        except KeyError:
            raise ValueError(f"Invalid Dalitz axis {index}; expected 0, 1 or 2.") from None

    def msq_min(self, index: int) -> float:
        a, b, _ = self._pair(index)
        return (a + b) ** 2

    def msq_max(self, index: int) -> float:
        _, _, c = self._pair(index)
        return (self._m_mother - c) ** 2

    # -------------------- Membership --------------------

    def contains(self, msq12, msq13, msq23):
        """
        True where (m12², m13², m23²) lies inside the Dalitz region and
        satisfies the mass-squared sum rule. Accepts scalars or arrays.
        """
        msq12 = np.asarray(msq12, dtype=float)
        msq13 = np.asarray(msq13, dtype=float)
        msq23 = np.asarray(msq23, dtype=float)
        scale = self.tolerance * self.msq_sum

        lower, upper = msq23_limits(msq12, self._m_mother, *self._masses)
        with np.errstate(invalid="ignore"):
            inside = (
                (msq12 >= self.msq_min(0)) & (msq12 <= self.msq_max(0))
                & (msq23 >= lower - scale) & (msq23 <= upper + scale)
                & (np.abs(msq12 + msq13 + msq23 - self.msq_sum) <= scale)
            )

        if inside.ndim == 0:
            return bool(inside)
        return inside

    def __repr__(self) -> str:
        return f"PhaseSpace(M={self.m_mother}, m1={self.m1}, m2={self.m2}, m3={self.m3})"
