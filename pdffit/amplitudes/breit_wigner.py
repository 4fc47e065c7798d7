"""
Resonant amplitudes: relativistic Breit-Wigner and coherent sums.

    BW(s) = 1 / (m0² - s - i m0 Γ(s))

with the energy-dependent width

    Γ(s) = Γ0 (q(s)/q0)^(2L+1) (m0/√s) F_L²(q, q0)

where q is the breakup momentum of the resonance into its two daughters
and F_L the Blatt-Weisskopf barrier factor:
    L=0: F = 1
    L=1: F² = (1 + (q0 R)²) / (1 + (q R)²)
    L=2: F² = (9 + 3(q0 R)² + (q0 R)⁴) / (9 + 3(q R)² + (q R)⁴)
"""

from __future__ import annotations
import copy
from typing import Dict, Iterable, Tuple

import numpy as np

from .base import Amplitude
from ..kinematics import breakup_momentum
from ..variables import Parameter

_CHANNELS = {"12": 0, "13": 1, "23": 2}


def _barrier_factor_sq(q, q0, spin: int, radius: float):
    z = (q * radius) ** 2
    z0 = (q0 * radius) ** 2
    if spin == 0:
        return np.ones_like(z)
    if spin == 1:
        return (1.0 + z0) / (1.0 + z)
    if spin == 2:
        return (9.0 + 3.0 * z0 + z0 * z0) / (9.0 + 3.0 * z + z * z)
    raise ValueError(f"Unsupported orbital angular momentum L={spin}. Use L=0,1,2")


class BreitWigner(Amplitude):
    """Relativistic Breit-Wigner resonance in one two-body channel."""

    name = "Relativistic Breit-Wigner"
    description = "Resonance with energy-dependent width and Blatt-Weisskopf barrier factors"

    def __init__(self, channel: str, mass: Parameter, width: Parameter, spin: int = 0, radius: float = 1.5):
        if channel not in _CHANNELS:
            raise ValueError(f"Invalid channel {channel!r}; expected one of {sorted(_CHANNELS)}")
        if spin not in (0, 1, 2):
            raise ValueError(f"Unsupported orbital angular momentum L={spin}. Use L=0,1,2")
        super().__init__([mass, width])
        self.channel = channel
        self.mass_name = mass.name
        self.width_name = width.name
        self.spin = spin
        self.radius = radius

    def _daughter_masses(self, phase_space) -> Tuple[float, float]:
        masses = {
            "12": (phase_space.m1, phase_space.m2),
            "13": (phase_space.m1, phase_space.m3),
            "23": (phase_space.m2, phase_space.m3),
        }
        return masses[self.channel]

    def evaluate(self, phase_space, msq12, msq13, msq23):
        s = np.asarray((msq12, msq13, msq23)[_CHANNELS[self.channel]], dtype=float)
        m_a, m_b = self._daughter_masses(phase_space)
        m0 = self.par(self.mass_name)
        gamma0 = self.par(self.width_name)

        q = breakup_momentum(s, m_a, m_b)
        q0 = float(breakup_momentum(m0 * m0, m_a, m_b))
        if q0 > 0.0:
            ratio = q / q0
            with np.errstate(divide="ignore", invalid="ignore"):
                gamma = (gamma0 * ratio ** (2 * self.spin + 1) * (m0 / np.sqrt(s))
                         * _barrier_factor_sq(q, q0, self.spin, self.radius))
        else:
            # Pole below threshold: fixed width.
            gamma = np.full_like(s, gamma0)

        return 1.0 / (m0 * m0 - s - 1j * m0 * gamma)


class CoherentSum(Amplitude):
    """
    Sum of amplitudes with complex coefficients a·exp(iφ):

        A = Σ_k a_k exp(i φ_k) A_k

    Each term is (amplitude, magnitude Parameter, phase Parameter). The
    parameters of the terms are shared with the sum, so setting them on
    the sum updates the terms.
    """

    name = "Coherent sum"
    description = "Isobar model: complex-weighted sum of resonant amplitudes"

    def __init__(self, terms: Iterable[Tuple[Amplitude, Parameter, Parameter]]):
        super().__init__()
        self.terms = []
        pars: Dict[str, Parameter] = {}
        for amplitude, magnitude, phase in terms:
            magnitude, phase = copy.copy(magnitude), copy.copy(phase)
            pars.update(amplitude.parameters)
            pars[magnitude.name] = magnitude
            pars[phase.name] = phase
            self.terms.append((amplitude, magnitude.name, phase.name))
        self._par_map = pars

    def evaluate(self, phase_space, msq12, msq13, msq23):
        total = 0.0 + 0.0j
        for amplitude, magnitude, phase in self.terms:
            coefficient = self.par(magnitude) * np.exp(1j * self.par(phase))
            total = total + coefficient * amplitude.evaluate(phase_space, msq12, msq13, msq23)
        return total
