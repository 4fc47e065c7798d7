from __future__ import annotations
import copy
from abc import ABC, abstractmethod
from typing import Dict, Iterable

from ..variables import Parameter


class Amplitude(ABC):
    """
    Base class for all decay amplitudes.

    Computes the complex amplitude A(m12², m13², m23²) of a three-body
    decay. |A|² is the unnormalised density of the Dalitz plot.
    Implementations must be pure functions of the kinematics and of their
    parameters (no RNG), and must accept numpy arrays for the squared masses.
    """

    name: str = "abstract"
    description: str = ""

    def __init__(self, parameters: Iterable[Parameter] = ()):
        self._par_map: Dict[str, Parameter] = {p.name: copy.copy(p) for p in parameters}

    @property
    def parameters(self) -> Dict[str, Parameter]:
        return self._par_map

    def par(self, name: str) -> float:
        return self._par_map[name].value

    @abstractmethod
    def evaluate(self, phase_space, msq12, msq13, msq23) -> complex:
        """
        Return the complex amplitude at the given point.

        Args:
            phase_space: PhaseSpace of the decay (masses, limits)
            msq12, msq13, msq23: squared invariant masses (scalars or arrays)

        Returns:
            Complex amplitude, finite everywhere inside the Dalitz region
        """
