from __future__ import annotations
import copy
from typing import Tuple

from .base import PdfModel
from ..amplitudes import Amplitude
from ..phase_space import PhaseSpace
from ..variables import Variable


class DecayModel(PdfModel):
    """
    Pdf model of a three-body decay over its Dalitz plot.

    The model depends on the three squared invariant masses and on the
    parameters of its amplitude. The variables keep the roles they are
    passed in (m12², m13², m23²) whatever their names are.

    The amplitude is copied, and kept in sync with the model's own
    parameters by name on every cache() call.
    """

    def __init__(self,
                 msq12: Variable,
                 msq13: Variable,
                 msq23: Variable,
                 amplitude: Amplitude,
                 phase_space: PhaseSpace):
        roles = (msq12.name, msq13.name, msq23.name)
        if len(set(roles)) != 3:
            raise ValueError(f"Dalitz variables need three distinct names, got {roles}")

        self._amp = copy.deepcopy(amplitude)
        self._ps = phase_space
        self._roles: Tuple[str, str, str] = roles
        super().__init__([msq12, msq13, msq23], self._amp.parameters.values())

    @property
    def amplitude(self) -> Amplitude:
        return self._amp

    @property
    def phase_space(self) -> PhaseSpace:
        return self._ps

    @property
    def roles(self) -> Tuple[str, str, str]:
        """Variable names in (m12², m13², m23²) order."""
        return self._roles

    @property
    def msq12(self) -> float:
        return self._var_map[self._roles[0]].value

    @property
    def msq13(self) -> float:
        return self._var_map[self._roles[1]].value

    @property
    def msq23(self) -> float:
        return self._var_map[self._roles[2]].value

    def _collaborators(self):
        """Objects holding their own copies of some of the model parameters."""
        return [self._amp.parameters]

    def _sync_parameters(self) -> None:
        for par_map in self._collaborators():
            for name, par in par_map.items():
                if name in self._par_map:
                    own = self._par_map[name]
                    par.set(own.value, own.error)

    def copy(self) -> "DecayModel":
        clone = super().copy()
        clone._amp = copy.deepcopy(self._amp)
        return clone
