"""
Dalitz-plot pdf of a three-body decay.

    P(m12², m13², m23²) = |A|² · Π f_k / N

where A is the decay amplitude, f_k the efficiency/acceptance functions the
model has been multiplied by, and N the integral of the numerator over the
kinematically allowed region, computed on a fixed midpoint grid.

The norm is recomputed eagerly: construction, every setter and every
multiplication by a function leave the model with an up-to-date cache.
There is no lazy or deferred recomputation.
"""

from __future__ import annotations
import copy
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

import numpy as np

from .. import config
from ..amplitudes import Amplitude
from ..errors import PdfError
from ..function import Function
from ..phase_space import PhaseSpace
from ..sampling import Sampler
from ..unweighting import UnweightingController
from ..variables import Variable
from .decay_model import DecayModel

logger = logging.getLogger(__name__)


@dataclass
class GeneratedEvent:
    """Outcome of one accept-reject generation."""
    accepted: bool
    values: Dict[str, float] = field(default_factory=dict)
    attempts: int = 0

    def __bool__(self) -> bool:
        return self.accepted


class Decay3Body(DecayModel):

    def __init__(self,
                 msq12: Variable,
                 msq13: Variable,
                 msq23: Variable,
                 amplitude: Amplitude,
                 phase_space: PhaseSpace,
                 max_pdf: Optional[float] = None,
                 n_bins: Optional[int] = None,
                 max_attempts: Optional[int] = None,
                 on_envelope_violation: Optional[Callable[[float, float], None]] = None):
        """
        Args:
            msq12, msq13, msq23: the Dalitz variables, in this role order
            amplitude: decay amplitude (copied)
            phase_space: kinematic limits and Dalitz region
            max_pdf: accept-reject envelope; derived from the normalisation
                grid when not given
            n_bins: grid bins per axis (default config.N_BINS)
            max_attempts: generation attempts per event (default config.MAX_ATTEMPTS)
            on_envelope_violation: called with (value, max_pdf) whenever a pdf
                value exceeds the envelope during generation
        """
        super().__init__(msq12, msq13, msq23, amplitude, phase_space)

        self.n_bins = config.N_BINS if n_bins is None else int(n_bins)
        if self.n_bins <= 0:
            raise ValueError(f"Number of bins must be positive, got {self.n_bins}")
        self.max_attempts = config.MAX_ATTEMPTS if max_attempts is None else int(max_attempts)
        if self.max_attempts <= 0:
            raise ValueError(f"Number of attempts must be positive, got {self.max_attempts}")
        self.on_envelope_violation = on_envelope_violation

        self._funcs: List[Function] = []
        self._norm = 1.0
        self._fixed_max_pdf = max_pdf
        self._max_pdf = max_pdf

        self.cache()

    # -------------------- Accessors --------------------

    @property
    def norm(self) -> float:
        return self._norm

    @property
    def max_pdf(self) -> float:
        return self._max_pdf

    @max_pdf.setter
    def max_pdf(self, value: Optional[float]) -> None:
        """Fix the envelope, or pass None to derive it from the grid again."""
        self._fixed_max_pdf = value
        self.cache()

    @property
    def functions(self) -> tuple:
        return tuple(self._funcs)

    # -------------------- Setters --------------------

    def set_var(self, name: str, value: float, error: float = 0.0) -> None:
        super().set_var(name, value, error)
        self.cache()

    def set_vars(self, values) -> None:
        super().set_vars(values)
        self.cache()

    def _collaborators(self):
        return super()._collaborators() + [func.par_map for func in self._funcs]

    # -------------------- Density --------------------

    def _evaluate_funcs(self, msq12, msq13, msq23):
        values = dict(zip(self._roles, (msq12, msq13, msq23)))

        value = 1.0
        for func in self._funcs:
            value = value * func.evaluate({name: values[name] for name in func.var_names()})

        # Always return a non-negative value. Default to zero.
        value = np.asarray(value, dtype=float)
        with np.errstate(invalid="ignore"):
            return np.where(np.isfinite(value) & (value > 0.0), value, 0.0)

    def _density(self, msq12, msq13, msq23):
        """Unnormalised density |A|² · Π f."""
        amp = np.asarray(self._amp.evaluate(self._ps, msq12, msq13, msq23), dtype=complex)
        return np.abs(amp) ** 2 * self._evaluate_funcs(msq12, msq13, msq23)

    def cache(self) -> None:
        """Integrate the density over the Dalitz region on an n_bins x n_bins grid."""
        self._sync_parameters()

        low = min(self._ps.msq_min(0), self._ps.msq_min(1))
        high = max(self._ps.msq_max(0), self._ps.msq_max(1))
        step = (high - low) / self.n_bins

        centres = low + step * (np.arange(self.n_bins) + 0.5)
        msq12, msq13 = np.meshgrid(centres, centres, indexing="ij")
        msq23 = self._ps.msq_sum - msq12 - msq13

        # Only cells whose centre lies in the Dalitz region contribute.
        inside = np.asarray(self._ps.contains(msq12, msq13, msq23), dtype=bool)
        density = np.broadcast_to(
            self._density(msq12[inside], msq13[inside], msq23[inside]),
            (int(inside.sum()),),
        )

        norm = float(np.sum(density)) * step ** 2
        if not norm > 0.0:
            raise PdfError(f"Cannot normalise Decay3Body pdf: integral is {norm}.")
        self._norm = norm

        if self._fixed_max_pdf is not None:
            self._max_pdf = self._fixed_max_pdf
        else:
            self._max_pdf = config.ENVELOPE_SAFETY * float(density.max()) / norm

        logger.debug(f"Decay3Body cache: norm={self._norm:.6e}, max_pdf={self._max_pdf:.6e}")

    def evaluate_point(self, msq12: float, msq13: float, msq23: Optional[float] = None) -> float:
        """Pdf value at (m12², m13², m23²); m23² is derived when omitted."""
        if msq23 is None:
            msq23 = self._ps.msq_sum - msq12 - msq13
        return float(self._density(msq12, msq13, msq23)) / self._norm

    def evaluate(self) -> float:
        return self.evaluate_point(self.msq12, self.msq13, self.msq23)

    def _evaluate_point(self, point: Dict[str, float]) -> float:
        return self.evaluate_point(*(point[name] for name in self._roles))

    # -------------------- Projection --------------------

    def project(self, var_name: str, x: float) -> float:
        """
        Projection of the pdf on `var_name` at value `x`: the other free
        Dalitz variable is integrated out on an n_bins midpoint grid.

        A model that does not depend on `var_name` projects to 1.
        """
        if var_name not in self._roles:
            return 1.0

        index = self._roles.index(var_name)
        other = (index + 1) % 3
        low = self._ps.msq_min(other)
        high = self._ps.msq_max(other)
        width = (high - low) / self.n_bins

        y = low + width * (np.arange(self.n_bins) + 0.5)
        x = np.full_like(y, float(x))
        z = self._ps.msq_sum - x - y

        if index == 0:
            point = (x, y, z)
        elif index == 1:
            point = (z, x, y)
        else:
            point = (y, z, x)

        inside = np.asarray(self._ps.contains(*point), dtype=bool)
        density = np.broadcast_to(
            self._density(*(coord[inside] for coord in point)),
            (int(inside.sum()),),
        )
        return float(np.sum(density)) / self._norm * width

    # -------------------- Generation --------------------

    def _controller(self) -> UnweightingController:
        return UnweightingController(self._max_pdf, on_violation=self.on_envelope_violation)

    def _generate(self, sampler: Sampler, controller: UnweightingController) -> GeneratedEvent:
        min12, max12 = self._ps.msq_min(0), self._ps.msq_max(0)
        min13, max13 = self._ps.msq_min(1), self._ps.msq_max(1)
        msq_sum = self._ps.msq_sum

        for attempt in range(1, self.max_attempts + 1):
            msq12 = sampler.flat(min12, max12)
            msq13 = sampler.flat(min13, max13)
            msq23 = msq_sum - msq12 - msq13

            if not self._ps.contains(msq12, msq13, msq23):
                controller.reject()
                continue

            value = self.evaluate_point(msq12, msq13, msq23)
            controller.check_envelope(value, f"at ({msq12:.6g}, {msq13:.6g}, {msq23:.6g})")

            if controller.accept(value, sampler):
                return GeneratedEvent(True, dict(zip(self._roles, (msq12, msq13, msq23))), attempt)

        logger.warning(f"Decay3Body: no event accepted after {self.max_attempts} attempts")
        return GeneratedEvent(False, {name: 0.0 for name in self._roles}, self.max_attempts)

    def generate(self, sampler: Optional[Sampler] = None) -> GeneratedEvent:
        """
        Generate one event by accept-reject against the max_pdf envelope.

        Check `accepted` on the result: after max_attempts failed attempts
        the event is returned unaccepted, with all values zero.
        """
        return self._generate(sampler or Sampler(), self._controller())

    def generate_many(self, n: int, sampler: Optional[Sampler] = None) -> List[GeneratedEvent]:
        """Generate up to n events; returns the accepted ones."""
        sampler = sampler or Sampler()
        controller = self._controller()

        events = []
        failed = 0
        for _ in range(n):
            event = self._generate(sampler, controller)
            if event.accepted:
                events.append(event)
            else:
                failed += 1

        logger.info(f"Generated {len(events)}/{n} events, {failed} failed, "
                    f"efficiency {controller.efficiency:.3f}")
        if controller.violations:
            logger.error(f"{controller.violations} pdf values exceeded max_pdf={self._max_pdf:.6g}")
        return events

    # -------------------- Efficiency functions --------------------

    def _append_function(self, func: Function) -> None:
        # The function cannot depend on variables the model does not have.
        for name in func.var_map:
            if name not in self._var_map:
                raise PdfError("Cannot multiply a Decay3Body pdf model by a function that depends on other variables.")

        func = copy.deepcopy(func)
        for name, par in func.par_map.items():
            self._par_map.setdefault(name, copy.copy(par))
        self._funcs.append(func)

        # The shape has changed.
        self.cache()

    def __imul__(self, other):
        if not isinstance(other, Function):
            return NotImplemented
        self._append_function(other)
        return self

    def __mul__(self, other):
        if not isinstance(other, Function):
            return super().__mul__(other)
        clone = self.copy()
        clone._append_function(other)
        return clone

    def __rmul__(self, other):
        if not isinstance(other, Function):
            return super().__rmul__(other)
        clone = self.copy()
        clone._append_function(other)
        return clone

    def copy(self) -> "Decay3Body":
        clone = super().copy()
        clone._funcs = [copy.deepcopy(func) for func in self._funcs]
        return clone
