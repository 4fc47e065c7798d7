"""
Accept-reject bookkeeping.

The controller draws r ~ U(0, w_max) and accepts a candidate when
r < weight. A weight above w_max means the envelope is too low and the
generated sample is biased; this is reported loudly rather than tolerated.
"""

import logging
import warnings
from typing import Callable, Optional

from .errors import EnvelopeWarning
from .sampling import Sampler

logger = logging.getLogger(__name__)


class UnweightingController:
    def __init__(self, w_max: float, safety_factor: float = 1.0,
                 on_violation: Optional[Callable[[float, float], None]] = None):
        if w_max <= 0:
            raise ValueError(f"Envelope must be positive, got {w_max}")
        self.w_max = w_max * safety_factor
        self.on_violation = on_violation
        self.accepted = 0
        self.rejected = 0
        self.violations = 0

    def check_envelope(self, weight: float, context: str = "") -> bool:
        """Return True if `weight` fits under the envelope, report it otherwise."""
        if weight <= self.w_max:
            return True

        self.violations += 1
        message = f"Envelope too low: weight {weight:.6g} > w_max {self.w_max:.6g} {context}".rstrip()
        logger.error(message)
        warnings.warn(message, EnvelopeWarning, stacklevel=3)
        if self.on_violation is not None:
            self.on_violation(weight, self.w_max)
        return False

    def accept(self, weight: float, sampler: Sampler) -> bool:
        r = sampler.flat(0.0, self.w_max)
        if r < weight:
            self.accepted += 1
            return True
        else:
            self.rejected += 1
            return False

    def reject(self) -> None:
        """Count a candidate rejected before weighting (e.g. outside the region)."""
        self.rejected += 1

    @property
    def efficiency(self) -> float:
        total = self.accepted + self.rejected
        return self.accepted / total if total > 0 else 0.0
