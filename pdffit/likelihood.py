"""
Unbinned likelihood objective for an external minimizer.

    nll = UnbinnedLikelihood(pdf, data)
    fval = nll([0.77, 0.15, 1.0])        # -2 ln L at this parameter vector
    pdf_model.set_pars(nll.result(best))   # read the minimum back

The minimizer sees a plain function of a parameter vector in
`par_names()` order; the pdf is updated and re-cached on every call.
"""

from __future__ import annotations
import logging
import math
from typing import List, Optional, Sequence

import numpy as np

from .fit_result import FitResult
from .pdf import Pdf

logger = logging.getLogger(__name__)


class UnbinnedLikelihood:

    def __init__(self, pdf, data):
        """
        Args:
            pdf: Pdf expression or pdf model
            data: events, shape (n_events, n_variables), columns in
                `pdf.var_names()` order
        """
        self.pdf = pdf
        self.data = np.atleast_2d(np.asarray(data, dtype=float))
        if self.data.shape[1] != len(pdf.var_names()):
            raise ValueError(
                f"Data has {self.data.shape[1]} columns, pdf depends on {pdf.var_names()}"
            )
        self.calls = 0

    def par_names(self) -> List[str]:
        return self.pdf.par_names()

    def __call__(self, pars: Sequence[float]) -> float:
        self.pdf.set_pars(pars)
        if isinstance(self.pdf, Pdf):
            self.pdf.cache()
        self.calls += 1

        total = 0.0
        for row in self.data:
            value = self.pdf.evaluate_at(row)
            if value <= 0.0:
                logger.debug(f"Non-positive pdf value {value} at {row}, nll is infinite")
                return math.inf
            total += math.log(value)
        return -2.0 * total

    def result(self, pars: Sequence[float], errors: Optional[Sequence[float]] = None,
               fval: Optional[float] = None) -> FitResult:
        """Wrap a minimizer's best vector as a FitResult."""
        return FitResult.from_vector(self.par_names(), pars, errors, fval)
