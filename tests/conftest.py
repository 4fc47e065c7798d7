"""
Shared fixtures and stub collaborators for the pdffit tests.
"""
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).resolve().parents[1]))

import numpy as np
import pytest

from pdffit import Parameter, PhaseSpace, Variable
from pdffit.models import PdfModel


# D0 -> KS pi+ pi- masses (GeV)
M_D0 = 1.86484
M_KS = 0.497611
M_PI = 0.13957


class StubModel(PdfModel):
    """Model whose value is `offset + sum of its variables`; counts cache() calls."""

    def __init__(self, names, offset=1.0, parameters=()):
        super().__init__([Variable(name, 0.0) for name in names], parameters)
        self.offset = offset
        self.cache_calls = 0

    def cache(self):
        self.cache_calls += 1

    def _evaluate_point(self, point):
        return self.offset + sum(point.values())

    def evaluate(self):
        return self._evaluate_point({name: var.value for name, var in self.var_map.items()})


class SquarePhaseSpace:
    """Unit square in (m12², m13²): every cell of the grid is allowed."""

    msq_sum = 3.0

    def msq_min(self, index):
        return 0.0

    def msq_max(self, index):
        return 1.0

    def contains(self, msq12, msq13, msq23):
        msq12 = np.asarray(msq12)
        msq13 = np.asarray(msq13)
        inside = (msq12 >= 0.0) & (msq12 <= 1.0) & (msq13 >= 0.0) & (msq13 <= 1.0)
        return bool(inside) if inside.ndim == 0 else inside


@pytest.fixture
def phase_space():
    return PhaseSpace(M_D0, M_KS, M_PI, M_PI)


@pytest.fixture
def dalitz_vars():
    return Variable("mSq12", 1.0), Variable("mSq13", 1.0), Variable("mSq23", 1.0)


@pytest.fixture
def rho_pars():
    return Parameter("m_rho", 0.77526), Parameter("g_rho", 0.1491)
