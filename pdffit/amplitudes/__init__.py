"""
Amplitude library for pdffit.

Usage:
    from pdffit.amplitudes import BreitWigner, CoherentSum

    rho = BreitWigner("12", Parameter("m_rho", 0.775), Parameter("g_rho", 0.149))
    amp = CoherentSum([(rho, Parameter("a_rho", 1.0), Parameter("phi_rho", 0.0))])
    A = amp.evaluate(phase_space, msq12, msq13, msq23)
"""
from .base import Amplitude
from .flat import FlatAmplitude
from .breit_wigner import BreitWigner, CoherentSum

__all__ = [
    "Amplitude",
    "FlatAmplitude",
    "BreitWigner",
    "CoherentSum",
]
