"""
pdffit: composable probability density functions for Dalitz-plot fits.

Usage:
    from pdffit import Variable, Parameter, PhaseSpace, Decay3Body, Pdf
    from pdffit.amplitudes import FlatAmplitude

    ps = PhaseSpace(1.86484, 0.497611, 0.13957, 0.13957)
    s12, s13, s23 = Variable("mSq12"), Variable("mSq13"), Variable("mSq23")
    model = Decay3Body(s12, s13, s23, FlatAmplitude(), ps)
    pdf = Pdf(model) * Parameter("scale", 1.0)
"""
from .errors import EnvelopeWarning, PdfError
from .variables import Parameter, Variable
from .operations import Op
from .parameter_expr import ParameterExpr
from .function import Function
from .phase_space import PhaseSpace
from .sampling import Sampler
from .fit_result import FitResult
from .models import Decay3Body, DecayModel, Exponential, Gaussian, GeneratedEvent, PdfModel
from .pdf import Pdf
from .likelihood import UnbinnedLikelihood

__all__ = [
    "PdfError",
    "EnvelopeWarning",
    "Variable",
    "Parameter",
    "Op",
    "ParameterExpr",
    "Function",
    "PhaseSpace",
    "Sampler",
    "FitResult",
    "PdfModel",
    "DecayModel",
    "Decay3Body",
    "GeneratedEvent",
    "Gaussian",
    "Exponential",
    "Pdf",
    "UnbinnedLikelihood",
]
