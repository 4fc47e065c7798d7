from .base import PdfModel
from .decay_model import DecayModel
from .decay3body import Decay3Body, GeneratedEvent
from .gaussian import Exponential, Gaussian

__all__ = [
    "PdfModel",
    "DecayModel",
    "Decay3Body",
    "GeneratedEvent",
    "Gaussian",
    "Exponential",
]
