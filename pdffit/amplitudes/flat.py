from .base import Amplitude


class FlatAmplitude(Amplitude):
    """Uniform phase space (no dynamics)."""

    name = "Flat Phase Space"
    description = "Returns a constant amplitude for all configurations"

    def __init__(self, value: complex = 1.0):
        super().__init__()
        self.value = complex(value)

    def evaluate(self, phase_space, msq12, msq13, msq23) -> complex:
        """Always returns the same value (uniform Dalitz plot)."""
        return self.value
