"""
Named values used by pdf models.

A Variable is a coordinate of the data (e.g. a squared invariant mass), a
Parameter is a quantity varied by the minimizer. Both are identified by
name; the value and error change in place during a fit.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Variable:
    name: str
    value: float = 0.0
    error: float = 0.0

    def set(self, value: float, error: float = 0.0) -> None:
        self.value = float(value)
        self.error = float(error)

    def set_value(self, value: float) -> None:
        self.value = float(value)

    def set_error(self, error: float) -> None:
        self.error = float(error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}={self.value:.6g} ± {self.error:.3g})"


@dataclass(repr=False)
class Parameter(Variable):
    """
    Fit parameter.

    Parameters take part in arithmetic: combining them with other
    parameters or numbers builds a ParameterExpr, which can scale a Pdf.
    """

    def _expr(self):
        from .parameter_expr import ParameterExpr
        return ParameterExpr(self)

    def __add__(self, other):
        return self._expr() + other

    def __radd__(self, other):
        return other + self._expr()

    def __sub__(self, other):
        return self._expr() - other

    def __rsub__(self, other):
        return other - self._expr()

    def __mul__(self, other):
        return self._expr() * other

    def __rmul__(self, other):
        return other * self._expr()

    def __truediv__(self, other):
        return self._expr() / other

    def __rtruediv__(self, other):
        return other / self._expr()

    def __pow__(self, other):
        return self._expr() ** other

    def __neg__(self):
        return -self._expr()
