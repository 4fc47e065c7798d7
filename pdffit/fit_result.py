"""
Result of a minimization, as consumed by the pdf models.

Whatever minimizer drives the fit, its best point is handed back as a
FitResult: parameter name -> fitted value and error.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from .variables import Parameter


@dataclass
class FitResult:
    values: Dict[str, float]
    errors: Dict[str, float] = field(default_factory=dict)
    fval: Optional[float] = None
    valid: bool = True

    @classmethod
    def from_parameters(cls, parameters: Iterable[Parameter], fval: Optional[float] = None) -> "FitResult":
        parameters = list(parameters)
        return cls(
            values={p.name: p.value for p in parameters},
            errors={p.name: p.error for p in parameters},
            fval=fval,
        )

    @classmethod
    def from_vector(cls, names: List[str], values, errors=None, fval: Optional[float] = None) -> "FitResult":
        """Build from the positional vector a minimizer works with."""
        errors = errors if errors is not None else [0.0] * len(names)
        return cls(
            values=dict(zip(names, map(float, values))),
            errors=dict(zip(names, map(float, errors))),
            fval=fval,
        )

    def value(self, name: str) -> float:
        return self.values[name]

    def error(self, name: str) -> float:
        return self.errors.get(name, 0.0)

    def names(self) -> List[str]:
        return sorted(self.values)

    def parameters(self) -> Mapping[str, Parameter]:
        return {name: Parameter(name, self.value(name), self.error(name)) for name in self.names()}

    def __contains__(self, name: str) -> bool:
        return name in self.values
