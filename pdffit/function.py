"""
Efficiency / acceptance functions.

A Function multiplies a decay model's density. It depends on a subset of
the model's variables and may carry its own parameters, which the model
adopts so the minimizer can vary them.

    eff = Function(
        [mSq12],
        [Parameter("slope", 0.1)],
        lambda v: 1.0 + v["slope"] * v["mSq12"],
    )

The formula receives a dict with variable and parameter values by name.
Variable values may be numpy arrays, so formulas should use numpy
operations when they are more than plain arithmetic.
"""

from __future__ import annotations
import copy
from typing import Callable, Dict, Iterable, List, Mapping

from .errors import PdfError
from .variables import Parameter, Variable


class Function:

    def __init__(self,
                 variables: Iterable[Variable],
                 parameters: Iterable[Parameter] = (),
                 formula: Callable[[Mapping[str, float]], float] = None,
                 name: str = ""):
        if formula is None:
            raise ValueError("A Function needs a formula.")
        self.formula = formula
        self.name = name or getattr(formula, "__name__", "function")
        self._var_map: Dict[str, Variable] = {v.name: copy.copy(v) for v in variables}
        self._par_map: Dict[str, Parameter] = {p.name: copy.copy(p) for p in parameters}

    @property
    def var_map(self) -> Dict[str, Variable]:
        return self._var_map

    @property
    def par_map(self) -> Dict[str, Parameter]:
        return self._par_map

    def var_names(self) -> List[str]:
        return sorted(self._var_map)

    def depends_on(self, name: str) -> bool:
        return name in self._var_map

    def set_par(self, name: str, value: float, error: float = 0.0) -> None:
        if name not in self._par_map:
            raise PdfError(f"Cannot set unexisting parameter {name}.")
        self._par_map[name].set(value, error)

    def evaluate(self, values: Mapping[str, float]):
        """Evaluate at the given variable values (by name)."""
        missing = [name for name in self._var_map if name not in values]
        if missing:
            raise PdfError(f"Function {self.name} needs values for {missing}.")

        args = {name: par.value for name, par in self._par_map.items()}
        args.update((name, values[name]) for name in self._var_map)
        return self.formula(args)

    def __repr__(self) -> str:
        return f"Function({self.name}, vars={self.var_names()}, pars={sorted(self._par_map)})"
