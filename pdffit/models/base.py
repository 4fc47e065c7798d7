from __future__ import annotations
import copy
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Dict, Iterable, List, Sequence

from ..errors import PdfError
from ..fit_result import FitResult
from ..variables import Parameter, Variable


class PdfModel(ABC):
    """
    Base class for all primitive pdf models.

    A model owns a name -> Variable map (the coordinates it is a density
    of) and a name -> Parameter map (the quantities its shape depends on).
    The named values passed in are copied; values flow in later through the
    setters, either directly or propagated by name from a Pdf expression.

    Positional setters and `evaluate_at` use the sorted-name order returned
    by `var_names()` / `par_names()`.
    """

    def __init__(self, variables: Iterable[Variable], parameters: Iterable[Parameter] = ()):
        self._var_map: Dict[str, Variable] = {}
        self._par_map: Dict[str, Parameter] = {}
        for var in variables:
            self._var_map.setdefault(var.name, copy.copy(var))
        for par in parameters:
            self._par_map.setdefault(par.name, copy.copy(par))

    # -------------------- Accessors --------------------

    @property
    def var_map(self) -> Dict[str, Variable]:
        return self._var_map

    @property
    def par_map(self) -> Dict[str, Parameter]:
        return self._par_map

    def var_names(self) -> List[str]:
        return sorted(self._var_map)

    def par_names(self) -> List[str]:
        return sorted(self._par_map)

    def get_var(self, name: str) -> Variable:
        try:
            return self._var_map[name]
        except KeyError:
            raise PdfError(f"Model does not depend on variable {name}.") from None

    def get_par(self, name: str) -> Parameter:
        try:
            return self._par_map[name]
        except KeyError:
            raise PdfError(f"Model does not depend on parameter {name}.") from None

    def depends_on(self, name: str) -> bool:
        return name in self._var_map

    # -------------------- Setters --------------------

    def set_var(self, name: str, value: float, error: float = 0.0) -> None:
        self.get_var(name).set(value, error)

    def set_par(self, name: str, value: float, error: float = 0.0) -> None:
        self.get_par(name).set(value, error)
        self.cache()

    def set_vars(self, values) -> None:
        """Set variables from a sequence (sorted-name order) or a name -> value mapping."""
        _assign(self._var_map, values)

    def set_pars(self, values) -> None:
        """
        Set parameters and recompute the cache.

        `values` is a sequence in `par_names()` order, a name -> value (or
        Parameter) mapping, or a FitResult. Mapping and FitResult entries
        that are not parameters of this model are ignored.
        """
        if isinstance(values, FitResult):
            missing = [name for name in self._par_map if name not in values]
            if missing:
                raise PdfError(f"Fit result does not contain parameters {missing}.")
            for name, par in self._par_map.items():
                par.set(values.value(name), values.error(name))
        else:
            _assign(self._par_map, values)
        self.cache()

    # -------------------- Evaluation --------------------

    def cache(self) -> None:
        """Recompute everything derived from the parameters (e.g. the norm)."""

    @abstractmethod
    def evaluate(self) -> float:
        """Value of the pdf at the stored variable values."""

    def evaluate_at(self, values) -> float:
        """
        Value of the pdf at an explicit point, leaving stored values untouched.

        `values` is a sequence in `var_names()` order or a name -> value mapping.
        """
        return self._evaluate_point(self._point(values))

    @abstractmethod
    def _evaluate_point(self, point: Dict[str, float]) -> float:
        ...

    def _point(self, values) -> Dict[str, float]:
        if isinstance(values, Mapping):
            missing = [name for name in self._var_map if name not in values]
            if missing:
                raise PdfError(f"Missing values for variables {missing}.")
            return {name: _as_float(values[name]) for name in self._var_map}

        if len(values) != len(self._var_map):
            raise PdfError("Number of arguments passed does not match number of required arguments.")
        return {name: float(value) for name, value in zip(self.var_names(), values)}

    # -------------------- Algebra --------------------

    def __add__(self, other):
        from ..pdf import Pdf
        return Pdf(self) + other

    def __mul__(self, other):
        from ..pdf import Pdf
        return Pdf(self) * other

    def __rmul__(self, other):
        from ..pdf import Pdf
        return Pdf(self) * other

    def __truediv__(self, other):
        from ..pdf import Pdf
        return Pdf(self) / other

    def copy(self) -> "PdfModel":
        """Independent copy: own variable and parameter maps, shared collaborators."""
        clone = copy.copy(self)
        clone._var_map = {name: copy.copy(var) for name, var in self._var_map.items()}
        clone._par_map = {name: copy.copy(par) for name, par in self._par_map.items()}
        return clone


def _as_float(value) -> float:
    return float(value.value) if isinstance(value, Variable) else float(value)


def _assign(target: Dict[str, Variable], values) -> None:
    if isinstance(values, Mapping):
        for name, value in values.items():
            if name in target:
                target[name].set_value(_as_float(value))
        return

    values = list(values)
    if len(values) != len(target):
        raise PdfError("Number of arguments passed does not match number of required arguments.")
    for name, value in zip(sorted(target), values):
        target[name].set_value(value)
