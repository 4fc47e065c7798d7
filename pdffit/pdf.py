"""
Algebraic pdf expressions.

A Pdf combines pdf models, parameters and constants:

    pdf = (signal * frac + background * (1 - frac)) * efficiency_model

Internally the expression is a postfix program (see pdffit.program) that is
replayed on a stack every time the pdf is evaluated, which happens once per
event and minimizer step.

Two algebra rules keep the expression meaningful as a density:
  - pdfs can only be added when they depend on exactly the same variables;
  - pdfs can only be multiplied when they share no variable.
Parameters and constants can scale or divide a Pdf freely.

A Pdf never owns the models it references. It holds borrowed references
and only reads values from them or writes values into them.
"""

from __future__ import annotations
import copy
import logging
from numbers import Real
from typing import Dict, List, Set

from .errors import PdfError
from .models.base import PdfModel
from .operations import ADDITIVE, Op
from .parameter_expr import ParameterExpr
from .program import BinOp, Const, ModelRef, ParamRef, UnOp, execute, render
from .variables import Parameter, Variable


logger = logging.getLogger(__name__)


class Pdf:

    def __init__(self, operand=None):
        self._program: List = []
        self._models: List[PdfModel] = []
        self._var_map: Dict[str, Variable] = {}
        self._par_map: Dict[str, Parameter] = {}

        if operand is not None:
            self.append(operand)

    # -------------------- Construction --------------------

    def append(self, operand) -> "Pdf":
        """
        Append one operand (or an operator) to the postfix program.

        No algebra check is done here; the operators below do it. Appending
        an Op appends a binary operation.
        """
        if isinstance(operand, Pdf):
            for name, var in operand._var_map.items():
                self._var_map.setdefault(name, copy.copy(var))
            for name, par in operand._par_map.items():
                self._par_map.setdefault(name, copy.copy(par))
            self._program.extend(operand._program)
            self._models.extend(operand._models)
        elif isinstance(operand, PdfModel):
            for name, var in operand.var_map.items():
                self._var_map.setdefault(name, copy.copy(var))
            for name, par in operand.par_map.items():
                self._par_map.setdefault(name, copy.copy(par))
            self._program.append(ModelRef(operand))
            self._models.append(operand)
        elif isinstance(operand, Parameter):
            self._par_map[operand.name] = copy.copy(operand)
            self._program.append(ParamRef(operand.name))
        elif isinstance(operand, ParameterExpr):
            for name, par in operand.parameters.items():
                self._par_map[name] = copy.copy(par)
            self._program.extend(operand.program)
        elif isinstance(operand, Op):
            self._program.append(BinOp(operand))
        elif isinstance(operand, Real):
            self._program.append(Const(float(operand)))
        else:
            raise TypeError(f"Cannot append {type(operand).__name__} to a Pdf")
        return self

    def copy(self) -> "Pdf":
        """New expression with the same program, referencing the same models."""
        return Pdf().append(self)

    def _combine(self, operand, op: Op) -> "Pdf":
        if not self._program:
            return self.append(operand)
        return self.append(operand).append(op)

    def __iadd__(self, other):
        if not isinstance(other, (Pdf, PdfModel)):
            return NotImplemented

        if self._program and self.var_names() != other.var_names():
            raise PdfError("Cannot add two pdfs that do not depend on the same variables.")
        return self._combine(other, Op.PLUS)

    def __imul__(self, other):
        if isinstance(other, (Pdf, PdfModel)):
            common = set(self.var_names()) & set(other.var_names())
            if common:
                raise PdfError("Cannot multiply two pdfs that depend on some common variable.")
        elif not isinstance(other, (Parameter, ParameterExpr, Real)):
            return NotImplemented
        return self._combine(other, Op.MULT)

    def __itruediv__(self, other):
        if not isinstance(other, (Parameter, ParameterExpr, Real)):
            return NotImplemented
        return self._combine(other, Op.DIV)

    def __add__(self, other):
        if not isinstance(other, (Pdf, PdfModel)):
            return NotImplemented
        result = self.copy()
        result += other
        return result

    def __mul__(self, other):
        if not isinstance(other, (Pdf, PdfModel, Parameter, ParameterExpr, Real)):
            return NotImplemented
        result = self.copy()
        result *= other
        return result

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if not isinstance(other, (Parameter, ParameterExpr, Real)):
            return NotImplemented
        result = self.copy()
        result /= other
        return result

    # -------------------- Accessors --------------------

    @property
    def program(self) -> tuple:
        return tuple(self._program)

    @property
    def models(self) -> List[PdfModel]:
        return list(self._models)

    def var_names(self) -> List[str]:
        return sorted(self._var_map)

    def par_names(self) -> List[str]:
        return sorted(self._par_map)

    def get_var(self, name: str) -> Variable:
        try:
            return self._var_map[name]
        except KeyError:
            raise PdfError(f"Pdf does not depend on variable {name}.") from None

    def get_par(self, name: str) -> Parameter:
        try:
            return self._par_map[name]
        except KeyError:
            raise PdfError(f"Pdf does not depend on parameter {name}.") from None

    def __len__(self) -> int:
        return len(self._program)

    def __repr__(self) -> str:
        return f"Pdf({render(self._program)})"

    # -------------------- Setters --------------------

    def set_var(self, name: str, value: float, error: float = 0.0) -> None:
        if name not in self._var_map:
            raise PdfError(f"Cannot set unexisting variable {name}.")

        self._var_map[name].set(value, error)
        for model in self._models:
            if name in model.var_map:
                model.var_map[name].set(value, error)

    def set_par(self, name: str, value: float, error: float = 0.0) -> None:
        """Set one parameter everywhere. Call cache() before evaluating."""
        if name not in self._par_map:
            raise PdfError(f"Cannot set unexisting parameter {name}.")

        self._par_map[name].set(value, error)
        for model in self._models:
            if name in model.par_map:
                model.par_map[name].set(value, error)

    def set_vars(self, values) -> None:
        """Set all variables from a sequence in `var_names()` order."""
        values = list(values)
        if len(values) != len(self._var_map):
            raise PdfError("Number of arguments passed does not match number of required arguments.")

        self._check_models("var_map", self._var_map, "variable")
        for name, value in zip(self.var_names(), values):
            self._var_map[name].set_value(value)

        for model in self._models:
            for name, var in model.var_map.items():
                var.set_value(self._var_map[name].value)

    def set_pars(self, values) -> None:
        """Set all parameters from a sequence in `par_names()` order. Call cache() before evaluating."""
        values = list(values)
        if len(values) != len(self._par_map):
            raise PdfError("Number of arguments passed does not match number of required arguments.")

        self._check_models("par_map", self._par_map, "parameter")
        for name, value in zip(self.par_names(), values):
            self._par_map[name].set_value(value)

        for model in self._models:
            for name, par in model.par_map.items():
                par.set_value(self._par_map[name].value)

    def _check_models(self, attribute: str, table, kind: str) -> None:
        """Every name a referenced model holds must be known to the Pdf."""
        for model in self._models:
            for name in getattr(model, attribute):
                if name not in table:
                    raise PdfError(
                        f"Model {kind} {name} is not part of the Pdf; rebuild the expression after changing a model."
                    )

    def cache(self) -> None:
        logger.debug(f"Recomputing cache of {len(self._models)} models")
        for model in self._models:
            model.cache()

    # -------------------- Evaluation --------------------

    def _load_constant(self, instr) -> float:
        if isinstance(instr, ParamRef):
            return self._par_map[instr.name].value
        return instr.value

    def evaluate(self) -> float:
        """
        Value of the expression at the variable values stored in the models.

        Use `set_vars` first, or `evaluate_at` to pass the point explicitly.
        """
        def load(instr):
            if isinstance(instr, ModelRef):
                return instr.model.evaluate()
            return self._load_constant(instr)

        return execute(self._program, load)

    def evaluate_at(self, values) -> float:
        """
        Value of the expression at an explicit point.

        `values` follows `var_names()` order. Each model receives the subset
        of coordinates it depends on; no stored value is modified.
        """
        values = list(values)
        if len(values) != len(self._var_map):
            raise PdfError("Number of arguments passed does not match number of required arguments.")
        point = dict(zip(self.var_names(), values))

        def load(instr):
            if isinstance(instr, ModelRef):
                model = instr.model
                return model.evaluate_at([point[name] for name in model.var_names()])
            return self._load_constant(instr)

        return execute(self._program, load)

    def common_vars(self) -> List[str]:
        """
        Names of the variables common to all the terms of the expression.

        Sums keep the variables their terms share, products collect the
        variables of all their factors. These are the variables a
        convolution of this pdf can be integrated over.
        """
        stack: List[Set[str]] = []
        for instr in self._program:
            if isinstance(instr, ModelRef):
                stack.append(set(instr.model.var_names()))
            elif isinstance(instr, (ParamRef, Const)):
                stack.append(set())
            elif isinstance(instr, UnOp):
                if not stack:
                    raise PdfError("Parse error computing convolution: not enough values in the stack.")
            elif isinstance(instr, BinOp):
                if len(stack) < 2:
                    raise PdfError("Parse error computing convolution: not enough values in the stack.")
                x = stack.pop()
                y = stack.pop()
                stack.append(x & y if instr.op in ADDITIVE else x | y)
            else:
                raise PdfError(f"Parse error computing convolution: unknown operation {instr!r}.")

        if len(stack) != 1:
            raise PdfError("Parse error computing convolution: too many values have been supplied.")
        return sorted(stack[0])
