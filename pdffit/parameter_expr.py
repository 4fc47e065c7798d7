"""
Arithmetic expressions of fit parameters and constants.

    >>> a, b = Parameter("a", 2.0), Parameter("b", 3.0)
    >>> (a * b + 1).evaluate()
    7.0

Expressions are postfix programs of ParamRef / Const / BinOp / UnOp
instructions. They read the current values of the parameters they were
built from, and can scale or divide a Pdf.
"""

from __future__ import annotations
from numbers import Real
from typing import Dict, List

from .operations import Op
from .program import BinOp, Const, ParamRef, UnOp, execute, render
from .variables import Parameter


class ParameterExpr:

    def __init__(self, operand=None):
        self._program: List = []
        self._pars: Dict[str, Parameter] = {}

        if operand is not None:
            self._append_operand(operand)

    # -------------------- Construction --------------------

    def _append_operand(self, operand) -> None:
        if isinstance(operand, ParameterExpr):
            self._pars.update(operand._pars)
            self._program.extend(operand._program)
        elif isinstance(operand, Parameter):
            self._pars[operand.name] = operand
            self._program.append(ParamRef(operand.name))
        elif isinstance(operand, Real):
            self._program.append(Const(float(operand)))
        else:
            raise TypeError(f"Cannot build a parameter expression from {type(operand).__name__}")

    def _combine(self, other, op: Op, reflected: bool = False):
        if not isinstance(other, (ParameterExpr, Parameter, Real)):
            return NotImplemented

        result = ParameterExpr()
        first, second = (other, self) if reflected else (self, other)
        result._append_operand(first)
        result._append_operand(second)
        result._program.append(BinOp(op))
        return result

    def apply(self, op: Op) -> "ParameterExpr":
        """Return a new expression with unary `op` applied to this one."""
        result = ParameterExpr(self)
        result._program.append(UnOp(op))
        return result

    # -------------------- Accessors --------------------

    @property
    def program(self) -> tuple:
        return tuple(self._program)

    @property
    def parameters(self) -> Dict[str, Parameter]:
        return dict(self._pars)

    def par_names(self) -> List[str]:
        return sorted(self._pars)

    def evaluate(self) -> float:
        return execute(self._program, self._load)

    def _load(self, instr) -> float:
        if isinstance(instr, ParamRef):
            return self._pars[instr.name].value
        return instr.value

    # -------------------- Operators --------------------

    def __add__(self, other):
        return self._combine(other, Op.PLUS)

    def __radd__(self, other):
        return self._combine(other, Op.PLUS, reflected=True)

    def __sub__(self, other):
        return self._combine(other, Op.MINUS)

    def __rsub__(self, other):
        return self._combine(other, Op.MINUS, reflected=True)

    def __mul__(self, other):
        return self._combine(other, Op.MULT)

    def __rmul__(self, other):
        return self._combine(other, Op.MULT, reflected=True)

    def __truediv__(self, other):
        return self._combine(other, Op.DIV)

    def __rtruediv__(self, other):
        return self._combine(other, Op.DIV, reflected=True)

    def __pow__(self, other):
        return self._combine(other, Op.POW)

    def __rpow__(self, other):
        return self._combine(other, Op.POW, reflected=True)

    def __neg__(self):
        return self.apply(Op.MINUS)

    def __repr__(self) -> str:
        return f"ParameterExpr({render(self._program)})"


def _unary(op: Op):
    def func(x) -> ParameterExpr:
        return ParameterExpr(x).apply(op)
    func.__name__ = op.name.lower()
    func.__doc__ = f"{op.name.lower()}(x) as a parameter expression."
    return func


exp = _unary(Op.EXP)
log = _unary(Op.LOG)
sin = _unary(Op.SIN)
cos = _unary(Op.COS)
tan = _unary(Op.TAN)
