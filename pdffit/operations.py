"""
Arithmetic operations understood by the postfix evaluators.

Binary: plus, minus, mult, div, pow.
Unary:  minus (negation), exp, log, sin, cos, tan.
"""

from __future__ import annotations
import math
from enum import Enum

from .errors import PdfError


class Op(Enum):
    PLUS = "+"
    MINUS = "-"
    MULT = "*"
    DIV = "/"
    POW = "^"
    EXP = "exp"
    LOG = "log"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"

    def __str__(self) -> str:
        return self.value


ADDITIVE = frozenset({Op.PLUS, Op.MINUS})

_BINARY = {
    Op.PLUS: lambda x, y: x + y,
    Op.MINUS: lambda x, y: x - y,
    Op.MULT: lambda x, y: x * y,
    Op.DIV: lambda x, y: x / y,
    Op.POW: lambda x, y: x ** y,
}

_UNARY = {
    Op.MINUS: lambda x: -x,
    Op.EXP: math.exp,
    Op.LOG: math.log,
    Op.SIN: math.sin,
    Op.COS: math.cos,
    Op.TAN: math.tan,
}


def operate(x: float, y: float, op: Op) -> float:
    """Apply binary operation `op` to (x, y); x is the left operand."""
    try:
        func = _BINARY[op]
    except (KeyError, TypeError):
        raise PdfError(f"Parse error: unknown binary operation {op}.") from None
    return func(x, y)


def operate_unary(x: float, op: Op) -> float:
    try:
        func = _UNARY[op]
    except (KeyError, TypeError):
        raise PdfError(f"Parse error: unknown unary operation {op}.") from None
    return func(x)
