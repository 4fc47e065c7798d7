"""
Instructions of the postfix programs evaluated by Pdf and ParameterExpr.

Each instruction carries its own operand, so a program is just a list that
is replayed left to right against a stack.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .errors import PdfError
from .operations import Op, operate, operate_unary


@dataclass(frozen=True, eq=False)
class ModelRef:
    """Borrowed reference to a pdf model owned by the caller."""
    model: Any

    def __repr__(self) -> str:
        return f"m[{type(self.model).__name__}]"


@dataclass(frozen=True)
class ParamRef:
    name: str

    def __repr__(self) -> str:
        return f"p[{self.name}]"


@dataclass(frozen=True)
class Const:
    value: float

    def __repr__(self) -> str:
        return f"c[{self.value:g}]"


@dataclass(frozen=True)
class BinOp:
    op: Op

    def __repr__(self) -> str:
        return f"b[{self.op}]"


@dataclass(frozen=True)
class UnOp:
    op: Op

    def __repr__(self) -> str:
        return f"u[{self.op}]"


def render(program) -> str:
    return " ".join(repr(instr) for instr in program)


def execute(program, load) -> float:
    """
    Run a postfix program on a value stack.

    `load(instr)` returns the value pushed for an operand instruction
    (ModelRef, ParamRef, Const); operators pop their operands, the right
    one first.
    """
    stack = []
    for instr in program:
        if isinstance(instr, (ModelRef, ParamRef, Const)):
            stack.append(load(instr))
        elif isinstance(instr, BinOp):
            if len(stack) < 2:
                raise PdfError("Parse error: not enough values in the stack.")
            y = stack.pop()
            x = stack.pop()
            stack.append(operate(x, y, instr.op))
        elif isinstance(instr, UnOp):
            if not stack:
                raise PdfError("Parse error: not enough values in the stack.")
            stack.append(operate_unary(stack.pop(), instr.op))
        else:
            raise PdfError(f"Parse error: unknown operation {instr!r}.")

    if not stack:
        raise PdfError("Parse error: not enough values in the stack.")
    if len(stack) > 1:
        raise PdfError("Parse error: too many values have been supplied.")
    return stack[0]
