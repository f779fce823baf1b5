"""Expression handlers: the semantic actions plugged into the expression grammar.

Each handler turns numeric literals and named operations into its own
result type:

- ``ArithmeticHandler`` evaluates to floats
- ``SympyHandler`` builds SymPy expressions (free identifiers become symbols)
- ``DifferentiableHandler`` builds ``Differentiable`` functions of one variable

Operations are looked up by ``"name/arity"``. An unknown pair raises
``OperationError``; the grammar does not catch it, so it ends the parse.
"""

from __future__ import annotations

import abc
import math
import operator
from typing import Any, Callable, Mapping

import sympy as sp

from . import differential
from .config import DEFAULT_VARIABLE, SYMPY_CONSTANTS, SYMPY_OPERATIONS
from .differential import Differentiable
from .types import OperationError


class BaseHandler(abc.ABC):
    """Handler dispatching ``from_operation`` through an ``operations`` table."""

    operations: Mapping[str, Callable[..., Any]] = {}

    @abc.abstractmethod
    def from_number(self, n: float) -> Any:
        ...

    def from_constant(self, name: str) -> Any:
        """Value of a bare identifier, or raise ``OperationError(name, 0)``."""
        raise OperationError(name, 0)

    def from_operation(self, name: str, args: list[Any]) -> Any:
        if not args:
            return self.from_constant(name)
        func = self.operations.get(f"{name}/{len(args)}")
        if func is None:
            raise OperationError(name, len(args))
        return func(*args)


class ArithmeticHandler(BaseHandler):
    """Evaluate expressions to floats.

    Args:
        variables: values for free identifiers, e.g. ``{"x": 2.0}``
    """

    operations = {
        "+/1": operator.pos,
        "+/2": operator.add,
        "-/1": operator.neg,
        "-/2": operator.sub,
        "*/2": operator.mul,
        "//2": operator.truediv,
        "%/2": operator.mod,
        "^/2": math.pow,
        "**/2": math.pow,
        "sqrt/1": math.sqrt,
        "sin/1": math.sin,
        "cos/1": math.cos,
        "tan/1": math.tan,
        "asin/1": math.asin,
        "acos/1": math.acos,
        "atan/1": math.atan,
        "sinh/1": math.sinh,
        "cosh/1": math.cosh,
        "tanh/1": math.tanh,
        "exp/1": math.exp,
        "ln/1": math.log,
        "log/1": math.log,
        "log/2": lambda x, base: math.log(x) / math.log(base),
        "abs/1": abs,
        "mod/2": operator.mod,
    }

    def __init__(self, variables: Mapping[str, float] | None = None):
        self.variables = dict(variables or {})

    def from_number(self, n: float) -> float:
        return n

    def from_constant(self, name: str) -> float:
        if name in self.variables:
            return float(self.variables[name])
        if name in SYMPY_CONSTANTS:
            return float(SYMPY_CONSTANTS[name])
        raise OperationError(name, 0)


class SympyHandler(BaseHandler):
    """Build SymPy expressions; unknown bare identifiers become symbols."""

    operations = {
        "+/1": operator.pos,
        "+/2": operator.add,
        "-/1": operator.neg,
        "-/2": operator.sub,
        "*/2": operator.mul,
        "//2": operator.truediv,
        "%/2": sp.Mod,
        "^/2": operator.pow,
        "**/2": operator.pow,
        **SYMPY_OPERATIONS,
    }

    def from_number(self, n: float) -> sp.Expr:
        if float(n).is_integer():
            return sp.Integer(int(n))
        return sp.Float(n)

    def from_constant(self, name: str) -> sp.Expr:
        if name in SYMPY_CONSTANTS:
            return SYMPY_CONSTANTS[name]
        return sp.Symbol(name)


class DifferentiableHandler(BaseHandler):
    """Build differentiable functions of ``variable``."""

    operations = {
        "+/1": lambda f: f,
        "+/2": differential.add,
        "-/1": differential.neg,
        "-/2": differential.sub,
        "*/2": differential.mul,
        "//2": differential.div,
        "^/2": differential.pow,
        "**/2": differential.pow,
        "sqrt/1": differential.sqrt,
        "exp/1": differential.exp,
        "ln/1": differential.ln,
        "log/1": differential.ln,
        "log/2": differential.log,
        "sin/1": differential.sin,
        "cos/1": differential.cos,
        "tan/1": differential.tan,
    }

    def __init__(self, variable: str = DEFAULT_VARIABLE):
        self.variable = variable

    def from_number(self, n: float) -> Differentiable:
        return differential.constant(n)

    def from_constant(self, name: str) -> Differentiable:
        if name == self.variable:
            return differential.identity()
        if name in SYMPY_CONSTANTS:
            return differential.constant(float(SYMPY_CONSTANTS[name]))
        raise OperationError(name, 0)
