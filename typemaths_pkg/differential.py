"""Differential calculus on real functions of one real variable.

A ``Differentiable`` is a real function $f$ that also knows its derivative
$f'$. Derivatives are built lazily by the usual rules, so
``f.derivative().derivative()`` only does work when called.

Example:
    >>> f = mul(constant(4), pow(identity(), constant(2)))   # 4x^2
    >>> f(3), f.derivative()(3)
    (36, 24)
    >>> g = read("x^2 - ln(x)")
    >>> g.derivative()(1)
    1.0
"""

from __future__ import annotations

import math
from typing import Callable, Union

from .config import DEFAULT_VARIABLE
from .types import RealFunction


class Differentiable:
    """A real function paired with a thunk producing its derivative.

    ``value`` is set only for constant functions; ``pow`` uses it to pick
    the power rule. Arithmetic on two constants folds into a constant, so
    exponents such as ``-1`` or ``1/2`` keep their ``value``.
    """

    __slots__ = ("_f", "_df", "value")

    def __init__(
        self,
        f: RealFunction,
        df: Callable[[], Differentiable],
        value: float | None = None,
    ):
        self._f = f
        self._df = df
        self.value = value

    def __call__(self, x: float) -> float:
        return self._f(x)

    def derivative(self) -> Differentiable:
        return self._df()

    def __add__(self, other: Operand) -> Differentiable:
        return add(self, _lift(other))

    def __radd__(self, other: Operand) -> Differentiable:
        return add(_lift(other), self)

    def __sub__(self, other: Operand) -> Differentiable:
        return sub(self, _lift(other))

    def __rsub__(self, other: Operand) -> Differentiable:
        return sub(_lift(other), self)

    def __mul__(self, other: Operand) -> Differentiable:
        return mul(self, _lift(other))

    def __rmul__(self, other: Operand) -> Differentiable:
        return mul(_lift(other), self)

    def __truediv__(self, other: Operand) -> Differentiable:
        return div(self, _lift(other))

    def __rtruediv__(self, other: Operand) -> Differentiable:
        return div(_lift(other), self)

    def __pow__(self, other: Operand) -> Differentiable:
        return pow(self, _lift(other))

    def __rpow__(self, other: Operand) -> Differentiable:
        return pow(_lift(other), self)

    def __neg__(self) -> Differentiable:
        return neg(self)

    def __repr__(self) -> str:
        if self.value is not None:
            return f"constant({self.value!r})"
        return "Differentiable()"


Operand = Union[Differentiable, float, int]


def _lift(x: Operand) -> Differentiable:
    if isinstance(x, Differentiable):
        return x
    return constant(x)


# f(x) = x, f'(x) = 1
def identity() -> Differentiable:
    return Differentiable(lambda x: x, lambda: constant(1))


# f(x) = c, f'(x) = 0
def constant(c: float) -> Differentiable:
    return Differentiable(lambda _x: c, lambda: constant(0), value=c)


# (f + g)' = f' + g'
def add(f: Differentiable, g: Differentiable) -> Differentiable:
    if f.value is not None and g.value is not None:
        return constant(f.value + g.value)
    return Differentiable(
        lambda x: f(x) + g(x), lambda: add(f.derivative(), g.derivative())
    )


# (f - g)' = f' - g'
def sub(f: Differentiable, g: Differentiable) -> Differentiable:
    if f.value is not None and g.value is not None:
        return constant(f.value - g.value)
    return Differentiable(
        lambda x: f(x) - g(x), lambda: sub(f.derivative(), g.derivative())
    )


# (-f)' = -f'
def neg(f: Differentiable) -> Differentiable:
    if f.value is not None:
        return constant(-f.value)
    return Differentiable(lambda x: -f(x), lambda: neg(f.derivative()))


# (f * g)' = f' * g + f * g'
def mul(f: Differentiable, g: Differentiable) -> Differentiable:
    if f.value is not None and g.value is not None:
        return constant(f.value * g.value)
    return Differentiable(
        lambda x: f(x) * g(x),
        lambda: add(mul(f.derivative(), g), mul(f, g.derivative())),
    )


# (f / g)' = (f' * g - f * g') / g^2
def div(f: Differentiable, g: Differentiable) -> Differentiable:
    if f.value is not None and g.value is not None:
        return constant(f.value / g.value)
    return Differentiable(
        lambda x: f(x) / g(x),
        lambda: div(
            sub(mul(f.derivative(), g), mul(f, g.derivative())),
            pow(g, constant(2)),
        ),
    )


def pow(f: Differentiable, g: Differentiable) -> Differentiable:
    """``f ** g``.

    With a constant exponent $c$ this is the power rule
    $(f^c)' = c f^{c-1} f'$, valid for negative bases too. Otherwise
    $(f^g)' = f^g (g' \\ln f + \\frac{g}{f} f')$, which needs $f > 0$.
    """
    if g.value is not None:
        c = g.value
        return Differentiable(
            lambda x: f(x) ** c,
            lambda: mul(mul(constant(c), pow(f, constant(c - 1))), f.derivative()),
        )
    return Differentiable(
        lambda x: f(x) ** g(x),
        lambda: mul(
            pow(f, g),
            add(mul(g.derivative(), ln(f)), mul(div(g, f), f.derivative())),
        ),
    )


# (e^f)' = e^f * f'
def exp(f: Differentiable) -> Differentiable:
    return Differentiable(
        lambda x: math.exp(f(x)), lambda: mul(exp(f), f.derivative())
    )


# (ln f)' = f' / f
def ln(f: Differentiable) -> Differentiable:
    return Differentiable(
        lambda x: math.log(f(x)), lambda: div(f.derivative(), f)
    )


def log(f: Differentiable, base: Operand = math.e) -> Differentiable:
    """Logarithm of ``f`` in ``base``: $\\log_b f = \\ln f / \\ln b$."""
    return div(ln(f), ln(_lift(base)))


def sqrt(f: Differentiable) -> Differentiable:
    return pow(f, constant(0.5))


# (sin f)' = cos f * f'
def sin(f: Differentiable) -> Differentiable:
    return Differentiable(
        lambda x: math.sin(f(x)), lambda: mul(cos(f), f.derivative())
    )


# (cos f)' = -sin f * f'
def cos(f: Differentiable) -> Differentiable:
    return Differentiable(
        lambda x: math.cos(f(x)), lambda: mul(neg(sin(f)), f.derivative())
    )


# (tan f)' = f' / cos^2 f
def tan(f: Differentiable) -> Differentiable:
    return Differentiable(
        lambda x: math.tan(f(x)),
        lambda: div(f.derivative(), pow(cos(f), constant(2))),
    )


def read(text: str, variable: str = DEFAULT_VARIABLE) -> Differentiable:
    """Parse an expression in ``variable`` into a differentiable function.

    Raises:
        TokenizeError, ParseError, OperationError: on malformed input
    """
    from .expression import parse_expression
    from .handlers import DifferentiableHandler

    return parse_expression(DifferentiableHandler(variable), text)
