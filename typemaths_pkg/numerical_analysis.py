"""Numerical analysis: root-finding iterators and limits.

Every method is exposed as a function returning a *generator factory*: give
it a starting point and it yields successively better approximations of a
root, forever. ``limit`` consumes such a sequence until two consecutive
values are within epsilon.

Newton-Raphson iterates $x_{n+1} = x_n - \\frac{f(x_n)}{f'(x_n)}$.

Example:
    >>> import math
    >>> gen = newton_raphson(math.log, lambda x: 1 / x)
    >>> round(limit(1e-6, gen(2)), 6)
    1.0
"""

from __future__ import annotations

import math
from typing import Callable, Iterator, Sequence

from . import generators
from .config import DEFAULT_TOLERANCE, MAX_ITERATIONS
from .logging_config import get_logger
from .types import ConvergenceError, RealFunction

logger = get_logger("numerical_analysis")

ROOT_METHODS = ("newton", "secant", "bisection")


def newton_raphson_step(f: RealFunction, df: RealFunction) -> RealFunction:
    """Return the map $x \\mapsto x - f(x)/f'(x)$."""
    return lambda x: x - f(x) / df(x)


def iterate(step: RealFunction) -> Callable[[float], Iterator[float]]:
    """Return ``x0 -> x0, step(x0), step(step(x0)), ...``."""
    return lambda x0: generators.iterate(step, x0)


def newton_raphson(
    f: RealFunction, df: RealFunction
) -> Callable[[float], Iterator[float]]:
    """Newton-Raphson method; needs the derivative ``df``."""
    return iterate(newton_raphson_step(f, df))


def secant(f: RealFunction) -> Callable[[Sequence[float]], Iterator[float]]:
    """Secant method started from two points ``(x0, x1)``.

    Once two consecutive points have the same image the secant line is flat:
    the sequence stays put if that image is zero and fails otherwise.

    Raises:
        ConvergenceError: ``FLAT_SECANT`` when f(x0) == f(x1) != 0
    """

    def gen(start: Sequence[float]) -> Iterator[float]:
        x0, x1 = start
        f0, f1 = f(x0), f(x1)
        yield x0
        while True:
            yield x1
            if f1 == f0:
                if f1 != 0:
                    raise ConvergenceError(
                        f"Secant through x={x0} and x={x1} is flat at f={f1}",
                        "FLAT_SECANT",
                    )
                continue
            x0, x1 = x1, x1 - f1 * (x1 - x0) / (f1 - f0)
            f0, f1 = f1, f(x1)

    return gen


def bisection(f: RealFunction) -> Callable[[Sequence[float]], Iterator[float]]:
    """Bisection method on a bracketing interval ``(a, b)``, yielding midpoints.

    An endpoint that is already a root is yielded forever.

    Raises:
        ConvergenceError: when ``f(a)`` and ``f(b)`` have the same sign
    """

    def gen(interval: Sequence[float]) -> Iterator[float]:
        a, b = interval
        fa, fb = f(a), f(b)
        if fa == 0 or fb == 0:
            root = a if fa == 0 else b
            while True:
                yield root
        if fa * fb > 0:
            raise ConvergenceError(
                f"f({a}) and f({b}) have the same sign, no root is bracketed",
                "BAD_BRACKET",
            )
        while True:
            mid = (a + b) / 2
            yield mid
            fm = f(mid)
            if fm == 0:
                a = b = mid
            elif fa * fm < 0:
                b, fb = mid, fm
            else:
                a, fa = mid, fm

    return gen


def limit(
    epsilon: float, gen: Iterator[float], max_iterations: int | None = None
) -> float:
    """Return the first element of ``gen`` within ``epsilon`` of its predecessor.

    Raises:
        ConvergenceError: after ``max_iterations`` steps without converging,
            or when the sequence ends or becomes NaN
    """
    if max_iterations is None:
        max_iterations = MAX_ITERATIONS
    try:
        current = next(gen)
    except StopIteration:
        raise ConvergenceError("Empty sequence has no limit") from None
    for step in range(max_iterations):
        previous = current
        try:
            current = next(gen)
        except StopIteration:
            raise ConvergenceError("Sequence ended before converging") from None
        if math.isnan(current):
            raise ConvergenceError(f"Sequence diverged (NaN) after {step + 1} steps")
        if abs(current - previous) <= epsilon:
            logger.debug("Converged to %r after %d steps", current, step + 1)
            return current
    raise ConvergenceError(f"No convergence within {max_iterations} iterations")


def find_root(
    f: RealFunction,
    method: str,
    start: Sequence[float],
    df: RealFunction | None = None,
    tolerance: float = DEFAULT_TOLERANCE,
) -> float:
    """Run one of the root-finding methods to convergence.

    Args:
        f: Function whose root is wanted
        method: "newton", "secant" or "bisection"
        start: one point for Newton, two points (or an interval) otherwise
        df: Derivative of ``f``, required for Newton
        tolerance: Convergence epsilon passed to ``limit``

    Returns:
        Approximated root
    """
    if method == "newton":
        if df is None:
            raise ValueError("Newton-Raphson needs the derivative df")
        if len(start) != 1:
            raise ValueError("Newton-Raphson needs exactly one starting point")
        gen = newton_raphson(f, df)(start[0])
    elif method == "secant":
        if len(start) != 2:
            raise ValueError("Secant method needs two starting points")
        gen = secant(f)(start)
    elif method == "bisection":
        if len(start) != 2:
            raise ValueError("Bisection needs an interval (a, b)")
        gen = bisection(f)(start)
    else:
        raise ValueError(
            f"Unknown root-finding method {method!r} (expected one of {', '.join(ROOT_METHODS)})"
        )
    logger.debug("Finding root with %s from %r", method, list(start))
    return limit(tolerance, gen)
