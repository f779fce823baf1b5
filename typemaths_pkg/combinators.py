"""Common combinators used by the other modules.

Combinatory logic eliminates the need for quantified variables by building
functions out of other functions. These helpers are used by the parser
engine (``lift_a2`` curries its argument) and by the generators module.

Example:
    >>> from typemaths_pkg.combinators import compose
    >>> succ = lambda x: x + 1
    >>> double = lambda x: x * 2
    >>> compose(double, succ)(3)
    8
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


def identity(x: A) -> A:
    """Identity function: $f(x) = x$."""
    return x


def constant(x: A) -> Callable[[Any], A]:
    """Return a function that ignores its argument and always returns ``x``."""
    return lambda _: x


def compose(g: Callable[[B], C], f: Callable[[A], B]) -> Callable[[A], C]:
    """Function composition.

    ``compose(g, f)`` returns the composite function $g \\circ f$, that is
    ``lambda x: g(f(x))``.
    """
    return lambda x: g(f(x))


def flip(f: Callable[[A, B], C]) -> Callable[[B, A], C]:
    """``flip(f)`` takes its two arguments in the reverse order of ``f``."""
    return lambda y, x: f(x, y)


# curryN converts an uncurried function of N arguments to a curried one,
# uncurryN does the reverse.


def curry2(f: Callable[[Any, Any], Any]) -> Callable:
    return lambda x: lambda y: f(x, y)


def curry3(f: Callable[[Any, Any, Any], Any]) -> Callable:
    return lambda x: lambda y: lambda z: f(x, y, z)


def curry4(f: Callable[[Any, Any, Any, Any], Any]) -> Callable:
    return lambda x: lambda y: lambda z: lambda w: f(x, y, z, w)


def curry5(f: Callable[[Any, Any, Any, Any, Any], Any]) -> Callable:
    return lambda x: lambda y: lambda z: lambda w: lambda u: f(x, y, z, w, u)


def curry6(f: Callable[[Any, Any, Any, Any, Any, Any], Any]) -> Callable:
    return lambda x: lambda y: lambda z: lambda w: lambda u: lambda v: f(
        x, y, z, w, u, v
    )


def uncurry2(f: Callable) -> Callable[[Any, Any], Any]:
    return lambda x, y: f(x)(y)


def uncurry3(f: Callable) -> Callable[[Any, Any, Any], Any]:
    return lambda x, y, z: f(x)(y)(z)


def uncurry4(f: Callable) -> Callable[[Any, Any, Any, Any], Any]:
    return lambda x, y, z, w: f(x)(y)(z)(w)


def uncurry5(f: Callable) -> Callable[[Any, Any, Any, Any, Any], Any]:
    return lambda x, y, z, w, u: f(x)(y)(z)(w)(u)


def uncurry6(f: Callable) -> Callable[[Any, Any, Any, Any, Any, Any], Any]:
    return lambda x, y, z, w, u, v: f(x)(y)(z)(w)(u)(v)
