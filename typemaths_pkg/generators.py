"""Lazy sequences built from generator functions.

Generator functions define an iterative algorithm whose execution is not
continuous: values are produced on demand, so infinite sequences such as
``enum_from(1)`` are fine as long as the consumer only takes a prefix.

Example:
    >>> from typemaths_pkg.generators import enum_from, gfilter, gmap, take
    >>> evens = gfilter(lambda x: x % 2 == 0, gmap(lambda x: x * x, enum_from(1)))
    >>> take(5, evens)
    [4, 16, 36, 64, 100]
"""

from __future__ import annotations

import itertools
from typing import Callable, Iterable, Iterator, TypeVar

from .types import Predicate

A = TypeVar("A")
B = TypeVar("B")


def gmap(f: Callable[[A], B], xs: Iterable[A]) -> Iterator[B]:
    """Apply ``f`` to each element of ``xs`` lazily."""
    for x in xs:
        yield f(x)


def gfilter(p: Predicate[A], xs: Iterable[A]) -> Iterator[A]:
    """Keep the elements of ``xs`` that satisfy ``p``."""
    for x in xs:
        if p(x):
            yield x


def take(n: int, xs: Iterable[A]) -> list[A]:
    """Return the first ``n`` elements of ``xs`` as a list (fewer if it runs out)."""
    if n < 0:
        raise ValueError("take() needs a non-negative count")
    return list(itertools.islice(xs, n))


def enum_from(start: float, step: float = 1) -> Iterator[float]:
    """Infinite arithmetic sequence ``start, start+step, start+2*step, ...``."""
    return itertools.count(start, step)


def iterate(f: Callable[[A], A], x0: A) -> Iterator[A]:
    """Infinite sequence of repeated applications: ``x0, f(x0), f(f(x0)), ...``."""
    x = x0
    while True:
        yield x
        x = f(x)
