"""Parser combinator engine.

A ``Parser`` wraps a pure function from an input state ``S`` (a string or a
tuple of tokens) to a list of ``(result, remaining_input)`` pairs, one per
way the parser can consume a prefix of the input. An empty list is failure,
so backtracking needs no shared cursor: every alternative is run against the
same immutable input value.

The parser is a functor (``fmap``), an applicative (``pure``, ``ap``,
``lift_a2``), a monad (``bind``, ``join``) and an alternative (``empty``,
``or_``, ``many``, ``some``). Only ``satisfy`` inspects or consumes input;
everything else is derived.

Example:
    >>> digit = satisfy(str.isdigit)
    >>> digit.some().fmap("".join).run("42a")
    [('42', 'a')]
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

from .combinators import constant, curry2, identity
from .types import Predicate

S = TypeVar("S", bound=Sequence)
A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


class Parser(Generic[S, A]):
    """An immutable parser producing every ``(result, rest)`` pair for an input."""

    __slots__ = ("_parse",)

    def __init__(self, parse: Callable[[S], Iterable[tuple[A, S]]]):
        self._parse = parse

    def run(self, state: S) -> list[tuple[A, S]]:
        """Run the parser, returning all ``(result, remaining_input)`` pairs."""
        return list(self._parse(state))

    __call__ = run

    # Applicative / Alternative units

    @staticmethod
    def pure(x: B) -> Parser[Any, B]:
        """Succeed with ``x`` without consuming input."""
        return Parser(lambda state: [(x, state)])

    @staticmethod
    def empty() -> Parser[Any, Any]:
        """Never succeed, whatever the input."""
        return Parser(lambda state: [])

    fail = empty

    # Functor

    def fmap(self, f: Callable[[A], B]) -> Parser[S, B]:
        """Apply ``f`` to every result, leaving the remaining input untouched."""
        return Parser(lambda state: [(f(a), rest) for a, rest in self.run(state)])

    # Applicative

    def ap(self, other: Parser[S, Any]) -> Parser[S, Any]:
        """Apply every function produced by ``self`` to every value of ``other``.

        ``other`` runs on the input left by each result of ``self``.
        """

        def parse(state):
            return [
                (f(x), rest2)
                for f, rest1 in self.run(state)
                for x, rest2 in other.run(rest1)
            ]

        return Parser(parse)

    # Monad

    def bind(self, f: Callable[[A], Parser[S, B]]) -> Parser[S, B]:
        """Run ``f(a)`` on the rest of the input for every ``(a, rest)``.

        Results are concatenated in order, so everything produced from the
        first alternative of ``self`` comes before the later ones.
        """

        def parse(state):
            return [pair for a, rest in self.run(state) for pair in f(a).run(rest)]

        return Parser(parse)

    def then(self, other: Parser[S, B]) -> Parser[S, B]:
        """Sequence two parsers, keeping the result of the second."""
        return self.bind(constant(other))

    def skip(self, other: Parser[S, Any]) -> Parser[S, A]:
        """Sequence two parsers, keeping the result of the first."""
        return self.bind(lambda a: other.fmap(constant(a)))

    # Alternative

    def or_(self, other: Parser[S, A]) -> Parser[S, A]:
        """Ordered, exclusive choice.

        If ``self`` produces any result those are returned and ``other`` is
        never run; otherwise the results of ``other`` are returned.
        """

        def parse(state):
            results = self.run(state)
            if results:
                return results
            return other.run(state)

        return Parser(parse)

    __or__ = or_

    def many(self) -> Parser[S, list[A]]:
        """Zero or more repetitions, always succeeding.

        Only the first result of each step is carried forward. A step that
        succeeds without consuming input stops the repetition, so a parser
        that can match the empty input does not loop forever.
        """

        def parse(state):
            values = []
            while True:
                results = self.run(state)
                if not results:
                    break
                value, rest = results[0]
                if len(rest) >= len(state):
                    break
                values.append(value)
                state = rest
            return [(values, state)]

        return Parser(parse)

    def some(self) -> Parser[S, list[A]]:
        """One or more repetitions; fails if the first attempt fails."""
        return lift_a2(lambda x, xs: [x] + xs, self, self.many())

    def __repr__(self) -> str:
        name = getattr(self._parse, "__qualname__", repr(self._parse))
        return f"Parser({name})"


def pure(x: A) -> Parser[Any, A]:
    return Parser.pure(x)


def empty() -> Parser[Any, Any]:
    return Parser.empty()


def satisfy(predicate: Predicate[Any]) -> Parser[Any, Any]:
    """Consume exactly one input element if it satisfies ``predicate``."""

    def parse(state):
        if len(state) > 0 and predicate(state[0]):
            return [(state[0], state[1:])]
        return []

    return Parser(parse)


def lift_a2(
    f: Callable[[A, B], C], p: Parser[Any, A], q: Parser[Any, B]
) -> Parser[Any, C]:
    """Lift a binary function over two parsers run in sequence."""
    return p.fmap(curry2(f)).ap(q)


def join(pp: Parser[Any, Parser[Any, A]]) -> Parser[Any, A]:
    """Remove one level of parser nesting."""
    return pp.bind(identity)


def replace_all(p: Parser[Any, Any], x: A) -> Parser[Any, A]:
    """Replace every result of ``p`` with ``x``."""
    return p.fmap(constant(x))


def lazy(thunk: Callable[[], Parser[Any, A]]) -> Parser[Any, A]:
    """Defer building a parser until it runs; used for recursive productions."""
    return Parser(lambda state: thunk().run(state))


def choice(*parsers: Parser[Any, A]) -> Parser[Any, A]:
    """Ordered choice over several parsers, first success wins."""
    result: Parser[Any, A] = Parser.empty()
    for p in reversed(parsers):
        result = p.or_(result)
    return result
