"""Parsing mathematical expressions.

The grammar is a recursive-descent grammar built only from parser
combinators, with operator precedence given by layered productions::

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/' | '%') factor)*
    factor     := ('+' | '-') factor
                | base (('^' | '**') base)?
    base       := number
                | '(' expression ')'
                | identifier '(' expression (',' expression)* ')'
                | identifier

Binary operators are left-associative. Unary signs bind looser than power,
so ``-x^2`` is ``-(x^2)``. Power does not chain: ``2^3^2`` parses ``2^3``
and leaves ``^ 2`` unconsumed; use parentheses for repeated powers.

What the grammar builds is decided by an ``ExprHandler``: numbers go through
``from_number`` and every operator, function call or bare identifier goes
through ``from_operation(name, args)``.
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Generic, Iterable, Protocol, Sequence, TypeVar

from .config import EXPRESSION_TOKEN_RULES, MAX_INPUT_LENGTH, MAX_NESTING_DEPTH
from .logging_config import get_logger
from .parsing import Parser, satisfy
from .tokenizer import Token, Tokenizer, strip_whitespace
from .types import ParseError, ValidationError

logger = get_logger("expression")

E = TypeVar("E")

Tokens = Sequence[Token]

# Tokenizer for mathematical expressions.
tokenizer = Tokenizer(EXPRESSION_TOKEN_RULES)


class ExprHandler(Protocol[E]):
    """Semantic actions invoked by the expression grammar."""

    def from_number(self, n: float) -> E:
        ...

    def from_operation(self, name: str, args: list[E]) -> E:
        ...


# Token-level parsers


def token_of(token_type: str) -> Parser[Tokens, Token]:
    return satisfy(lambda token: token.type == token_type)


def operator(*symbols: str) -> Parser[Tokens, Token]:
    return satisfy(lambda token: token.type == "operator" and token.text in symbols)


class ExpressionGrammar(Generic[E]):
    """The expression productions, closed over one handler."""

    def __init__(self, handler: ExprHandler[E]):
        self.handler = handler

    def _apply(self, name: str, args: list[E]) -> Parser[Tokens, E]:
        # Deferred so the handler only runs when the parse reaches this point
        return Parser(lambda state: [(self.handler.from_operation(name, args), state)])

    def _fold(self, acc: E, step: tuple[str, E]) -> E:
        name, rhs = step
        return self.handler.from_operation(name, [acc, rhs])

    def _chain(
        self, operand: Callable[[], Parser[Tokens, E]], op: Parser[Tokens, Token]
    ) -> Parser[Tokens, E]:
        """``operand (op operand)*`` folded to the left.

        The repetition is a ``many`` loop, so a long chain costs iterations
        rather than stack frames.
        """
        step = op.bind(lambda tok: operand().fmap(lambda rhs: (tok.text, rhs)))
        return operand().bind(
            lambda first: step.many().fmap(lambda rest: reduce(self._fold, rest, first))
        )

    def expression(self) -> Parser[Tokens, E]:
        return self._chain(self.term, operator("+", "-"))

    def term(self) -> Parser[Tokens, E]:
        return self._chain(self.factor, operator("*", "/", "%"))

    def factor(self) -> Parser[Tokens, E]:
        unary = operator("+", "-").bind(
            lambda tok: self.factor().bind(lambda arg: self._apply(tok.text, [arg]))
        )
        power = self.base().bind(
            lambda lhs: operator("^", "**")
            .bind(
                lambda tok: self.base().bind(
                    lambda rhs: self._apply(tok.text, [lhs, rhs])
                )
            )
            .or_(Parser.pure(lhs))
        )
        return unary.or_(power)

    def base(self) -> Parser[Tokens, E]:
        lparen = token_of("lparen")
        rparen = token_of("rparen")
        comma = token_of("comma")
        identifier = token_of("identifier")

        number = token_of("number").fmap(
            lambda tok: self.handler.from_number(float(tok.text))
        )
        parenthesized = lparen.bind(lambda _: self.expression()).skip(rparen)
        call = identifier.bind(
            lambda name: lparen.then(self.expression()).bind(
                lambda first: comma.then(self.expression())
                .many()
                .skip(rparen)
                .bind(lambda rest: self._apply(name.text, [first] + rest))
            )
        )
        constant = identifier.bind(lambda name: self._apply(name.text, []))
        return number.or_(parenthesized).or_(call).or_(constant)


def validate_input(text: str) -> str:
    """Reject input the tokenizer should never see (non-strings, oversized text)."""
    if not isinstance(text, str):
        raise ValidationError("Expression must be a string")
    if len(text) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )
    return text


def nesting_depth(tokens: Iterable[Token]) -> int:
    """Deepest nesting of ``tokens``: open parentheses plus a run of unary signs."""
    depth = deepest = 0
    signs = 0
    prefix = True  # a sign here would be unary
    for token in tokens:
        if token.type == "lparen":
            depth += 1
            signs = 0
            prefix = True
        elif token.type == "rparen":
            depth = max(depth - 1, 0)
            prefix = False
        elif token.type == "operator":
            if prefix and token.text in ("+", "-"):
                signs += 1
            else:
                signs = 0
            prefix = True
        else:
            signs = 0
            prefix = token.type == "comma"
        deepest = max(deepest, depth + signs)
    return deepest


def check_nesting(tokens: Sequence[Token]) -> Sequence[Token]:
    depth = nesting_depth(tokens)
    if depth > MAX_NESTING_DEPTH:
        raise ValidationError(
            f"Expression nested too deeply ({depth} > {MAX_NESTING_DEPTH})", "TOO_DEEP"
        )
    return tokens


def make_expression_parser(
    handler: ExprHandler[E], lexer: Tokenizer | None = None
) -> Callable[[str], list[tuple[E, tuple[Token, ...]]]]:
    """Given a handler, return a function parsing text into ``(value, leftover)`` pairs.

    Whitespace tokens are always removed before the grammar runs. Tokenizer
    errors and handler errors propagate; "no parse" is an empty list.

    Raises:
        ValidationError: ``TOO_LONG`` or ``TOO_DEEP`` input
    """
    lexer = lexer or tokenizer
    grammar = ExpressionGrammar(handler)

    def parse(text: str) -> list[tuple[E, tuple[Token, ...]]]:
        tokens = check_nesting(strip_whitespace(lexer.tokenize(validate_input(text))))
        try:
            results = grammar.expression().run(tokens)
        except RecursionError:
            raise ValidationError("Expression nested too deeply", "TOO_DEEP") from None
        logger.debug("Parsed %r into %d result(s)", text, len(results))
        return results

    return parse


def parse_complete(results: list[tuple[E, Any]]) -> E:
    """Return the first value that consumed all tokens.

    Raises:
        ParseError: if no result has an empty leftover
    """
    for value, leftover in results:
        if not leftover:
            return value
    if results:
        _, leftover = results[0]
        raise ParseError(f"Unexpected token {leftover[0].text!r}")
    raise ParseError("Invalid expression: no parse")


def parse_expression(handler: ExprHandler[E], text: str) -> E:
    """Parse ``text`` completely with ``handler``."""
    return parse_complete(make_expression_parser(handler)(text))
