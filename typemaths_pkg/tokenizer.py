"""Lexical analysis: converting a character string into a sequence of tokens.

Rules are tried in declaration order at the current scan position and the
first one that matches wins, so ``**`` must be declared before ``*``. The
scan is a single left-to-right pass with no backtracking. Whitespace is
tokenized like anything else; use ``strip_whitespace`` before parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Union

from .logging_config import get_logger
from .types import TokenizeError

logger = get_logger("tokenizer")

WHITESPACE = "whitespace"


@dataclass(frozen=True)
class Token:
    """A classified lexical unit. ``position`` is informational and ignored by ==."""

    type: str
    text: str
    position: int = field(default=-1, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type!r}, {self.text!r})"


RulePattern = Union[str, "re.Pattern[str]"]


class Tokenizer:
    """Tokenizer driven by an ordered mapping of rule name to regex."""

    def __init__(self, rules: Mapping[str, RulePattern]):
        if not rules:
            raise ValueError("Tokenizer needs at least one rule")
        self.rules: list[tuple[str, re.Pattern[str]]] = [
            (name, pattern if isinstance(pattern, re.Pattern) else re.compile(pattern))
            for name, pattern in rules.items()
        ]

    def tokenize(self, text: str) -> list[Token]:
        """Split ``text`` into tokens.

        Raises:
            TokenizeError: if no rule matches at some position
        """
        tokens: list[Token] = []
        pos = 0
        while pos < len(text):
            for name, pattern in self.rules:
                match = pattern.match(text, pos)
                # An empty match would never advance the scan
                if match and match.end() > pos:
                    tokens.append(Token(name, match.group(0), pos))
                    pos = match.end()
                    break
            else:
                logger.debug("No tokenizer rule matches %r at %d", text, pos)
                raise TokenizeError(text, pos)
        return tokens

    def __repr__(self) -> str:
        return f"Tokenizer({[name for name, _ in self.rules]!r})"


def tokenize(rules: Mapping[str, RulePattern], text: str) -> list[Token]:
    """Tokenize ``text`` with a one-off ``Tokenizer`` built from ``rules``."""
    return Tokenizer(rules).tokenize(text)


def strip_whitespace(tokens: Iterable[Token]) -> tuple[Token, ...]:
    """Drop ``whitespace`` tokens; the grammar never skips them itself."""
    return tuple(token for token in tokens if token.type != WHITESPACE)
