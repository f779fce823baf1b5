"""Type definitions, result dataclasses and exceptions shared by all modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T")

# A real-valued function of a real variable.
RealFunction = Callable[[float], float]

# A Boolean-valued function P: X -> {True, False}.
Predicate = Callable[[T], bool]


@dataclass
class EvalResult:
    """Result of an API call (evaluation, differentiation, root finding)."""

    ok: bool
    result: str | None = None
    value: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.value is not None:
            result_dict["value"] = self.value
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        parts = [f"ok={self.ok}"]
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        return f"EvalResult({', '.join(parts)})"


class TypeMathsError(Exception):
    """Base class for errors raised by TypeMaths."""

    default_code = "ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(TypeMathsError):
    """Raised when input validation fails."""

    default_code = "VALIDATION_ERROR"


class TokenizeError(TypeMathsError):
    """Raised when no tokenizer rule matches at some position of the input."""

    default_code = "TOKENIZE_ERROR"

    def __init__(self, text: str, position: int):
        self.text = text
        self.position = position
        super().__init__(
            f"Unexpected character {text[position]!r} at position {position}"
        )


class ParseError(TypeMathsError):
    """Raised by callers that require a complete parse and got none."""

    default_code = "NO_PARSE"


class OperationError(TypeMathsError):
    """Raised by expression handlers for an unknown operation/arity pair."""

    default_code = "UNKNOWN_OPERATION"

    def __init__(self, name: str, arity: int):
        self.name = name
        self.arity = arity
        super().__init__(f"Unknown operation {name}/{arity}")


class ConvergenceError(TypeMathsError):
    """Raised when an iterative method fails to converge."""

    default_code = "NO_CONVERGENCE"
