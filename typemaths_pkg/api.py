"""Public API for TypeMaths - returns structured objects without side effects."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

import sympy as sp

from . import config
from .differential import read
from .expression import parse_expression
from .handlers import ArithmeticHandler, SympyHandler
from .logging_config import get_logger
from .numerical_analysis import find_root as _find_root
from .types import EvalResult, TypeMathsError, ValidationError

logger = get_logger("api")


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)


def _require_text(expression: str) -> str:
    if not isinstance(expression, str) or not expression.strip():
        raise ValidationError("Empty input", "EMPTY_INPUT")
    return expression


def _guarded(action: str, func: Callable[[], EvalResult]) -> EvalResult:
    """Run ``func`` and turn expected failures into ``EvalResult(ok=False)``."""
    try:
        return func()
    except TypeMathsError as e:
        return EvalResult(ok=False, error=str(e), error_code=e.code)
    except ZeroDivisionError:
        return EvalResult(ok=False, error="Division by zero", error_code="MATH_ERROR")
    except (ValueError, OverflowError, TypeError) as e:
        return EvalResult(
            ok=False, error=f"{action.capitalize()} error: {e}", error_code="MATH_ERROR"
        )
    except Exception as e:
        logger.error(f"Unexpected {action} error: {e}", exc_info=True)
        return EvalResult(
            ok=False,
            error=f"{action.capitalize()} failed unexpectedly",
            error_code="INTERNAL_ERROR",
        )


def evaluate(expression: str, variables: Mapping[str, float] | None = None) -> EvalResult:
    """Evaluate a mathematical expression numerically.

    Args:
        expression: Expression string (e.g., "1+2*3", "ln(cos(0)+1-1)")
        variables: Values for free identifiers (e.g., {"x": 2.0})

    Returns:
        EvalResult with the formatted result and the float value

    Example:
        >>> evaluate("(cos(0)+1)^2").value
        4.0
    """

    def run() -> EvalResult:
        value = parse_expression(
            ArithmeticHandler(variables), _require_text(expression)
        )
        return EvalResult(ok=True, result=format_number(value), value=float(value))

    return _guarded("evaluation", run)


def differentiate(expression: str, variable: str | None = None) -> EvalResult:
    """Differentiate an expression symbolically with SymPy.

    Args:
        expression: Expression string (e.g., "x^3")
        variable: Variable to differentiate with respect to (default: config.DEFAULT_VARIABLE)

    Returns:
        EvalResult with derivative as result
    """

    def run() -> EvalResult:
        expr = parse_expression(SympyHandler(), _require_text(expression))
        var_sym = sp.Symbol(variable or config.DEFAULT_VARIABLE)
        return EvalResult(ok=True, result=str(sp.simplify(sp.diff(expr, var_sym))))

    return _guarded("differentiation", run)


def derivative_at(
    expression: str, x: float, variable: str | None = None
) -> EvalResult:
    """Evaluate the derivative of an expression at a point.

    Example:
        >>> derivative_at("4*x^2", 3).value
        24.0
    """

    def run() -> EvalResult:
        f = read(_require_text(expression), variable or config.DEFAULT_VARIABLE)
        value = f.derivative()(x)
        return EvalResult(ok=True, result=format_number(value), value=float(value))

    return _guarded("differentiation", run)


def find_root(
    expression: str,
    start: Sequence[float],
    method: str | None = None,
    tolerance: float | None = None,
    variable: str | None = None,
) -> EvalResult:
    """Find a root of an expression in one variable.

    Args:
        expression: Expression string (e.g., "ln(x)")
        start: Starting point(s): one for Newton, two for secant/bisection
        method: "newton", "secant" or "bisection" (default: config.DEFAULT_ROOT_METHOD)
        tolerance: Convergence epsilon (default: config.DEFAULT_TOLERANCE)
        variable: Name of the variable (default: config.DEFAULT_VARIABLE)

    Returns:
        EvalResult with the root as value
    """

    def run() -> EvalResult:
        f = read(_require_text(expression), variable or config.DEFAULT_VARIABLE)
        root = _find_root(
            f,
            method or config.DEFAULT_ROOT_METHOD,
            list(start),
            df=f.derivative(),
            tolerance=tolerance if tolerance is not None else config.DEFAULT_TOLERANCE,
        )
        return EvalResult(ok=True, result=format_number(root), value=float(root))

    return _guarded("root finding", run)


def validate_expression(expression: str) -> EvalResult:
    """Check that an expression tokenizes and parses completely.

    Returns:
        EvalResult whose result is the parsed SymPy expression as a string
    """

    def run() -> EvalResult:
        expr = parse_expression(SympyHandler(), _require_text(expression))
        return EvalResult(ok=True, result=str(expr))

    return _guarded("validation", run)
