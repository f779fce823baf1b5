"""Tests for failure modes and invalid input handling."""

import pytest

from typemaths_pkg import api, numerical_analysis
from typemaths_pkg.expression import make_expression_parser, validate_input
from typemaths_pkg.handlers import ArithmeticHandler, DifferentiableHandler
from typemaths_pkg.types import (
    ConvergenceError,
    OperationError,
    TokenizeError,
    TypeMathsError,
    ValidationError,
)


class TestInputValidationFailures:
    """Test input validation failure modes."""

    def test_empty_input(self):
        """Test empty input."""
        result = api.evaluate("")
        assert result.ok is False
        assert result.error_code == "EMPTY_INPUT"

    def test_whitespace_only(self):
        """Test whitespace-only input."""
        assert api.evaluate("   ").error_code == "EMPTY_INPUT"

    def test_non_string_input(self):
        with pytest.raises(ValidationError):
            validate_input(42)
        assert api.evaluate(None).ok is False

    def test_too_long_input(self):
        """Test input exceeding maximum length."""
        result = api.evaluate("1" * 10001)
        assert result.ok is False
        assert result.error_code == "TOO_LONG"

    def test_unbalanced_parentheses(self):
        """Test unbalanced parentheses."""
        assert api.evaluate("(1 + 2").error_code == "NO_PARSE"
        assert api.evaluate("1 + 2)").error_code == "NO_PARSE"

    def test_unexpected_character(self):
        result = api.evaluate("2 & 3")
        assert result.error_code == "TOKENIZE_ERROR"
        assert "position 2" in result.error

    def test_long_sum(self):
        result = api.evaluate("+".join(["1"] * 2000))
        assert result.ok is True
        assert result.value == 2000.0

    def test_deep_nesting(self):
        result = api.evaluate("(" * 200 + "1" + ")" * 200)
        assert result.ok is False
        assert result.error_code == "TOO_DEEP"

    def test_python_code_is_rejected(self):
        """Input is never handed to eval()."""
        assert api.evaluate("__import__('os')").ok is False


class TestMathFailures:
    """Test numeric failures surfaced as results."""

    def test_division_by_zero(self):
        result = api.evaluate("1/0")
        assert result.ok is False
        assert result.error == "Division by zero"
        assert result.error_code == "MATH_ERROR"

    def test_domain_error(self):
        result = api.evaluate("sqrt(-1)")
        assert result.ok is False
        assert result.error_code == "MATH_ERROR"

    def test_overflow(self):
        assert api.evaluate("exp(1000)").error_code == "MATH_ERROR"

    def test_unknown_function(self):
        result = api.evaluate("foo(1)")
        assert result.error_code == "UNKNOWN_OPERATION"
        assert "foo/1" in result.error

    def test_wrong_arity(self):
        assert api.evaluate("sin(1, 2)").error_code == "UNKNOWN_OPERATION"

    def test_unknown_method(self):
        result = api.find_root("x", [1], method="magic")
        assert result.ok is False
        assert result.error_code == "MATH_ERROR"

    def test_bad_bracket(self):
        result = api.find_root("x^2 + 1", [-1, 1], method="bisection")
        assert result.error_code == "BAD_BRACKET"

    def test_flat_secant(self):
        result = api.find_root("x^2-4", [-1, 1], method="secant")
        assert result.ok is False
        assert result.error_code == "FLAT_SECANT"

    def test_bisection_root_at_endpoint(self):
        result = api.find_root("x-2", [2, 3], method="bisection")
        assert result.ok is True
        assert result.value == 2.0

    def test_no_convergence(self, monkeypatch):
        monkeypatch.setattr(numerical_analysis, "MAX_ITERATIONS", 5)
        # Newton cycles between 0 and 1 on x^3 - 2x + 2
        result = api.find_root("x^3 - 2*x + 2", [0])
        assert result.ok is False
        assert result.error_code == "NO_CONVERGENCE"

    def test_unexpected_errors_are_internal(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(api, "parse_expression", boom)
        result = api.evaluate("1")
        assert result.ok is False
        assert result.error_code == "INTERNAL_ERROR"


class TestEngineFailures:
    """The engine raises; it does not return error results."""

    def test_tokenize_error_is_typemaths_error(self):
        parse = make_expression_parser(ArithmeticHandler())
        with pytest.raises(TypeMathsError):
            parse("1 ? 2")
        with pytest.raises(TokenizeError):
            parse("1 ? 2")

    def test_handler_error_propagates(self):
        parse = make_expression_parser(DifferentiableHandler())
        with pytest.raises(OperationError):
            parse("abs(x)")

    def test_convergence_error(self):
        with pytest.raises(ConvergenceError):
            numerical_analysis.limit(1e-6, iter([1.0, 2.0]))
