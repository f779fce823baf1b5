"""Centralized configuration for TypeMaths.

This module defines:
- Numeric defaults for root finding and limits (tolerance, iteration caps)
- Input validation limits
- Output formatting precision
- Tokenizer rules for mathematical expressions

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with TYPEMATHS_)
"""

import os
import re

import sympy as sp

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("typemaths")
except Exception:
    # Package not installed (running from a checkout)
    VERSION = "0.1.0"

# Numerical analysis defaults
DEFAULT_TOLERANCE = float(
    os.getenv("TYPEMATHS_DEFAULT_TOLERANCE", "1e-6")
)  # epsilon used by limit() when none is given
MAX_ITERATIONS = int(
    os.getenv("TYPEMATHS_MAX_ITERATIONS", "10000")
)  # limit() gives up after this many steps
DEFAULT_ROOT_METHOD = os.getenv(
    "TYPEMATHS_DEFAULT_ROOT_METHOD", "newton"
)  # "newton", "secant", "bisection"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("TYPEMATHS_MAX_INPUT_LENGTH", "10000"))  # characters
# Parentheses plus stacked unary signs; every level costs stack frames in the parser
MAX_NESTING_DEPTH = int(os.getenv("TYPEMATHS_MAX_NESTING_DEPTH", "20"))

# Logging: overall level and per-module overrides such as "parsing=DEBUG,api=INFO"
LOG_LEVEL = os.getenv("TYPEMATHS_LOG_LEVEL", "WARNING")
LOG_MODULE_LEVELS = os.getenv("TYPEMATHS_LOG_MODULE_LEVELS", "")

# Output formatting
OUTPUT_PRECISION = int(os.getenv("TYPEMATHS_OUTPUT_PRECISION", "6"))

# Name of the free variable in expressions such as "x^2 - ln(x)"
DEFAULT_VARIABLE = os.getenv("TYPEMATHS_DEFAULT_VARIABLE", "x")

# Order matters: the first rule that matches at the scan position wins.
EXPRESSION_TOKEN_RULES = {
    "identifier": re.compile(r"[A-Za-z_][A-Za-z0-9_]*"),
    "number": re.compile(r"[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"),
    "operator": re.compile(r"\*\*|[-+*/^%]"),
    "lparen": re.compile(r"\("),
    "rparen": re.compile(r"\)"),
    "comma": re.compile(r","),
    "whitespace": re.compile(r"\s+"),
}

VAR_ASSIGN_RE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.+?)\s*$")

# Operations available to the SymPy handler, keyed by "name/arity".
SYMPY_OPERATIONS = {
    "sqrt/1": sp.sqrt,
    "sin/1": sp.sin,
    "cos/1": sp.cos,
    "tan/1": sp.tan,
    "asin/1": sp.asin,
    "acos/1": sp.acos,
    "atan/1": sp.atan,
    "sinh/1": sp.sinh,
    "cosh/1": sp.cosh,
    "tanh/1": sp.tanh,
    "exp/1": sp.exp,
    "ln/1": sp.log,
    "log/1": sp.log,
    "log/2": sp.log,
    "abs/1": sp.Abs,
    "Abs/1": sp.Abs,
    "mod/2": sp.Mod,
}

# Named constants shared by the handlers (zero-arity operations).
SYMPY_CONSTANTS = {
    "pi": sp.pi,
    "e": sp.E,
    "E": sp.E,
    "tau": 2 * sp.pi,
}
