from __future__ import annotations

import argparse
import json
from typing import Any

from . import config as _config
from .api import derivative_at, differentiate, evaluate, find_root
from .config import VAR_ASSIGN_RE, VERSION
from .logging_config import get_logger
from .numerical_analysis import ROOT_METHODS
from .types import EvalResult

logger = get_logger("cli")


def _parse_assignment(text: str) -> tuple[str, float]:
    """Parse a ``NAME=VALUE`` command-line binding."""
    match = VAR_ASSIGN_RE.match(text)
    if not match:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    name, value = match.groups()
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value of {name} is not a number: {value!r}")


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    print(res.get("result"))


def _emit(result: EvalResult, output_format: str) -> int:
    print_result_pretty(result.to_dict(), output_format)
    return 0 if result.ok else 1


def print_help_text() -> None:
    print(
        """TypeMaths - expression evaluator

  <expression>        evaluate, e.g. 1*(2+3)*4 or ln(cos(0)+1-1)
  name = <expression> bind a variable for later expressions
  diff <expression>   differentiate with respect to x
  vars                list bound variables
  help                show this text
  quit, exit          leave
"""
    )


def repl_loop(output_format: str = "human") -> None:
    """Interactive read-eval-print loop."""
    variables: dict[str, float] = {}
    while True:
        try:
            line = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not line:
            continue
        if line in ("quit", "exit"):
            return
        if line == "help":
            print_help_text()
            continue
        if line == "vars":
            for name, value in sorted(variables.items()):
                print(f"{name} = {value}")
            continue
        if line.startswith("diff "):
            _emit(differentiate(line[5:]), output_format)
            continue
        assignment = VAR_ASSIGN_RE.match(line)
        if assignment:
            name, expr = assignment.groups()
            result = evaluate(expr, variables)
            if result.ok:
                variables[name] = result.value
            _emit(result, output_format)
            continue
        _emit(evaluate(line, variables), output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the TypeMaths CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="typemaths")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--var",
        type=_parse_assignment,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable for --eval (repeatable)",
    )
    parser.add_argument(
        "-d", "--diff", type=str, help="Differentiate an expression symbolically"
    )
    parser.add_argument(
        "--at",
        type=float,
        help="With --diff: evaluate the derivative at this point instead",
    )
    parser.add_argument(
        "--wrt", type=str, help="Variable for --diff/--root (default: x)"
    )
    parser.add_argument("-r", "--root", type=str, help="Find a root of an expression")
    parser.add_argument(
        "--method",
        type=str,
        choices=list(ROOT_METHODS),
        help="Root-finding method (default: newton)",
    )
    parser.add_argument(
        "--start",
        type=float,
        nargs="+",
        help="Starting point (newton) or two points/interval (secant, bisection)",
    )
    parser.add_argument(
        "--tolerance", type=float, help="Convergence tolerance for --root"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--max-iterations", type=int, help="Iteration cap for root finding"
    )
    parser.add_argument(
        "--doc",
        type=str,
        metavar="OUTPUT_DIR",
        help="Generate Markdown documentation into OUTPUT_DIR and exit",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: TYPEMATHS_LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--log-module",
        action="append",
        default=[],
        metavar="MODULE=LEVEL",
        help="Set the logging level of one module, e.g. parsing=DEBUG (repeatable)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    from .logging_config import parse_module_levels, setup_logging

    # --log-module replaces TYPEMATHS_LOG_MODULE_LEVELS
    try:
        module_levels = parse_module_levels(
            ",".join(args.log_module) or _config.LOG_MODULE_LEVELS
        )
    except ValueError as e:
        parser.error(str(e))
    setup_logging(
        level=args.log_level, log_file=args.log_file, module_levels=module_levels
    )

    # Apply CLI configuration overrides
    if args.precision and args.precision > 0:
        _config.OUTPUT_PRECISION = int(args.precision)
    if args.max_iterations and args.max_iterations > 0:
        from . import numerical_analysis as _na

        _na.MAX_ITERATIONS = int(args.max_iterations)

    if args.version:
        print(VERSION)
        return 0
    if args.doc:
        from .docgen import main as doc_main

        return doc_main(["--output-dir", args.doc])
    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        if expr.startswith(">>>"):
            expr = expr[3:].strip()
        logger.debug("Evaluating %r with %r", expr, dict(args.var))
        return _emit(evaluate(expr, dict(args.var)), args.format)
    if args.diff is not None:
        if args.at is not None:
            return _emit(derivative_at(args.diff, args.at, args.wrt), args.format)
        return _emit(differentiate(args.diff, args.wrt), args.format)
    if args.root is not None:
        if not args.start:
            parser.error("--root needs --start")
        return _emit(
            find_root(
                args.root,
                args.start,
                method=args.method,
                tolerance=args.tolerance,
                variable=args.wrt,
            ),
            args.format,
        )
    repl_loop(args.format)
    return 0
