#!/usr/bin/env python3
"""
TypeMaths - functional toolkit for mathematical computation

Main entry point for the TypeMaths command line. This file serves as a
thin wrapper that delegates all functionality to the typemaths_pkg package.

Usage:
    python typemaths.py                         # Interactive REPL
    python typemaths.py -e "(cos(0)+1)^2"       # Evaluate expression
    python typemaths.py --diff "4*x^2" --at 3   # Derivative at a point
    python typemaths.py --help                  # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for TypeMaths.

    Delegates to typemaths_pkg.cli, which handles argument parsing,
    evaluation and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from typemaths_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import typemaths_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
