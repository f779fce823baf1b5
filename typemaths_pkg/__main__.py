"""Main entry point for running typemaths_pkg as a module.

This allows running TypeMaths with:
    python -m typemaths_pkg
    python -m typemaths_pkg -e "1*(2+3)*4"
    python -m typemaths_pkg --root "ln(x)" --start 2

This is equivalent to running:
    python typemaths.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
