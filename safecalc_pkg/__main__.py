"""Main entry point for running safecalc_pkg as a module.

This allows running SafeCalc with:
    python -m safecalc_pkg -e "2 ** 10"
    python -m safecalc_pkg -e "x ** 2" --integrate 0 1
    python -m safecalc_pkg --version

This is equivalent to running:
    python -m safecalc_pkg.cli
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
