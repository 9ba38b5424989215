"""Main entry point for running pemdas_pkg as a module.

This allows running PEMDAS with:
    python -m pemdas_pkg
    python -m pemdas_pkg --health-check
    python -m pemdas_pkg -s "(x+1)^2"

This is equivalent to running:
    python -m pemdas_pkg.cli
    python pemdas.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
