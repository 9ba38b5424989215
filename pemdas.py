#!/usr/bin/env python3
"""
PEMDAS - Symbolic Calculator

Main entry point for the PEMDAS calculator. This file is a thin wrapper
that delegates all functionality to the pemdas_pkg package.

Usage:
    python pemdas.py                        # Interactive REPL
    python pemdas.py -s "(x+1)^2"           # Simplify expression
    python pemdas.py -d "x^2"               # Differentiate expression
    python pemdas.py --history              # Show past calculations
    python pemdas.py --help                 # Show help
"""

from __future__ import annotations

import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for PEMDAS.

    Delegates to the pemdas_pkg.cli module, which handles argument parsing,
    calculation and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    from pemdas_pkg.cli import main_entry

    return main_entry(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())
