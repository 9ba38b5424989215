"""Centralized configuration for PEMDAS.

This module defines:
- The fixed differentiation variable and the symbolic engine name
- Input validation limits (length, depth, node count)
- History store location and size
- Allowed SymPy names and parser transformations

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with PEMDAS_)
"""

import os
import re
from pathlib import Path

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    standard_transformations,
)

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("pemdas")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Differentiation always runs against this variable, never one inferred from input
DIFF_VARIABLE = os.getenv("PEMDAS_DIFF_VARIABLE", "x")

ENGINE = os.getenv("PEMDAS_ENGINE", "sympy")

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("PEMDAS_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("PEMDAS_MAX_EXPRESSION_DEPTH", "100")
)  # tree depth
MAX_EXPRESSION_NODES = int(
    os.getenv("PEMDAS_MAX_EXPRESSION_NODES", "5000")
)  # total nodes

# Power limits checked before SymPy evaluates anything
MAX_EXPONENT = int(os.getenv("PEMDAS_MAX_EXPONENT", "10000"))
MAX_EXPANSION_EXPONENT = int(
    os.getenv("PEMDAS_MAX_EXPANSION_EXPONENT", "50")
)  # for powers of sums like (x+y+1)^n
MAX_RESULT_BITS = int(
    os.getenv("PEMDAS_MAX_RESULT_BITS", "1000000")
)  # size of numeric powers

# History store
HISTORY_FILE = Path(
    os.getenv("PEMDAS_HISTORY_FILE", str(Path.home() / ".pemdas" / "calculations.json"))
)
HISTORY_LIMIT = int(os.getenv("PEMDAS_HISTORY_LIMIT", "1000"))

# Render powers as "^" so results can be pasted back as input
RENDER_CARET = os.getenv("PEMDAS_RENDER_CARET", "true").lower() == "true"

ALLOWED_SYMPY_NAMES = {
    "pi": sp.pi,
    "E": sp.E,
    "I": sp.I,
    "oo": sp.oo,
    "sqrt": sp.sqrt,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "cot": sp.cot,
    "sec": sp.sec,
    "csc": sp.csc,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "log": sp.log,
    "ln": sp.log,
    "exp": sp.exp,
    "Abs": sp.Abs,
    "abs": sp.Abs,  # lowercase alias for convenience
}

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SQRT_UNICODE_REGEX = re.compile(r"√\s*\(")
POWER_REGEX = re.compile(r"\*\*")
