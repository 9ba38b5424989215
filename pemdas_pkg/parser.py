"""Input parsing and result rendering.

This module handles:
- Input sanitization and validation (length, forbidden tokens, balancing)
- Expression preprocessing (unicode operator variants to ASCII)
- SymPy expression parsing with tree validation
- Result rendering back to input notation
"""

from __future__ import annotations

from functools import lru_cache
from tokenize import TokenError
from typing import Any

import sympy as sp
from sympy import parse_expr

from . import config
from .config import (
    ALLOWED_SYMPY_NAMES,
    MAX_EXPANSION_EXPONENT,
    MAX_EXPONENT,
    MAX_EXPRESSION_DEPTH,
    MAX_EXPRESSION_NODES,
    MAX_INPUT_LENGTH,
    MAX_RESULT_BITS,
    POWER_REGEX,
    SQRT_UNICODE_REGEX,
    TRANSFORMATIONS,
)
from .logging_config import get_logger
from .types import ParseError

logger = get_logger("parser")

# Basic denylist to avoid dangerous tokens before SymPy parsing
FORBIDDEN_TOKENS = (
    "__",
    "import",
    "lambda",
    "eval",
    "exec",
    "open",
    "os.",
    "sys.",
    "subprocess",
    "builtins",
    "getattr",
    "setattr",
    "delattr",
    "compile",
    "globals",
    "locals",
)

_SYMBOL_REPLACEMENTS = {
    "×": "*",
    "·": "*",
    "÷": "/",
    "−": "-",
    "–": "-",
}


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses/brackets are balanced. Returns (is_balanced, error_position)."""
    pairs = {"(": ")", "[": "]", "{": "}"}
    stack: list[tuple[str, int]] = []  # (char, position)
    for i, char in enumerate(input_str):
        if char in pairs:
            stack.append((char, i))
        elif char in pairs.values():
            if not stack:
                return False, i
            opening, _ = stack.pop()
            if pairs[opening] != char:
                return False, i
    if stack:
        return False, stack[0][1]  # Return position of first unmatched
    return True, None


def preprocess(input_str: str) -> str:
    """Preprocess input string for parsing.

    Args:
        input_str: Raw input string from user

    Returns:
        Sanitized string ready for SymPy parsing

    Raises:
        ParseError: If input is empty, too long, contains forbidden tokens,
                    or has unbalanced parentheses/brackets
    """
    input_str = input_str.strip() if input_str else ""
    if not input_str:
        raise ParseError("Empty input", "EMPTY_INPUT")
    if len(input_str) > MAX_INPUT_LENGTH:
        raise ParseError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )

    lowered = input_str.lower()
    for token in FORBIDDEN_TOKENS:
        if token in lowered:
            logger.warning("Blocked forbidden token %r", token)
            raise ParseError(
                f"Input contains forbidden token: {token}", "FORBIDDEN_TOKEN"
            )

    processed = input_str
    for old, new in _SYMBOL_REPLACEMENTS.items():
        processed = processed.replace(old, new)
    processed = SQRT_UNICODE_REGEX.sub("sqrt(", processed)

    balanced, position = is_balanced(processed)
    if not balanced:
        raise ParseError(
            f"Unbalanced parentheses or brackets at position {position}",
            "UNBALANCED",
        )
    return processed


def _validate_expression_tree(expr: sp.Basic, depth: int = 0, node_count: list[int] | None = None) -> None:
    """Reject trees that are too deep or have too many nodes."""
    if node_count is None:
        node_count = [0]
    node_count[0] += 1
    if node_count[0] > MAX_EXPRESSION_NODES:
        raise ParseError(
            f"Expression too complex (>{MAX_EXPRESSION_NODES} nodes)", "TOO_COMPLEX"
        )
    if depth > MAX_EXPRESSION_DEPTH:
        raise ParseError(
            f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)", "TOO_DEEP"
        )
    for arg in expr.args:
        _validate_expression_tree(arg, depth + 1, node_count)


def _bit_size(value: sp.Rational) -> int:
    return max(int(value.p).bit_length(), int(value.q).bit_length())


def _check_powers(expr: sp.Basic) -> None:
    """Reject powers whose evaluation or expansion would not finish.

    Walks the unevaluated tree bottom-up, so an exponent is only reduced to
    a number once every power inside it has passed the same checks.
    """
    for node in sp.postorder_traversal(expr):
        if not isinstance(node, sp.Pow) or not node.exp.is_number:
            continue
        exponent = node.exp.doit()
        if not exponent.is_comparable:
            continue
        size = abs(exponent)
        if size > MAX_EXPONENT:
            raise ParseError(
                f"Exponent too large (>{MAX_EXPONENT})", "TOO_COMPLEX"
            )
        base = node.base
        if base.is_Add and not base.is_number and size > MAX_EXPANSION_EXPONENT:
            raise ParseError(
                f"Power of a sum too large to expand (>{MAX_EXPANSION_EXPONENT})",
                "TOO_COMPLEX",
            )
        if base.is_number:
            value = base.doit()
            if value.is_Rational and size * _bit_size(value) > MAX_RESULT_BITS:
                raise ParseError("Numeric power too large", "TOO_COMPLEX")


@lru_cache(maxsize=1024)
def parse_preprocessed(expr_str: str) -> Any:
    """Parse and validate a preprocessed expression string.

    The text is parsed twice: first unevaluated so oversized powers such as
    ``9^9^9`` are rejected before SymPy computes them, then evaluated.
    """
    try:
        raw = parse_expr(
            expr_str,
            local_dict=ALLOWED_SYMPY_NAMES,
            transformations=TRANSFORMATIONS,
            evaluate=False,
        )
        if not isinstance(raw, sp.Basic):
            raise ParseError(
                f"Not an algebraic expression: {expr_str}", "NOT_AN_EXPRESSION"
            )
        _check_powers(raw)
        expr = parse_expr(
            expr_str,
            local_dict=ALLOWED_SYMPY_NAMES,
            transformations=TRANSFORMATIONS,
            evaluate=True,
        )
    except RecursionError as e:
        raise ParseError("Expression too deeply nested", "TOO_DEEP") from e
    except (SyntaxError, TokenError, TypeError, ValueError, AttributeError, NameError) as e:
        logger.debug("SymPy rejected %r: %s", expr_str, e)
        raise ParseError(f"Invalid expression: {expr_str}") from e

    if not isinstance(expr, sp.Expr):
        raise ParseError(
            f"Not an algebraic expression: {expr_str}", "NOT_AN_EXPRESSION"
        )
    _validate_expression_tree(expr)
    return expr


def parse(input_str: str) -> Any:
    """Preprocess and parse raw user input into a SymPy expression."""
    return parse_preprocessed(preprocess(input_str))


def render(expr: sp.Basic) -> str:
    """Render a SymPy expression back to text in input notation."""
    text = str(expr)
    if config.RENDER_CARET:
        text = POWER_REGEX.sub("^", text)
    return text
