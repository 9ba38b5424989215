"""Adapter over the symbolic-math engine.

Operations only ever talk to a ``SymbolicEngine``: parse text to an AST,
expand it, differentiate it with respect to a named variable, and render it
back to text. ``SympyEngine`` is the SymPy-backed implementation.
"""

from __future__ import annotations

from typing import Any, Protocol

import sympy as sp

from . import config
from .config import VAR_NAME_RE
from .logging_config import get_logger
from .parser import parse, render
from .types import ComputeError, EngineUnavailableError

logger = get_logger("engine")


class SymbolicEngine(Protocol):
    """Capability interface consumed by the operations."""

    def parse(self, text: str) -> Any: ...

    def expand(self, ast: Any) -> Any: ...

    def differentiate(self, ast: Any, variable: str) -> Any: ...

    def render(self, ast: Any) -> str: ...


class SympyEngine:
    """SymPy implementation of ``SymbolicEngine``."""

    name = "sympy"

    def parse(self, text: str) -> sp.Expr:
        """Parse raw text.

        Raises:
            ParseError: If the text is not a valid expression
        """
        return parse(text)

    def expand(self, ast: sp.Expr) -> sp.Expr:
        try:
            return sp.expand(ast)
        except (ValueError, TypeError, AttributeError, NotImplementedError) as e:
            raise ComputeError(f"Simplification error: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected simplification error: {e}", exc_info=True)
            raise ComputeError("Simplification failed unexpectedly") from e

    def differentiate(self, ast: sp.Expr, variable: str) -> sp.Expr:
        if not VAR_NAME_RE.match(variable or ""):
            raise ComputeError(
                f"Invalid differentiation variable: {variable!r}", "INVALID_VARIABLE"
            )
        try:
            return sp.diff(ast, sp.Symbol(variable))
        except (ValueError, TypeError, AttributeError) as e:
            raise ComputeError(f"Differentiation error: {e}") from e
        except NotImplementedError as e:
            raise ComputeError(f"Differentiation not implemented: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected differentiation error: {e}", exc_info=True)
            raise ComputeError("Differentiation failed unexpectedly") from e

    def render(self, ast: sp.Basic) -> str:
        try:
            return render(ast)
        except (ValueError, TypeError, AttributeError) as e:
            raise ComputeError(f"Rendering error: {e}") from e


_ENGINES = {
    SympyEngine.name: SympyEngine,
}


def get_engine(name: str | None = None) -> SymbolicEngine:
    """Resolve an engine by name (default: ``config.ENGINE``).

    Raises:
        EngineUnavailableError: If no engine is registered under that name
    """
    name = name or config.ENGINE
    try:
        engine_cls = _ENGINES[name]
    except KeyError:
        raise EngineUnavailableError(
            f"Symbolic engine '{name}' is not available", "UNKNOWN_ENGINE"
        ) from None
    return engine_cls()
