"""Expression-to-result operations.

Each operation is a small value object with a single ``compute`` method.
New kinds are added by extending ``OperationKind``, writing an operation
class here, and registering it in ``factory._VARIANTS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from . import config
from .engine import SymbolicEngine, get_engine
from .logging_config import get_logger
from .types import Expression, Result

logger = get_logger("operations")


class OperationKind(Enum):
    SIMPLIFY = "simplify"
    DIFFERENTIATE = "differentiate"

    @classmethod
    def parse(cls, text: str) -> OperationKind:
        """Look up a kind by value or short alias (``diff``, ``d``, ``s``, ``expand``).

        Raises:
            ValueError: If the text names no known operation
        """
        key = (text or "").strip().lower()
        key = _KIND_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown operation: {text!r}") from None


_KIND_ALIASES = {
    "s": "simplify",
    "expand": "simplify",
    "d": "differentiate",
    "diff": "differentiate",
    "derive": "differentiate",
}


class Operation(Protocol):
    def compute(self, expression: Expression) -> Result:
        """Transform expression text into result text.

        Raises:
            ParseError: If the engine cannot parse the expression
            ComputeError: If the transformation itself fails
        """
        ...


@dataclass(frozen=True)
class SimplifyOperation:
    """Parse, expand algebraically, render."""

    engine: SymbolicEngine = field(default_factory=get_engine)

    def compute(self, expression: Expression) -> Result:
        ast = self.engine.parse(expression)
        result = self.engine.render(self.engine.expand(ast))
        logger.debug("simplify %r -> %r", expression, result)
        return result


@dataclass(frozen=True)
class DifferentiateOperation:
    """Parse, differentiate with respect to a fixed variable, render.

    The variable is configuration (``config.DIFF_VARIABLE``), never inferred
    from the expression: ``"y^2"`` differentiates to ``0`` when the variable
    is ``x``.
    """

    engine: SymbolicEngine = field(default_factory=get_engine)
    variable: str = field(default_factory=lambda: config.DIFF_VARIABLE)

    def compute(self, expression: Expression) -> Result:
        ast = self.engine.parse(expression)
        result = self.engine.render(self.engine.differentiate(ast, self.variable))
        logger.debug("d/d%s %r -> %r", self.variable, expression, result)
        return result
