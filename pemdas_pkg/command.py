"""Bound, re-invocable calculation units."""

from __future__ import annotations

from dataclasses import dataclass

from .decorators import ResultCallback
from .factory import OperationFactory
from .operations import Operation, OperationKind
from .types import Expression, Result


@dataclass(frozen=True)
class OperationCommand:
    """An expression, an operation and a result callback bound together.

    ``execute`` recomputes on every call; nothing is memoized. The callback
    runs on the calling thread, and only after a successful computation.
    """

    expression: Expression
    operation: Operation
    callback: ResultCallback

    def execute(self) -> Result:
        result = self.operation.compute(self.expression)
        self.callback(result)
        return result

    @classmethod
    def for_kind(
        cls,
        kind: OperationKind,
        expression: Expression,
        callback: ResultCallback,
        factory: OperationFactory | None = None,
    ) -> OperationCommand:
        """Build a command whose operation is chosen by ``kind`` through ``factory``."""
        factory = factory or OperationFactory()
        return cls(expression, factory.create(kind), callback)
