"""Construction of operations, optionally pre-wrapped in reporting decorators."""

from __future__ import annotations

from typing import Callable, Sequence

from . import config
from .decorators import LoggingOperation, ResultCallback, decorate
from .engine import SymbolicEngine, get_engine
from .operations import DifferentiateOperation, Operation, OperationKind, SimplifyOperation

_VARIANTS: dict[OperationKind, Callable[["OperationFactory"], Operation]] = {
    OperationKind.SIMPLIFY: lambda f: SimplifyOperation(engine=f.engine),
    OperationKind.DIFFERENTIATE: lambda f: DifferentiateOperation(
        engine=f.engine, variable=f.variable
    ),
}


class OperationFactory:
    """Single point of dispatch from ``OperationKind`` to an operation.

    With no callbacks the factory hands out bare operations. Each callback
    adds a ``ReportingOperation`` layer; ``log=True`` adds a ``LoggingOperation``
    directly around the bare operation.
    """

    def __init__(
        self,
        engine: SymbolicEngine | None = None,
        callbacks: Sequence[ResultCallback] = (),
        variable: str | None = None,
        log: bool = False,
    ):
        self.engine = engine or get_engine()
        self.callbacks = tuple(callbacks)
        self.variable = variable or config.DIFF_VARIABLE
        self.log = log

    def create(self, kind: OperationKind) -> Operation:
        try:
            build = _VARIANTS[kind]
        except KeyError:
            raise ValueError(f"Unsupported operation kind: {kind!r}") from None
        operation = build(self)
        if self.log:
            operation = LoggingOperation(operation)
        return decorate(operation, *self.callbacks)

    def __repr__(self) -> str:
        return (
            f"OperationFactory(engine={type(self.engine).__name__}, "
            f"callbacks={len(self.callbacks)}, variable={self.variable!r}, log={self.log})"
        )


def plain_factory(engine: SymbolicEngine | None = None, variable: str | None = None) -> OperationFactory:
    """Factory returning undecorated operations."""
    return OperationFactory(engine=engine, variable=variable)


def reporting_factory(
    on_result: ResultCallback,
    engine: SymbolicEngine | None = None,
    variable: str | None = None,
    log: bool = True,
) -> OperationFactory:
    """Factory whose operations report every result to ``on_result``."""
    return OperationFactory(engine=engine, callbacks=(on_result,), variable=variable, log=log)
