"""Wrappers that add side effects around an operation.

A wrapper exposes the same ``compute`` contract as the operation it holds
and returns the inner result unchanged. Wrappers nest freely; effects fire
innermost first.

Callbacks may be invoked from the same thread that called ``compute``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from .logging_config import get_logger
from .operations import Operation
from .types import Expression, Result

ResultCallback = Callable[[Result], None]


@dataclass(frozen=True)
class ReportingOperation:
    """Forward each successful result to ``on_result``."""

    inner: Operation
    on_result: ResultCallback

    def compute(self, expression: Expression) -> Result:
        result = self.inner.compute(expression)
        self.on_result(result)
        return result


@dataclass(frozen=True)
class LoggingOperation:
    """Log each successful ``expression -> result`` pair at DEBUG."""

    inner: Operation
    logger: logging.Logger = field(default_factory=lambda: get_logger("calculation"))

    def compute(self, expression: Expression) -> Result:
        result = self.inner.compute(expression)
        self.logger.debug("%r -> %r", expression, result)
        return result


def decorate(operation: Operation, *callbacks: ResultCallback) -> Operation:
    """Wrap ``operation`` in one ``ReportingOperation`` per callback.

    The first callback ends up innermost, so callbacks fire in the order given.
    """
    for callback in callbacks:
        operation = ReportingOperation(operation, callback)
    return operation
