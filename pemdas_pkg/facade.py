"""Two-method entry point hiding factory and decorator wiring."""

from __future__ import annotations

from .factory import OperationFactory
from .operations import OperationKind
from .types import Expression, Result


class CalculationFacade:
    """Simplify or differentiate through a held factory.

    Errors from the operations propagate unchanged.
    """

    def __init__(self, factory: OperationFactory | None = None):
        self.factory = factory or OperationFactory()

    def simplify(self, expression: Expression) -> Result:
        return self.calculate(OperationKind.SIMPLIFY, expression)

    def differentiate(self, expression: Expression) -> Result:
        return self.calculate(OperationKind.DIFFERENTIATE, expression)

    def calculate(self, kind: OperationKind, expression: Expression) -> Result:
        return self.factory.create(kind).compute(expression)
