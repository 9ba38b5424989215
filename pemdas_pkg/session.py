"""Editing session tying the calculation pipeline to undo and history."""

from __future__ import annotations

from .command import OperationCommand
from .decorators import ResultCallback
from .engine import SymbolicEngine
from .factory import OperationFactory
from .formula import FormulaSnapshot
from .history import HistoryStore, InMemoryHistoryStore
from .logging_config import get_logger
from .memento import Originator, UndoStack
from .operations import OperationKind
from .types import CalculationError, Expression, HistoryRecord, Result, Snapshot

logger = get_logger("session")


class CalculatorSession:
    """One live editing context.

    Every successful calculation pushes the state it replaces onto the undo
    stack, so ``undo`` steps back one calculation at a time, and appends a
    ``HistoryRecord`` to the history store. A failed calculation changes
    nothing and re-raises.
    """

    def __init__(
        self,
        history: HistoryStore | None = None,
        factory: OperationFactory | None = None,
        engine: SymbolicEngine | None = None,
        on_result: ResultCallback | None = None,
    ):
        """Create a session.

        Pass either ``factory`` or ``engine``, not both: a factory already
        carries its engine.

        Raises:
            ValueError: If both ``factory`` and ``engine`` are given
            EngineUnavailableError: If no factory is given and the default
                engine cannot be resolved
        """
        if factory is not None and engine is not None:
            raise ValueError("Pass either a factory or an engine, not both")
        self.history_store = history if history is not None else InMemoryHistoryStore()
        self.factory = factory or OperationFactory(engine=engine, log=True)
        self.on_result = on_result
        self.originator = Originator()
        self.undo_stack = UndoStack(self.originator)

    @property
    def expression(self) -> Expression:
        return self.originator.expression

    @property
    def result(self) -> Result:
        return self.originator.result

    @property
    def state(self) -> tuple[Expression, Result]:
        return self.originator.state()

    def _report(self, result: Result) -> None:
        if self.on_result is not None:
            self.on_result(result)

    def calculate(self, kind: OperationKind, expression: Expression) -> Result:
        """Run ``kind`` on ``expression`` and record the outcome.

        Raises:
            ParseError: If the expression cannot be parsed
            ComputeError: If the transformation fails
            EngineUnavailableError: If the engine cannot be reached
        """
        command = OperationCommand.for_kind(kind, expression, self._report, self.factory)
        try:
            result = command.execute()
        except CalculationError as e:
            logger.warning(f"{kind.value} failed for {expression!r}: [{e.code}] {e}")
            raise

        self.undo_stack.push(self.originator.capture())
        self.originator.save(expression, result)
        self.history_store.append(HistoryRecord.create(expression, result))
        logger.info(f"{kind.value} {expression!r} -> {result!r}")
        return result

    def simplify(self, expression: Expression) -> Result:
        return self.calculate(OperationKind.SIMPLIFY, expression)

    def differentiate(self, expression: Expression) -> Result:
        return self.calculate(OperationKind.DIFFERENTIATE, expression)

    def undo(self) -> Snapshot | None:
        """Step back one calculation; None when there is nothing to undo."""
        return self.undo_stack.undo()

    def history(self) -> list[HistoryRecord]:
        return self.history_store.list_all()

    def load_from_history(self, record: HistoryRecord) -> tuple[Expression, Result]:
        """Place a past calculation into the live state without touching undo."""
        formula = FormulaSnapshot(record.expression).deep_copy()
        self.originator.expression = formula.expression
        self.originator.result = record.result
        return self.state
