"""Value types and error classes shared across the calculation pipeline."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional

# Raw user input, never validated outside the engine
Expression = str
# Rendered output of a transformation; None when nothing was computed
Result = Optional[str]


class CalculationError(Exception):
    """Base class for failures raised while computing a result."""

    default_code = "CALCULATION_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(CalculationError):
    """Raised when the expression text is not a valid symbolic expression."""

    default_code = "PARSE_ERROR"


class ComputeError(CalculationError):
    """Raised when the requested transformation could not be produced."""

    default_code = "COMPUTE_ERROR"


class EngineUnavailableError(CalculationError):
    """Raised when the symbolic engine cannot be reached."""

    default_code = "ENGINE_UNAVAILABLE"


@dataclass(frozen=True)
class Snapshot:
    """Recoverable editing state: an expression and the result shown for it."""

    expression: Expression
    result: Result = None

    def as_pair(self) -> tuple[Expression, Result]:
        return (self.expression, self.result)


@dataclass(frozen=True)
class HistoryRecord:
    """A persisted log entry of one completed calculation."""

    id: str
    expression: Expression
    result: Result
    timestamp: datetime

    @classmethod
    def create(
        cls,
        expression: Expression,
        result: Result,
        timestamp: datetime | None = None,
    ) -> HistoryRecord:
        """Build a new record with a fresh identity, stamped with local time."""
        return cls(
            id=uuid.uuid4().hex,
            expression=expression,
            result=result,
            timestamp=timestamp or datetime.now(),
        )

    def clone(self) -> HistoryRecord:
        # Every field is immutable, so a value copy shares nothing mutable
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "expression": self.expression,
            "result": self.result,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryRecord:
        """Rebuild a record from its JSON form.

        Raises:
            KeyError: If a required field is missing
            TypeError: If the data is not a mapping or a field has the wrong type
            ValueError: If the timestamp is not ISO-8601
        """
        timestamp = datetime.fromisoformat(data["timestamp"])
        if timestamp.tzinfo is not None:
            # Records are compared by timestamp, so keep them all naive local time
            timestamp = timestamp.astimezone().replace(tzinfo=None)
        result = data.get("result")
        return cls(
            id=str(data["id"]),
            expression=str(data["expression"]),
            result=None if result is None else str(result),
            timestamp=timestamp,
        )

    def __repr__(self) -> str:
        return (
            f"HistoryRecord(id={self.id!r}, expression={self.expression!r}, "
            f"result={self.result!r}, timestamp={self.timestamp.isoformat()!r})"
        )
