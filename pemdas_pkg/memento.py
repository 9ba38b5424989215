"""Snapshot-based undo of the live editing state.

The ``Originator`` owns the live (expression, result) pair. The ``UndoStack``
keeps snapshots of earlier states and hands the most recent one back on
``undo``. Undo is single-use: a popped snapshot is gone, there is no redo.

One stack belongs to one editing session and is not safe to share between
threads without external locking.
"""

from __future__ import annotations

from typing import Iterator

from .logging_config import get_logger
from .types import Expression, Result, Snapshot

logger = get_logger("memento")


class Originator:
    """Holder of the live editing state."""

    def __init__(self, expression: Expression = "", result: Result = None):
        self.expression = expression
        self.result = result

    def save(self, expression: Expression, result: Result) -> Snapshot:
        """Set the live state to the given pair and capture it."""
        self.expression = expression
        self.result = result
        return Snapshot(expression, result)

    def capture(self) -> Snapshot:
        """Capture the live state as it is now."""
        return Snapshot(self.expression, self.result)

    def restore(self, snapshot: Snapshot) -> tuple[Expression, Result]:
        self.expression = snapshot.expression
        self.result = snapshot.result
        return snapshot.as_pair()

    def state(self) -> tuple[Expression, Result]:
        return (self.expression, self.result)

    def __repr__(self) -> str:
        return f"Originator(expression={self.expression!r}, result={self.result!r})"


class UndoStack:
    """LIFO stack of snapshots restoring into an ``Originator``."""

    def __init__(self, originator: Originator | None = None):
        self.originator = originator or Originator()
        self._snapshots: list[Snapshot] = []

    def push(self, snapshot: Snapshot) -> None:
        self._snapshots.append(snapshot)

    def peek(self) -> Snapshot | None:
        return self._snapshots[-1] if self._snapshots else None

    def undo(self) -> Snapshot | None:
        """Pop the top snapshot and restore it into the originator.

        Returns:
            The restored snapshot, or None when there is nothing to undo
            (the live state is left untouched)
        """
        if not self._snapshots:
            logger.debug("Nothing to undo")
            return None
        snapshot = self._snapshots.pop()
        self.originator.restore(snapshot)
        logger.debug("Restored %r (%d left)", snapshot, len(self._snapshots))
        return snapshot

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return bool(self._snapshots)

    def __iter__(self) -> Iterator[Snapshot]:
        # Top of the stack first
        return reversed(self._snapshots)
