"""Duplicable wrapper over expression text.

Used when a historical expression is loaded back into the live editing
state. Python strings are immutable, so both copies are observationally
the same; ``deep_copy`` still allocates fresh text so the live copy never
aliases the stored one.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import Expression


@dataclass(frozen=True)
class FormulaSnapshot:
    expression: Expression

    def shallow_copy(self) -> FormulaSnapshot:
        """New wrapper sharing the same underlying text."""
        return FormulaSnapshot(self.expression)

    def deep_copy(self) -> FormulaSnapshot:
        """New wrapper over an independently allocated copy of the text."""
        return FormulaSnapshot("".join(list(self.expression)))

    def __copy__(self) -> FormulaSnapshot:
        return self.shallow_copy()

    def __deepcopy__(self, memo: dict) -> FormulaSnapshot:
        return self.deep_copy()
