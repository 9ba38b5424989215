"""Tests for the duplicable formula wrapper."""

import copy
import dataclasses

import pytest

from pemdas_pkg.formula import FormulaSnapshot


class TestFormulaSnapshot:
    def test_shallow_copy_shares_text(self):
        original = FormulaSnapshot("x^2+1")
        duplicate = original.shallow_copy()
        assert duplicate == original
        assert duplicate is not original
        assert duplicate.expression is original.expression

    def test_deep_copy_equal_text(self):
        original = FormulaSnapshot("x^2+1")
        duplicate = original.deep_copy()
        assert duplicate.expression == "x^2+1"
        assert duplicate is not original

    def test_copies_are_independent(self):
        original = FormulaSnapshot("x^2+1")
        shallow = original.shallow_copy()
        deep = original.deep_copy()
        with pytest.raises(dataclasses.FrozenInstanceError):
            shallow.expression = "y"
        edited = dataclasses.replace(deep, expression="y")
        assert edited.expression == "y"
        assert original.expression == "x^2+1"
        assert shallow.expression == "x^2+1"
        assert deep.expression == "x^2+1"

    def test_copy_module_support(self):
        original = FormulaSnapshot("sin(x)")
        assert copy.copy(original) == original
        assert copy.deepcopy(original) == original

    def test_empty_expression(self):
        assert FormulaSnapshot("").deep_copy().expression == ""
