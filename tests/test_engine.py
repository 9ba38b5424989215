"""Tests for the SymPy engine adapter."""

import unittest

import sympy as sp

from pemdas_pkg.engine import SympyEngine, get_engine
from pemdas_pkg.types import ComputeError, EngineUnavailableError, ParseError


class TestSympyEngine(unittest.TestCase):
    def setUp(self):
        self.engine = SympyEngine()
        self.x = sp.Symbol("x")

    def test_parse(self):
        self.assertEqual(self.engine.parse("x^2 + 1"), self.x**2 + 1)

    def test_parse_error(self):
        with self.assertRaises(ParseError):
            self.engine.parse("(")

    def test_expand(self):
        ast = self.engine.parse("(x + 1)^2")
        self.assertEqual(self.engine.expand(ast), self.x**2 + 2 * self.x + 1)

    def test_differentiate(self):
        ast = self.engine.parse("x^3")
        self.assertEqual(self.engine.differentiate(ast, "x"), 3 * self.x**2)

    def test_differentiate_other_variable(self):
        ast = self.engine.parse("x*y^2")
        self.assertEqual(self.engine.differentiate(ast, "y"), 2 * self.x * sp.Symbol("y"))

    def test_invalid_variable(self):
        ast = self.engine.parse("x")
        with self.assertRaises(ComputeError) as ctx:
            self.engine.differentiate(ast, "1x")
        self.assertEqual(ctx.exception.code, "INVALID_VARIABLE")

    def test_render(self):
        self.assertEqual(self.engine.render(2 * self.x), "2*x")


class TestGetEngine(unittest.TestCase):
    def test_default_engine(self):
        self.assertIsInstance(get_engine(), SympyEngine)

    def test_named_engine(self):
        self.assertIsInstance(get_engine("sympy"), SympyEngine)

    def test_unknown_engine(self):
        with self.assertRaises(EngineUnavailableError) as ctx:
            get_engine("mathematica")
        self.assertEqual(ctx.exception.code, "UNKNOWN_ENGINE")


if __name__ == "__main__":
    unittest.main()
