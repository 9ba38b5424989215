"""Shared fixtures for the PEMDAS test suite."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from pemdas_pkg.types import ComputeError, HistoryRecord, ParseError


class ScriptedEngine:
    """Engine stand-in that records calls and returns canned values."""

    def __init__(self, parse_error=None, compute_error=None):
        self.calls = []
        self.parse_error = parse_error
        self.compute_error = compute_error

    def parse(self, text):
        self.calls.append(("parse", text))
        if self.parse_error is not None:
            raise self.parse_error
        return f"<{text}>"

    def expand(self, ast):
        self.calls.append(("expand", ast))
        if self.compute_error is not None:
            raise self.compute_error
        return f"expanded{ast}"

    def differentiate(self, ast, variable):
        self.calls.append(("differentiate", ast, variable))
        if self.compute_error is not None:
            raise self.compute_error
        return f"d{ast}/d{variable}"

    def render(self, ast):
        self.calls.append(("render", ast))
        return str(ast)


@pytest.fixture
def scripted_engine():
    return ScriptedEngine()


@pytest.fixture
def failing_parse_engine():
    return ScriptedEngine(parse_error=ParseError("bad input"))


@pytest.fixture
def failing_compute_engine():
    return ScriptedEngine(compute_error=ComputeError("cannot do that"))


@pytest.fixture
def make_record():
    base = datetime(2024, 1, 1, 12, 0, 0)

    def _make(expression="x", result="x", minutes=0):
        return HistoryRecord.create(expression, result, base + timedelta(minutes=minutes))

    return _make
