"""End-to-end tests for a calculator session."""

import pytest

from pemdas_pkg import config
from pemdas_pkg.engine import SympyEngine
from pemdas_pkg.factory import plain_factory
from pemdas_pkg.history import InMemoryHistoryStore, JsonHistoryStore
from pemdas_pkg.operations import OperationKind
from pemdas_pkg.session import CalculatorSession
from pemdas_pkg.types import ComputeError, EngineUnavailableError, ParseError


@pytest.fixture
def store():
    return InMemoryHistoryStore()


@pytest.fixture
def session(store):
    return CalculatorSession(history=store)


class TestCalculatorSession:
    def test_simplify_expanded_polynomial_unchanged(self, session):
        assert session.simplify("x^2 + 2*x + 1") == "x^2 + 2*x + 1"
        assert session.state == ("x^2 + 2*x + 1", "x^2 + 2*x + 1")

    def test_differentiate(self, session):
        assert session.differentiate("x^2") == "2*x"
        assert session.state == ("x^2", "2*x")

    @pytest.mark.parametrize("kind", list(OperationKind))
    def test_parse_error_leaves_state_unchanged(self, session, store, kind):
        session.simplify("x + x")
        state, depth, records = session.state, len(session.undo_stack), len(store)
        with pytest.raises(ParseError):
            session.calculate(kind, "(")
        assert session.state == state
        assert len(session.undo_stack) == depth
        assert len(store) == records

    def test_compute_error_leaves_state_unchanged(self, failing_compute_engine, store):
        session = CalculatorSession(history=store, factory=plain_factory(engine=failing_compute_engine))
        with pytest.raises(ComputeError):
            session.simplify("anything")
        assert session.state == ("", None)
        assert len(session.undo_stack) == 0
        assert len(store) == 0

    def test_three_calculations_two_undos(self, session):
        session.simplify("(x + 1)^2")
        first = session.state
        session.differentiate("x^3")
        session.simplify("2x + 3x")
        session.undo()
        session.undo()
        assert session.state == first
        assert len(session.undo_stack) == 1

    def test_undo_steps_back_one_calculation(self, session):
        session.differentiate("x^2")
        session.differentiate("x^3")
        snapshot = session.undo()
        assert snapshot.as_pair() == ("x^2", "2*x")
        assert session.state == ("x^2", "2*x")

    def test_undo_past_first_calculation_clears_state(self, session):
        session.differentiate("x^2")
        assert session.undo().as_pair() == ("", None)
        assert session.state == ("", None)
        assert session.undo() is None
        assert session.state == ("", None)

    def test_undo_does_not_touch_history(self, session, store):
        session.differentiate("x^2")
        session.undo()
        assert len(store) == 1

    def test_history_newest_first(self, session):
        session.simplify("x + x")
        session.differentiate("x^2")
        assert [(r.expression, r.result) for r in session.history()] == [
            ("x^2", "2*x"),
            ("x + x", "2*x"),
        ]

    def test_load_from_history(self, session):
        session.differentiate("x^2")
        session.simplify("x + x")
        record = session.history()[1]
        depth = len(session.undo_stack)
        assert session.load_from_history(record) == ("x^2", "2*x")
        assert session.expression == "x^2"
        assert session.result == "2*x"
        assert len(session.undo_stack) == depth
        assert record.expression == "x^2"

    def test_on_result_callback(self, store):
        seen = []
        session = CalculatorSession(history=store, on_result=seen.append)
        session.differentiate("x^2")
        assert seen == ["2*x"]

    def test_on_result_not_called_on_failure(self, store):
        seen = []
        session = CalculatorSession(history=store, on_result=seen.append)
        with pytest.raises(ParseError):
            session.simplify("(")
        assert seen == []

    def test_json_history(self, tmp_path):
        path = tmp_path / "history.json"
        CalculatorSession(history=JsonHistoryStore(path)).differentiate("x^2")
        records = CalculatorSession(history=JsonHistoryStore(path)).history()
        assert [(r.expression, r.result) for r in records] == [("x^2", "2*x")]

    def test_default_history_is_in_memory(self):
        assert isinstance(CalculatorSession().history_store, InMemoryHistoryStore)

    def test_factory_and_engine_together_rejected(self):
        with pytest.raises(ValueError):
            CalculatorSession(factory=plain_factory(), engine=SympyEngine())

    def test_unknown_default_engine(self, monkeypatch):
        monkeypatch.setattr(config, "ENGINE", "bogus")
        with pytest.raises(EngineUnavailableError) as exc_info:
            CalculatorSession()
        assert exc_info.value.code == "UNKNOWN_ENGINE"
