"""Tests for snapshots, the originator and the undo stack."""

import dataclasses
import unittest

from pemdas_pkg.memento import Originator, UndoStack
from pemdas_pkg.types import Snapshot


class TestOriginator(unittest.TestCase):
    def test_save_sets_state_and_captures(self):
        originator = Originator()
        snapshot = originator.save("x^2", "2*x")
        self.assertEqual(snapshot, Snapshot("x^2", "2*x"))
        self.assertEqual(originator.state(), ("x^2", "2*x"))

    def test_restore(self):
        originator = Originator("a", "b")
        pair = originator.restore(Snapshot("x", "1"))
        self.assertEqual(pair, ("x", "1"))
        self.assertEqual(originator.state(), ("x", "1"))

    def test_snapshot_is_immutable(self):
        snapshot = Originator().save("x", "1")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            snapshot.expression = "y"

    def test_later_changes_do_not_touch_snapshot(self):
        originator = Originator()
        snapshot = originator.save("x", "1")
        originator.save("y", "2")
        self.assertEqual(snapshot.as_pair(), ("x", "1"))


class TestUndoStack(unittest.TestCase):
    def setUp(self):
        self.originator = Originator()
        self.stack = UndoStack(self.originator)

    def test_round_trip(self):
        self.stack.push(self.originator.save("x^2 + 1", "2*x"))
        self.originator.save("other", "value")
        before = len(self.stack)
        restored = self.stack.undo()
        self.assertEqual(restored.as_pair(), ("x^2 + 1", "2*x"))
        self.assertEqual(self.originator.state(), ("x^2 + 1", "2*x"))
        self.assertEqual(len(self.stack), before - 1)

    def test_undo_empty_is_noop(self):
        self.originator.save("x", "1")
        self.assertIsNone(self.stack.undo())
        self.assertEqual(self.originator.state(), ("x", "1"))
        self.assertEqual(len(self.stack), 0)

    def test_lifo_order(self):
        for i in range(3):
            self.stack.push(Snapshot(f"e{i}", f"r{i}"))
        self.assertEqual(self.stack.undo().expression, "e2")
        self.assertEqual(self.stack.undo().expression, "e1")
        self.assertEqual(len(self.stack), 1)
        self.assertEqual(self.stack.peek(), Snapshot("e0", "r0"))

    def test_no_redo(self):
        self.stack.push(Snapshot("e", "r"))
        self.stack.undo()
        self.assertIsNone(self.stack.undo())

    def test_iteration_is_top_first(self):
        self.stack.push(Snapshot("a", "1"))
        self.stack.push(Snapshot("b", "2"))
        self.assertEqual([s.expression for s in self.stack], ["b", "a"])

    def test_bool_and_clear(self):
        self.assertFalse(self.stack)
        self.stack.push(Snapshot("a", "1"))
        self.assertTrue(self.stack)
        self.stack.clear()
        self.assertFalse(self.stack)
        self.assertIsNone(self.stack.peek())


if __name__ == "__main__":
    unittest.main()
