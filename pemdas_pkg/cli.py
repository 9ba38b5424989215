from __future__ import annotations

import argparse
import json
from typing import Any

from . import config
from .config import VAR_NAME_RE, VERSION
from .facade import CalculationFacade
from .factory import OperationFactory
from .history import HistoryStore, InMemoryHistoryStore, JsonHistoryStore
from .operations import OperationKind
from .session import CalculatorSession
from .types import CalculationError, HistoryRecord

HELP_TEXT = """Commands:
  simplify <expr>   (or: s <expr>)   expand and simplify an expression
  diff <expr>       (or: d <expr>)   differentiate with respect to {variable}
  undo                               step back to the previous calculation
  history                            list past calculations, newest first
  load <n>                           load entry n of the history list
  state                              show the current expression and result
  help                               show this text
  quit                               leave"""


def print_result(res: dict[str, Any], output_format: str = "human") -> None:
    """Print a calculation outcome in the specified format.

    Args:
        res: Result dictionary (``ok`` plus ``result`` or ``error``/``error_code``)
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, ensure_ascii=False))
        return
    if not res.get("ok"):
        print(f"Check your input: {res.get('error')} [{res.get('error_code')}]")
        return
    print(res.get("result"))


def _error_dict(error: CalculationError) -> dict[str, Any]:
    return {"ok": False, "error": error.message, "error_code": error.code}


def _format_record(index: int, record: HistoryRecord) -> str:
    stamp = record.timestamp.strftime("%Y-%m-%d %H:%M:%S")
    return f"{index:>3}. [{stamp}] {record.expression}  =>  {record.result}"


def print_history(records: list[HistoryRecord], output_format: str = "human") -> None:
    if output_format == "json":
        print(json.dumps([r.to_dict() for r in records], ensure_ascii=False))
        return
    if not records:
        print("No calculations yet.")
        return
    for index, record in enumerate(records, start=1):
        print(_format_record(index, record))


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running PEMDAS health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    try:
        # Pinned to "x" so the check does not depend on --variable
        facade = CalculationFacade(OperationFactory(variable="x"))
        print(f"[OK] Engine '{type(facade.factory.engine).__name__}' available")
        checks_passed += 1
    except CalculationError as e:
        print(f"[FAIL] Engine unavailable: {e} [{e.code}]")
        checks_failed += 1
        print("-" * 50)
        print(f"Health check: {checks_passed} passed, {checks_failed} failed")
        return 1

    for label, run, expected in (
        ("Simplify", lambda: facade.simplify("(x + 1)^2"), "x^2 + 2*x + 1"),
        ("Differentiate", lambda: facade.differentiate("x^2"), "2*x"),
    ):
        try:
            got = run()
            if got == expected or got == expected.replace("^", "**"):
                print(f"[OK] {label} works")
                checks_passed += 1
            else:
                print(f"[FAIL] {label} check failed: expected {expected}, got {got}")
                checks_failed += 1
        except CalculationError as e:
            print(f"[FAIL] {label} check failed: {e}")
            checks_failed += 1

    print("-" * 50)
    print(f"Health check: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def _run_command(session: CalculatorSession, raw: str, output_format: str) -> bool:
    """Handle one REPL line. Returns False when the loop should end."""
    command, _, argument = raw.partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in ("quit", "exit"):
        return False
    if command == "help":
        print(HELP_TEXT.format(variable=session.factory.variable))
    elif command == "undo":
        snapshot = session.undo()
        if snapshot is None:
            print("Nothing to undo.")
        else:
            print(f"{snapshot.expression}  =>  {snapshot.result}")
    elif command == "history":
        print_history(session.history(), output_format)
    elif command == "state":
        expression, result = session.state
        print(f"{expression}  =>  {result}")
    elif command == "load":
        records = session.history()
        try:
            index = int(argument)
            if index < 1:
                raise IndexError(index)
            record = records[index - 1]
        except (ValueError, IndexError):
            print(f"No history entry {argument!r}.")
        else:
            expression, result = session.load_from_history(record)
            print(f"{expression}  =>  {result}")
    else:
        try:
            kind = OperationKind.parse(command)
        except ValueError:
            print(f"Unknown command: {command}. Type 'help' for commands.")
            return True
        try:
            result = session.calculate(kind, argument)
        except CalculationError as e:
            print_result(_error_dict(e), output_format)
        else:
            print_result({"ok": True, "operation": kind.value, "expression": argument, "result": result}, output_format)
    return True


def repl_loop(session: CalculatorSession, output_format: str = "human") -> None:
    """Interactive REPL loop."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("PEMDAS symbolic calculator - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            return
        if not raw:
            continue
        if not _run_command(session, raw, output_format):
            print("Goodbye.")
            return


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the PEMDAS CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="pemdas")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("-s", "--simplify", type=str, help="Simplify one expression and exit")
    action.add_argument(
        "-d", "--differentiate", type=str, help="Differentiate one expression and exit"
    )
    action.add_argument("--history", action="store_true", help="List past calculations and exit")
    action.add_argument("--clear-history", action="store_true", help="Delete all past calculations")
    action.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    parser.add_argument(
        "--variable",
        type=str,
        help=f"Differentiation variable (default: {config.DIFF_VARIABLE})",
    )
    parser.add_argument("--history-file", type=str, help="Path of the history JSON file")
    parser.add_argument(
        "--no-history", action="store_true", help="Do not read or write the history file"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    args = parser.parse_args(argv)
    output_format = args.format

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    variable = args.variable or config.DIFF_VARIABLE
    if not VAR_NAME_RE.match(variable):
        print(f"Error: invalid variable name {variable!r}")
        return 2
    if args.health_check:
        return _health_check()

    store: HistoryStore
    if args.no_history:
        store = InMemoryHistoryStore()
    else:
        store = JsonHistoryStore(args.history_file)

    if args.clear_history:
        store.clear()
        print("History cleared.")
        return 0
    if args.history:
        print_history(store.list_all(), output_format)
        return 0

    if args.simplify is not None or args.differentiate is not None:
        if args.simplify is not None:
            kind, expression = OperationKind.SIMPLIFY, args.simplify
        else:
            kind, expression = OperationKind.DIFFERENTIATE, args.differentiate
        try:
            factory = OperationFactory(variable=variable, log=True)
            if args.no_history:
                result = CalculationFacade(factory).calculate(kind, expression)
            else:
                result = CalculatorSession(history=store, factory=factory).calculate(kind, expression)
        except CalculationError as e:
            print_result(_error_dict(e), output_format)
            return 1
        print_result(
            {"ok": True, "operation": kind.value, "expression": expression, "result": result},
            output_format,
        )
        return 0

    try:
        session = CalculatorSession(
            history=store, factory=OperationFactory(variable=variable, log=True)
        )
    except CalculationError as e:
        print_result(_error_dict(e), output_format)
        return 1
    repl_loop(session, output_format)
    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main_entry())
