"""Command-line interface: one-shot evaluation, JSON output and an interactive REPL."""

from __future__ import annotations

import argparse
import json
import sys
from collections import deque
from dataclasses import dataclass
from datetime import datetime

from . import config
from .api import solve_expression
from .config import VERSION
from .evaluator import format_number
from .logging_config import get_logger, setup_logging
from .types import SolveResult

logger = get_logger("cli")


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    value: float
    steps: int
    timestamp: str


class CalculationHistory:
    """Bounded, most-recent-first record of successful calculations."""

    def __init__(self, size: int = config.HISTORY_SIZE):
        self._entries: deque[HistoryEntry] = deque(maxlen=size)

    def record(self, result: SolveResult) -> None:
        if not result.ok or result.value is None:
            return
        self._entries.appendleft(
            HistoryEntry(
                expression=result.expression.strip(),
                value=result.value,
                steps=len(result.steps),
                timestamp=datetime.now().strftime("%H:%M:%S"),
            )
        )

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def print_result_pretty(res: SolveResult, output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result of solve_expression
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2, ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.error)
        return
    print("Step-by-step solution:")
    for index, step in enumerate(res.steps, start=1):
        print(f"  Step {index}: {step.description}")
        print(f"    {step.calculation}")
        print(f"    ({step.explanation})")
    print(f"Result: {format_number(res.value)}")


def print_history(history: CalculationHistory) -> None:
    if not len(history):
        print("No calculations yet.")
        return
    for entry in history.entries():
        print(
            f"[{entry.timestamp}] {entry.expression} = {format_number(entry.value)}"
            f"  ({entry.steps} steps)"
        )


def print_help_text() -> None:
    """Print help text for REPL commands."""
    print(
        f"""Stepcalc version {VERSION}

Enter an expression to see a step-by-step solution:
  2 + 3 * 4, (5 + 3) * 2, 4^2 + 3^2, 2π + 3
  sqrt(16), sin(30), cos(60), tan(45)   (angles in degrees)
  log(100) (base 10), ln(2) (base e)

Commands:
  history   show the last {config.HISTORY_SIZE} calculations
  clear     clear the history
  help      show this text
  quit      exit (also 'exit' or Ctrl-D)"""
    )


def repl_loop(output_format: str = "human", decimals: int | None = None) -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    history = CalculationHistory()
    print("Stepcalc: type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue

        command = raw.lower()
        if command in ("quit", "exit"):
            print("Goodbye.")
            break
        if command == "help":
            print_help_text()
            continue
        if command == "history":
            print_history(history)
            continue
        if command == "clear":
            history.clear()
            print("History cleared.")
            continue

        res = solve_expression(raw, decimals)
        history.record(res)
        print_result_pretty(res, output_format)


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Stepcalc health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    for expression, expected in (
        ("2 + 3 * 4", 14.0),
        ("(5 + 3) * 2", 16.0),
        ("sqrt(16)", 4.0),
        ("sin(30)", 0.5),
    ):
        res = solve_expression(expression)
        if res.ok and res.value is not None and abs(res.value - expected) < 1e-9:
            print(f"[OK] {expression} = {format_number(res.value)}")
            checks_passed += 1
        else:
            print(f"[FAIL] {expression}: expected {expected}, got {res!r}")
            checks_failed += 1

    res = solve_expression("5/0")
    if not res.ok and res.error_code == "MATH_ERROR":
        print("[OK] Division by zero is reported")
        checks_passed += 1
    else:
        print(f"[FAIL] Division by zero not reported: {res!r}")
        checks_failed += 1

    print("-" * 50)
    print(f"Health check: {checks_passed} passed, {checks_failed} failed")
    return 0 if checks_failed == 0 else 1


def _decimal_places(value: str) -> int:
    """argparse type for --precision: a non-negative integer (0 rounds to whole numbers)."""
    try:
        places = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if places < 0:
        raise argparse.ArgumentTypeError(
            f"precision must be zero or positive, got {places}"
        )
    return places


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Stepcalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="stepcalc")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Solve one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=_decimal_places,
        help="Decimal places for sqrt, trig and log steps",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=config.LOG_LEVEL,
        help="Set logging level (default: STEPCALC_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)
    logger.debug("Stepcalc %s starting with %s", VERSION, vars(args))

    decimals = args.precision

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.eval_expr is not None:
        res = solve_expression(args.eval_expr, decimals)
        print_result_pretty(res, args.format)
        return 0 if res.ok else 1

    repl_loop(args.format, decimals)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
