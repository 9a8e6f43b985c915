"""Facade composing tokenizer, parser and evaluator into one ``solve`` call."""

from __future__ import annotations

from .config import MAX_INPUT_LENGTH
from .evaluator import evaluate, format_number
from .logging_config import get_logger
from .parser import parse
from .tokenizer import tokenize
from .types import CalculatorError, EmptyInputError, EvalResult, Step, ValidationError

logger = get_logger("solver")

FINAL_STEP_DESCRIPTION = "Final Result"
FINAL_STEP_EXPLANATION = "Calculation completed successfully"


def final_step(expression: str, value: float) -> Step:
    """Build the closing step that restates the input and its value."""
    return Step(
        description=FINAL_STEP_DESCRIPTION,
        calculation=f"{expression.strip()} = {format_number(value)}",
        explanation=FINAL_STEP_EXPLANATION,
    )


def solve(expression: str, decimals: int | None = None) -> EvalResult:
    """Solve an expression and explain each step.

    Args:
        expression: Expression string (e.g., "(5 + 3) * 2", "sin(30)")
        decimals: Decimal places for sqrt/trig/log steps (default OUTPUT_DECIMALS)

    Returns:
        EvalResult whose steps end with a "Final Result" step

    Raises:
        EmptyInputError: If the input is blank
        ValidationError: If the input is too long or nested too deeply
        LexError: On an unrecognized character or malformed number
        ParseError: On malformed grammar
        MathError: On a domain violation

    Example:
        >>> from stepcalc_pkg.solver import solve
        >>> result = solve("2 + 3 * 4")
        >>> result.value
        14.0
        >>> [step.calculation for step in result.steps]
        ['3 * 4 = 12', '2 + 12 = 14', '2 + 3 * 4 = 14']
    """
    if not expression or not expression.strip():
        logger.info("Rejected blank input")
        raise EmptyInputError()
    if len(expression) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )

    try:
        tree = parse(tokenize(expression))
        result = evaluate(tree, decimals)
    except CalculatorError as e:
        logger.info(
            "Failed to solve %r: %s", expression, e, extra={"error_code": e.code}
        )
        raise

    steps = result.steps + (final_step(expression, result.value),)
    logger.debug("Solved %r = %s", expression, result.value)
    return EvalResult(value=result.value, steps=steps)
