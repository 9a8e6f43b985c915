"""Public API for Stepcalc - returns structured objects without side effects."""

from __future__ import annotations

from .logging_config import get_logger
from .parser import parse
from .solver import solve
from .tokenizer import tokenize
from .types import (
    CalculatorError,
    EmptyInputError,
    LexError,
    MathError,
    ParseError,
    SolveResult,
    ValidationError,
)

logger = get_logger("api")

# Most specific class first
ERROR_HEADLINES: tuple[tuple[type[CalculatorError], str], ...] = (
    (EmptyInputError, "Please enter a mathematical expression"),
    (ValidationError, "Invalid input"),
    (LexError, "Unrecognized input"),
    (ParseError, "Invalid expression format"),
    (MathError, "Math error"),
)


def describe_error(error: CalculatorError) -> str:
    """Turn a calculator error into the message shown to users.

    Args:
        error: Any CalculatorError raised by the pipeline

    Returns:
        Headline for the error kind followed by the detail, e.g.
        "Math error: Division by zero: 5 / 0"
    """
    for error_type, headline in ERROR_HEADLINES:
        if isinstance(error, error_type):
            if isinstance(error, EmptyInputError):
                return headline
            return f"{headline}: {error.message}"
    return error.message


def solve_expression(expression: str, decimals: int | None = None) -> SolveResult:
    """Solve an expression without raising for calculator errors.

    Args:
        expression: Expression string (e.g., "2 + 3 * 4")
        decimals: Decimal places for sqrt/trig/log steps (optional)

    Returns:
        SolveResult with value and steps, or with error and error_code

    Example:
        >>> from stepcalc_pkg.api import solve_expression
        >>> result = solve_expression("(5 + 3) * 2")
        >>> result.value
        16.0
        >>> result = solve_expression("5/0")
        >>> result.error_code
        'MATH_ERROR'
    """
    try:
        result = solve(expression, decimals)
    except CalculatorError as e:
        return SolveResult(
            ok=False,
            expression=expression,
            error=describe_error(e),
            error_code=e.code,
        )
    return SolveResult(
        ok=True,
        expression=expression,
        value=result.value,
        steps=list(result.steps),
    )


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Check that an expression tokenizes and parses, without evaluating it.

    Args:
        expression: Expression string to validate

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from stepcalc_pkg.api import validate_expression
        >>> validate_expression("2 + 2")
        (True, None)
        >>> validate_expression("(2 + 3")
        (False, "Invalid expression format: Unmatched '(' at position 0")
    """
    if not expression or not expression.strip():
        return False, describe_error(EmptyInputError())
    try:
        parse(tokenize(expression))
    except CalculatorError as e:
        logger.debug("Validation failed for %r: %s", expression, e)
        return False, describe_error(e)
    return True, None
