"""Post-order evaluation of expression trees with a step-by-step trace."""

from __future__ import annotations

import math

import sympy as sp

from . import config
from .logging_config import get_logger
from .nodes import BinaryOp, ExpressionNode, Literal, UnaryFunc
from .types import EvalResult, MathError, Step

logger = get_logger("evaluator")

_BINARY_NAMES = {
    "+": "Addition",
    "-": "Subtraction",
    "*": "Multiplication",
    "/": "Division",
    "^": "Exponent calculation",
}

_BINARY_PHRASES = {
    "+": "plus",
    "-": "minus",
    "*": "multiplied by",
    "/": "divided by",
    "^": "raised to the power of",
}

PARENTHESES_NOTE = "parentheses have highest priority in order of operations"


def format_number(value: float) -> str:
    """Render a value compactly: integral values without a trailing '.0'.

    Args:
        value: Number to render (e.g., 5.0, 0.25)

    Returns:
        Display string (e.g., "5", "0.25")
    """
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_fixed(value: float, decimals: int | None = None) -> str:
    """Render a value with a fixed number of decimal places (default OUTPUT_DECIMALS)."""
    if decimals is None:
        decimals = config.OUTPUT_DECIMALS
    if value == 0:
        value = 0.0
    return f"{value:.{decimals}f}"


def _exact(value: float) -> sp.Rational:
    # repr gives the shortest decimal that round-trips, so 0.1 stays 1/10
    return sp.Rational(repr(value))


def _to_float(expr: sp.Basic, description: str) -> float:
    approx = sp.N(expr, 17)
    if approx.is_finite is not True or approx.is_real is not True:
        raise MathError(f"{description} is undefined")
    return float(approx)


def _check_finite(value: float, calculation: str) -> float:
    if not math.isfinite(value):
        raise MathError(f"Result of {calculation} is too large")
    return 0.0 if value == 0 else value


def apply_binary(op: str, left: float, right: float) -> float:
    """Apply a binary operator to two floats.

    Raises:
        MathError: On division by zero, a non-real power, or overflow
    """
    calculation = f"{format_number(left)} {op} {format_number(right)}"
    if op == "+":
        result = left + right
    elif op == "-":
        result = left - right
    elif op == "*":
        result = left * right
    elif op == "/":
        if right == 0:
            raise MathError(f"Division by zero: {calculation}")
        result = left / right
    elif op == "^":
        try:
            result = left**right
        except ZeroDivisionError:
            raise MathError(
                f"Zero cannot be raised to a negative power: {calculation}"
            ) from None
        except OverflowError:
            raise MathError(f"Result of {calculation} is too large") from None
        if isinstance(result, complex):
            raise MathError(f"{calculation} is not a real number")
    else:
        raise ValueError(f"Unknown operator: {op}")
    return _check_finite(result, calculation)


def apply_function(name: str, arg: float) -> float:
    """Apply a unary function; trigonometric arguments are in degrees.

    sqrt, trig and log functions are computed exactly with SymPy before
    conversion, so sin(30) is exactly 0.5 and tan(90) is reported as
    undefined instead of a huge number.

    Raises:
        MathError: On a negative sqrt argument, a non-positive log argument,
            or an undefined tangent
    """
    shown = format_number(arg)
    if name == "neg":
        return 0.0 if arg == 0 else -arg
    if name == "sqrt":
        if arg < 0:
            raise MathError(
                f"Cannot take the square root of a negative number: sqrt({shown})"
            )
        return _to_float(sp.sqrt(_exact(arg)), f"sqrt({shown})")
    if name in ("log", "ln"):
        if arg <= 0:
            raise MathError(
                f"Logarithm is undefined for non-positive values: {name}({shown})"
            )
        if name == "log":
            return _to_float(sp.log(_exact(arg), 10), f"log({shown})")
        return _to_float(sp.log(_exact(arg)), f"ln({shown})")
    if name in config.TRIG_FUNCTIONS:
        radians = sp.pi * _exact(arg) / 180
        func = {"sin": sp.sin, "cos": sp.cos, "tan": sp.tan}[name]
        return _check_finite(
            _to_float(func(radians), f"{name}({shown}°)"), f"{name}({shown}°)"
        )
    raise ValueError(f"Unknown function: {name}")


def _binary_step(node: BinaryOp, left: float, right: float, value: float) -> Step:
    a, b = format_number(left), format_number(right)
    explanation = f"{a} {_BINARY_PHRASES[node.op]} {b}"
    if node.grouped:
        explanation = f"{explanation}; {PARENTHESES_NOTE}"
    return Step(
        description=f"{_BINARY_NAMES[node.op]}: {a} {node.op} {b}",
        calculation=f"{a} {node.op} {b} = {format_number(value)}",
        explanation=explanation,
    )


def _unary_step(name: str, arg: float, value: float, decimals: int) -> Step:
    a = format_number(arg)
    if name == "neg":
        return Step(
            description=f"Negation: neg({a})",
            calculation=f"neg({a}) = {format_number(value)}",
            explanation=f"The opposite of {a}",
        )
    shown = format_fixed(value, decimals)
    if name == "sqrt":
        return Step(
            description=f"Square root calculation: sqrt({a})",
            calculation=f"sqrt({a}) = {shown}",
            explanation=f"Square root of {a}",
        )
    if name in config.TRIG_FUNCTIONS:
        return Step(
            description=f"{name} calculation: {name}({a}°)",
            calculation=f"{name}({a}°) = {shown}",
            explanation=f"{name} of {a} degrees",
        )
    if name == "log":
        return Step(
            description=f"Logarithm calculation: log({a})",
            calculation=f"log({a}) = {shown}",
            explanation=f"Base-10 logarithm of {a}",
        )
    return Step(
        description=f"Natural log calculation: ln({a})",
        calculation=f"ln({a}) = {shown}",
        explanation=f"Natural logarithm (base e) of {a}",
    )


def _walk(node: ExpressionNode, steps: list[Step], decimals: int) -> float:
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, BinaryOp):
        left = _walk(node.left, steps, decimals)
        right = _walk(node.right, steps, decimals)
        value = apply_binary(node.op, left, right)
        steps.append(_binary_step(node, left, right, value))
        return value
    if isinstance(node, UnaryFunc):
        arg = _walk(node.arg, steps, decimals)
        value = apply_function(node.name, arg)
        steps.append(_unary_step(node.name, arg, value, decimals))
        return value
    raise TypeError(f"Not an expression node: {node!r}")


def evaluate(node: ExpressionNode, decimals: int | None = None) -> EvalResult:
    """Evaluate an expression tree children-first, recording one step per operation.

    Args:
        node: Root of the tree built by ``parse``
        decimals: Decimal places for sqrt/trig/log steps (default OUTPUT_DECIMALS)

    Returns:
        EvalResult with the value and the ordered steps

    Raises:
        MathError: On a domain violation anywhere in the tree
    """
    if decimals is None:
        decimals = config.OUTPUT_DECIMALS
    steps: list[Step] = []
    value = _walk(node, steps, decimals)
    logger.debug("Evaluated expression in %d steps: %s", len(steps), value)
    return EvalResult(value=value, steps=tuple(steps))
