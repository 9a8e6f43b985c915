"""Type definitions, result dataclasses and the error hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Step:
    """One human-readable record of an intermediate computation."""

    description: str
    calculation: str
    explanation: str

    def to_dict(self) -> dict[str, str]:
        return {
            "description": self.description,
            "calculation": self.calculation,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class EvalResult:
    """Value of an expression together with the steps that produced it."""

    value: float
    steps: tuple[Step, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"value": self.value, "steps": [s.to_dict() for s in self.steps]}

    def __repr__(self) -> str:
        return f"EvalResult(value={self.value!r}, steps={len(self.steps)})"


@dataclass
class SolveResult:
    """Result of solving an expression through the public API."""

    ok: bool
    expression: str
    value: float | None = None
    steps: list[Step] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "expression": self.expression}
        if self.value is not None:
            result_dict["value"] = self.value
        if self.steps:
            result_dict["steps"] = [s.to_dict() for s in self.steps]
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return (
                f"SolveResult(ok=False, error={self.error!r}, "
                f"error_code={self.error_code!r})"
            )
        return f"SolveResult(ok=True, value={self.value!r}, steps={len(self.steps)})"


class CalculatorError(Exception):
    """Base class for every error raised while solving an expression."""

    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(CalculatorError):
    """Raised when input validation fails."""

    default_code = "VALIDATION_ERROR"


class EmptyInputError(ValidationError):
    """Raised for blank or whitespace-only input."""

    default_code = "EMPTY_INPUT"

    def __init__(self, message: str = "Please enter a mathematical expression"):
        super().__init__(message)


class LexError(CalculatorError):
    """Raised when the input contains a character or literal that cannot be scanned."""

    default_code = "LEX_ERROR"

    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(message)


class ParseError(CalculatorError):
    """Raised when the token sequence is not a well-formed expression."""

    default_code = "SYNTAX_ERROR"

    def __init__(self, message: str, position: int):
        self.position = position
        super().__init__(message)


class MathError(CalculatorError):
    """Raised on domain violations such as division by zero."""

    default_code = "MATH_ERROR"
