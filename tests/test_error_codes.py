"""Test error codes raised by the pipeline."""

import unittest

from stepcalc_pkg.solver import solve
from stepcalc_pkg.types import (
    CalculatorError,
    EmptyInputError,
    LexError,
    MathError,
    ParseError,
    ValidationError,
)


class TestErrorCodes(unittest.TestCase):
    """Test that each error kind carries its code and message."""

    def assert_code(self, expression, error_type, code):
        with self.assertRaises(error_type) as ctx:
            solve(expression)
        self.assertEqual(ctx.exception.code, code)
        self.assertIsInstance(ctx.exception, CalculatorError)
        self.assertEqual(str(ctx.exception), ctx.exception.message)

    def test_empty_input_code(self):
        self.assert_code("", EmptyInputError, "EMPTY_INPUT")

    def test_empty_input_is_validation_error(self):
        self.assertTrue(issubclass(EmptyInputError, ValidationError))

    def test_lex_error_code(self):
        self.assert_code("2 @ 2", LexError, "LEX_ERROR")

    def test_syntax_error_code(self):
        self.assert_code("2 +", ParseError, "SYNTAX_ERROR")

    def test_math_error_code(self):
        self.assert_code("1/0", MathError, "MATH_ERROR")

    def test_too_deep_code(self):
        self.assert_code("(" * 120 + "1" + ")" * 120, ValidationError, "TOO_DEEP")

    def test_positions_are_reported(self):
        with self.assertRaises(LexError) as ctx:
            solve("12 + a")
        self.assertEqual(ctx.exception.position, 5)
        with self.assertRaises(ParseError) as ctx:
            solve("1 + 2)")
        self.assertEqual(ctx.exception.position, 5)

    def test_explicit_code_override(self):
        error = ValidationError("too long", "TOO_LONG")
        self.assertEqual(error.code, "TOO_LONG")
        self.assertEqual(ValidationError("bad").code, "VALIDATION_ERROR")


if __name__ == "__main__":
    unittest.main()
