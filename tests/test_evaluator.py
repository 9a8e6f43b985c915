"""Unit tests for evaluator module."""

import unittest

from stepcalc_pkg.evaluator import (
    apply_binary,
    apply_function,
    evaluate,
    format_fixed,
    format_number,
)
from stepcalc_pkg.nodes import BinaryOp, Literal, UnaryFunc
from stepcalc_pkg.parser import parse
from stepcalc_pkg.tokenizer import tokenize
from stepcalc_pkg.types import EvalResult, MathError


def run(text, decimals=None):
    return evaluate(parse(tokenize(text)), decimals)


class TestArithmetic(unittest.TestCase):
    """Test binary operations and their steps."""

    def test_precedence_steps(self):
        result = run("2 + 3 * 4")
        self.assertIsInstance(result, EvalResult)
        self.assertEqual(result.value, 14.0)
        self.assertEqual(
            [s.calculation for s in result.steps], ["3 * 4 = 12", "2 + 12 = 14"]
        )
        self.assertEqual(result.steps[0].description, "Multiplication: 3 * 4")
        self.assertEqual(result.steps[0].explanation, "3 multiplied by 4")

    def test_parentheses_first(self):
        result = run("(5 + 3) * 2")
        self.assertEqual(result.value, 16.0)
        self.assertEqual(result.steps[0].calculation, "5 + 3 = 8")
        self.assertIn("parentheses", result.steps[0].explanation)
        self.assertEqual(result.steps[1].calculation, "8 * 2 = 16")
        self.assertNotIn("parentheses", result.steps[1].explanation)

    def test_left_to_right_order(self):
        result = run("4^2 + 3^2")
        self.assertEqual(result.value, 25.0)
        self.assertEqual(
            [s.calculation for s in result.steps],
            ["4 ^ 2 = 16", "3 ^ 2 = 9", "16 + 9 = 25"],
        )
        self.assertEqual(result.steps[0].explanation, "4 raised to the power of 2")

    def test_right_associative_power(self):
        result = run("2^3^2")
        self.assertEqual(result.value, 512.0)
        self.assertEqual(result.steps[0].calculation, "3 ^ 2 = 9")

    def test_division_and_subtraction(self):
        result = run("10 / 4 - 1")
        self.assertEqual(result.value, 1.5)
        self.assertEqual(result.steps[0].calculation, "10 / 4 = 2.5")
        self.assertEqual(result.steps[1].description, "Subtraction: 2.5 - 1")

    def test_negation_step(self):
        result = run("-3 + 5")
        self.assertEqual(result.value, 2.0)
        self.assertEqual(
            [s.calculation for s in result.steps], ["neg(3) = -3", "-3 + 5 = 2"]
        )

    def test_negation_before_power(self):
        self.assertEqual(run("-2^2").value, 4.0)
        self.assertEqual(run("2^-2").value, 0.25)

    def test_one_step_per_operation(self):
        result = run("sqrt(16) + 2 * (3 - 1)")
        self.assertEqual(len(result.steps), 4)

    def test_literal_has_no_steps(self):
        result = evaluate(Literal(7.0))
        self.assertEqual(result.value, 7.0)
        self.assertEqual(result.steps, ())


class TestFunctions(unittest.TestCase):
    """Test unary functions, degrees and fixed-precision rendering."""

    def test_sqrt(self):
        result = run("sqrt(16)")
        self.assertEqual(result.value, 4.0)
        self.assertEqual(result.steps[0].calculation, "sqrt(16) = 4.000000")
        self.assertEqual(result.steps[0].explanation, "Square root of 16")

    def test_sin_uses_degrees(self):
        result = run("sin(30)")
        self.assertAlmostEqual(result.value, 0.5, delta=1e-6)
        self.assertEqual(result.steps[0].calculation, "sin(30°) = 0.500000")
        self.assertEqual(result.steps[0].explanation, "sin of 30 degrees")

    def test_cos_and_tan(self):
        self.assertEqual(run("cos(90)").value, 0.0)
        self.assertAlmostEqual(run("cos(60)").value, 0.5, delta=1e-9)
        self.assertAlmostEqual(run("tan(45)").value, 1.0, delta=1e-9)

    def test_log_base_ten(self):
        result = run("log(100)")
        self.assertAlmostEqual(result.value, 2.0, delta=1e-9)
        self.assertEqual(result.steps[0].calculation, "log(100) = 2.000000")
        self.assertEqual(result.steps[0].explanation, "Base-10 logarithm of 100")

    def test_natural_log(self):
        self.assertEqual(run("ln(1)").value, 0.0)
        self.assertAlmostEqual(run("ln(10)").value, 2.302585092994046, delta=1e-12)

    def test_custom_decimals(self):
        result = run("sqrt(2)", decimals=2)
        self.assertEqual(result.steps[0].calculation, "sqrt(2) = 1.41")

    def test_nested_functions(self):
        result = run("sqrt(log(10000))")
        self.assertAlmostEqual(result.value, 2.0, delta=1e-9)
        self.assertEqual(len(result.steps), 2)
        self.assertTrue(result.steps[0].calculation.startswith("log(10000)"))

    def test_apply_function_neg_zero(self):
        self.assertEqual(format_number(apply_function("neg", 0.0)), "0")


class TestMathErrors(unittest.TestCase):
    """Test domain violations."""

    def test_division_by_zero(self):
        with self.assertRaises(MathError) as ctx:
            run("5/0")
        self.assertEqual(ctx.exception.code, "MATH_ERROR")
        self.assertIn("Division by zero", str(ctx.exception))

    def test_sqrt_negative(self):
        with self.assertRaises(MathError):
            run("sqrt(-1)")

    def test_log_non_positive(self):
        for text in ("log(0)", "log(-5)", "ln(0)", "ln(-1)"):
            with self.subTest(text=text):
                with self.assertRaises(MathError):
                    run(text)

    def test_tan_undefined(self):
        with self.assertRaises(MathError):
            run("tan(90)")

    def test_zero_to_negative_power(self):
        with self.assertRaises(MathError):
            run("0^-1")

    def test_non_real_power(self):
        with self.assertRaises(MathError):
            run("(-8)^0.5")

    def test_overflow(self):
        with self.assertRaises(MathError):
            run("10^400")

    def test_apply_binary_division(self):
        with self.assertRaises(MathError):
            apply_binary("/", 1.0, 0.0)


class TestFormatting(unittest.TestCase):
    """Test number rendering."""

    def test_format_number(self):
        self.assertEqual(format_number(5.0), "5")
        self.assertEqual(format_number(0.25), "0.25")
        self.assertEqual(format_number(-0.0), "0")
        self.assertEqual(format_number(-3.0), "-3")
        self.assertEqual(format_number(1e20), "1e+20")

    def test_format_fixed(self):
        self.assertEqual(format_fixed(0.5), "0.500000")
        self.assertEqual(format_fixed(-0.0), "0.000000")
        self.assertEqual(format_fixed(3.14159, 2), "3.14")


class TestTreeInput(unittest.TestCase):
    """Test evaluation of hand-built trees."""

    def test_hand_built_tree(self):
        node = BinaryOp("*", UnaryFunc("sqrt", Literal(9.0)), Literal(2.0))
        result = evaluate(node)
        self.assertEqual(result.value, 6.0)
        self.assertEqual(result.steps[-1].calculation, "3 * 2 = 6")


if __name__ == "__main__":
    unittest.main()
