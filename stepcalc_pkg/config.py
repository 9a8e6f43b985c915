"""Centralized configuration for Stepcalc.

This module defines:
- Input validation limits (length, nesting depth)
- Output formatting precision for steps
- History size for interactive consumers
- Default logging level and log file
- The function table, constant aliases and Unicode confusables

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with STEPCALC_)
"""

import importlib.metadata
import math
import os

try:
    VERSION = importlib.metadata.version("stepcalc")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("STEPCALC_MAX_INPUT_LENGTH", "1000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("STEPCALC_MAX_EXPRESSION_DEPTH", "100")
)  # nesting depth

# Decimal places for sqrt, trig and log results shown in steps
OUTPUT_DECIMALS = int(os.getenv("STEPCALC_OUTPUT_DECIMALS", "6"))

# Logging defaults, used when the CLI flags are not given
LOG_LEVEL = os.getenv("STEPCALC_LOG_LEVEL", "WARNING").upper()
LOG_FILE = os.getenv("STEPCALC_LOG_FILE") or None

# Number of entries the REPL keeps in its history
HISTORY_SIZE = int(os.getenv("STEPCALC_HISTORY_SIZE", "10"))

PI = math.pi

FUNCTION_NAMES = frozenset({"sqrt", "sin", "cos", "tan", "log", "ln"})
TRIG_FUNCTIONS = frozenset({"sin", "cos", "tan"})

# Identifiers that denote the constant pi
CONSTANT_NAMES = {
    "π": PI,
    "pi": PI,
}

# Normalized before scanning so matching does not depend on encoding quirks
UNICODE_CONFUSABLES = {
    "√": "sqrt",
    "×": "*",
    "÷": "/",
    "−": "-",
}

BINARY_OPERATORS = frozenset({"+", "-", "*", "/", "^"})
