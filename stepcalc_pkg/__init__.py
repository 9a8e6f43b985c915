"""Stepcalc package: tokenizer, parser, evaluator and a solve facade with step-by-step explanations."""

__all__ = [
    "config",
    "tokenizer",
    "nodes",
    "parser",
    "evaluator",
    "solver",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "solve",
    "solve_expression",
    "validate_expression",
]
