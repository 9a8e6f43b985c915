"""Lexical scanning of calculator input into typed tokens."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from .config import (
    BINARY_OPERATORS,
    CONSTANT_NAMES,
    FUNCTION_NAMES,
    UNICODE_CONFUSABLES,
)
from .logging_config import get_logger
from .types import LexError

logger = get_logger("tokenizer")


class TokenKind(Enum):
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    NEGATE = "NEGATE"
    FUNCTION = "FUNCTION"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    CONSTANT = "CONSTANT"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    value: float | None = None
    position: int = 0


# A '-' after one of these starts an operand instead of subtracting
_NEGATION_CONTEXT = (
    TokenKind.OPERATOR,
    TokenKind.NEGATE,
    TokenKind.LPAREN,
    TokenKind.FUNCTION,
)


def normalize(text: str) -> str:
    """Replace Unicode confusables with their ASCII spelling.

    Args:
        text: Raw input (e.g., "√(16) × 2")

    Returns:
        Normalized input (e.g., "sqrt(16) * 2")
    """
    for glyph, replacement in UNICODE_CONFUSABLES.items():
        text = text.replace(glyph, replacement)
    return text


def _is_digit(char: str) -> bool:
    # str.isdigit also accepts superscripts such as '²', which float() rejects
    return char.isascii() and char.isdigit()


def _scan_number(text: str, start: int) -> tuple[str, int]:
    """Scan ``digit+ ('.' digit+)?`` starting at ``start``; return (literal, end)."""
    end = start
    length = len(text)
    while end < length and _is_digit(text[end]):
        end += 1
    if end < length and text[end] == ".":
        frac_start = end + 1
        end = frac_start
        while end < length and _is_digit(text[end]):
            end += 1
        if end == frac_start:
            raise LexError(
                f"Malformed number '{text[start:end]}' at position {start}", start
            )
    if end < length and text[end] == ".":
        raise LexError(
            f"Malformed number '{text[start:end + 1]}' at position {start}: "
            "more than one decimal point",
            start,
        )
    return text[start:end], end


def tokenize(text: str) -> list[Token]:
    """Convert expression text into a flat list of tokens.

    Whitespace is ignored everywhere, including between a function name and
    its '(' ("sqrt (16)" scans like "sqrt(16)"). A '-' at the start of the
    input or after an operator, '(' or function name becomes a NEGATE token.
    Only ASCII digits form numbers; a literal too large for a float is
    rejected.

    Args:
        text: Expression string (e.g., "2 + 3 * 4", "sin(30)", "2π")

    Returns:
        List of tokens in input order

    Raises:
        LexError: On an unrecognized character, an unknown name or a
            malformed number literal
    """
    text = normalize(text)
    tokens: list[Token] = []
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        if char.isspace():
            i += 1
        elif _is_digit(char):
            literal, end = _scan_number(text, i)
            value = float(literal)
            if not math.isfinite(value):
                raise LexError(f"Number too large at position {i}", i)
            tokens.append(Token(TokenKind.NUMBER, literal, value, i))
            i = end
        elif char == ".":
            raise LexError(f"Malformed number at position {i}: missing leading digit", i)
        elif char == "-" and (not tokens or tokens[-1].kind in _NEGATION_CONTEXT):
            tokens.append(Token(TokenKind.NEGATE, "-", None, i))
            i += 1
        elif char in BINARY_OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, char, None, i))
            i += 1
        elif char == "(":
            tokens.append(Token(TokenKind.LPAREN, char, None, i))
            i += 1
        elif char == ")":
            tokens.append(Token(TokenKind.RPAREN, char, None, i))
            i += 1
        elif char in CONSTANT_NAMES:
            tokens.append(Token(TokenKind.CONSTANT, char, CONSTANT_NAMES[char], i))
            i += 1
        elif char.isascii() and char.isalpha():
            end = i
            while end < length and text[end].isascii() and text[end].isalpha():
                end += 1
            word = text[i:end]
            if word in FUNCTION_NAMES:
                tokens.append(Token(TokenKind.FUNCTION, word, None, i))
            elif word in CONSTANT_NAMES:
                tokens.append(Token(TokenKind.CONSTANT, word, CONSTANT_NAMES[word], i))
            else:
                raise LexError(f"Unknown name '{word}' at position {i}", i)
            i = end
        else:
            raise LexError(f"Unexpected character '{char}' at position {i}", i)

    logger.debug("Tokenized %r into %d tokens", text, len(tokens))
    return tokens
