"""Expression parsing module.

This module handles:
- Operator precedence and associativity (precedence climbing)
- Unary negation and function application
- Parenthesized groups and implicit multiplication (e.g. "2π", "2(3+4)")
- Nesting depth limits
"""

from __future__ import annotations

from dataclasses import replace

from .config import MAX_EXPRESSION_DEPTH
from .logging_config import get_logger
from .nodes import BinaryOp, ExpressionNode, Literal, UnaryFunc
from .tokenizer import Token, TokenKind
from .types import ParseError, ValidationError

logger = get_logger("parser")

BINARY_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, "^": 3}
RIGHT_ASSOCIATIVE = frozenset({"^"})

# Token kinds that multiply an operand they directly follow
IMPLICIT_MULTIPLICATION_STARTS = (
    TokenKind.CONSTANT,
    TokenKind.LPAREN,
    TokenKind.FUNCTION,
)


class _Parser:
    def __init__(self, tokens: list[Token], end_position: int):
        self.tokens = tokens
        self.pos = 0
        self.end_position = end_position

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def _check_depth(self, depth: int) -> None:
        if depth > MAX_EXPRESSION_DEPTH:
            raise ValidationError(
                f"Expression nested too deeply (>{MAX_EXPRESSION_DEPTH} levels)",
                "TOO_DEEP",
            )

    def parse_expression(self, min_precedence: int = 1, depth: int = 0) -> ExpressionNode:
        self._check_depth(depth)
        left = self.parse_unary(depth)
        while True:
            token = self.peek()
            if token is None:
                break
            if token.kind is TokenKind.OPERATOR:
                op, implicit = token.text, False
            elif token.kind in IMPLICIT_MULTIPLICATION_STARTS:
                op, implicit = "*", True
            else:
                break
            precedence = BINARY_PRECEDENCE[op]
            if precedence < min_precedence:
                break
            if not implicit:
                self.advance()
            if op in RIGHT_ASSOCIATIVE:
                next_min = precedence
            else:
                next_min = precedence + 1
            right = self.parse_expression(next_min, depth + 1)
            left = BinaryOp(op, left, right)
        return left

    def parse_unary(self, depth: int) -> ExpressionNode:
        token = self.peek()
        if token is not None and token.kind is TokenKind.NEGATE:
            self.advance()
            self._check_depth(depth + 1)
            return UnaryFunc("neg", self.parse_unary(depth + 1))
        return self.parse_primary(depth)

    def parse_primary(self, depth: int) -> ExpressionNode:
        token = self.peek()
        if token is None:
            raise ParseError(
                f"Missing operand at end of expression (position {self.end_position})",
                self.end_position,
            )

        if token.kind in (TokenKind.NUMBER, TokenKind.CONSTANT):
            self.advance()
            return Literal(token.value)

        if token.kind is TokenKind.LPAREN:
            self.advance()
            inner = self.parse_expression(1, depth + 1)
            self._expect_closing(token)
            if isinstance(inner, BinaryOp):
                inner = replace(inner, grouped=True)
            return inner

        if token.kind is TokenKind.FUNCTION:
            self.advance()
            opening = self.peek()
            if opening is None or opening.kind is not TokenKind.LPAREN:
                position = self.end_position if opening is None else opening.position
                raise ParseError(
                    f"Function '{token.text}' must be followed by '(' "
                    f"(position {position})",
                    position,
                )
            self.advance()
            arg = self.parse_expression(1, depth + 1)
            self._expect_closing(opening)
            return UnaryFunc(token.text, arg)

        if token.kind is TokenKind.RPAREN:
            raise ParseError(
                f"Missing operand before ')' at position {token.position}",
                token.position,
            )
        raise ParseError(
            f"Operator '{token.text}' is missing an operand at position {token.position}",
            token.position,
        )

    def _expect_closing(self, opening: Token) -> None:
        token = self.peek()
        if token is None or token.kind is not TokenKind.RPAREN:
            raise ParseError(
                f"Unmatched '(' at position {opening.position}", opening.position
            )
        self.advance()


def parse(tokens: list[Token]) -> ExpressionNode:
    """Build an expression tree from a token sequence.

    Precedence, highest first: function application and unary negation,
    then '^' (right-associative), then '*' and '/', then '+' and '-'
    (both left-associative).

    Args:
        tokens: Output of ``tokenize``

    Returns:
        Root node of the expression tree

    Raises:
        ParseError: On an empty expression, unmatched parentheses, a missing
            operand, a function name without '(' or trailing tokens
        ValidationError: If the expression is nested too deeply
    """
    if not tokens:
        raise ParseError("Empty expression", 0)

    last = tokens[-1]
    parser = _Parser(tokens, last.position + len(last.text))
    node = parser.parse_expression()

    leftover = parser.peek()
    if leftover is not None:
        if leftover.kind is TokenKind.RPAREN:
            raise ParseError(
                f"Unmatched ')' at position {leftover.position}", leftover.position
            )
        raise ParseError(
            f"Unexpected '{leftover.text}' at position {leftover.position}",
            leftover.position,
        )

    logger.debug("Parsed %d tokens into %s", len(tokens), type(node).__name__)
    return node
