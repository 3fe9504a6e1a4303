"""
Glot Parser
===========
Recursive-descent parsers that turn the token stream produced by the Lexer
into expression trees and statements.

Expression grammar (lowest to highest precedence):

    expression ::= product (("+" | "-") product)*
    product    ::= factor (("*" | "/" | "%") factor)*
    factor     ::= ("+" | "-") factor | term
    term       ::= NUMBER | IDENTIFIER | "(" expression ")"

Statement grammar:

    statement  ::= "LET" IDENTIFIER "=" expression
                 | "PRINT" (STRING | expression)
                 | "END"

Parsing stops at the first ill-formed token; nothing partial is returned.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

from .errors import (
    EndOfInput, InvalidOperatorToken, InvalidValueToken, UnexpectedToken,
)
from .lexer import Token, TokenType, format_token, tokenize


# ─────────────────────────────────────────────────────────────
#  Operators
# ─────────────────────────────────────────────────────────────

class BinaryOperator(Enum):
    """Arithmetic operators. ADD and SUBTRACT double as unary signs."""
    ADD      = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE   = "/"
    MODULO   = "%"

    @property
    def precedence(self) -> int:
        if self in (BinaryOperator.ADD, BinaryOperator.SUBTRACT):
            return 1
        return 2

    def __str__(self) -> str:
        return self.value


ADDITIVE_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUBTRACT,
}

MULTIPLICATIVE_OPERATORS = {
    TokenType.STAR: BinaryOperator.MULTIPLY,
    TokenType.SLASH: BinaryOperator.DIVIDE,
    TokenType.PERCENT: BinaryOperator.MODULO,
}

# Tokens that may open an expression
EXPRESSION_START = {
    TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.LPAREN,
    TokenType.PLUS, TokenType.MINUS,
}


# ─────────────────────────────────────────────────────────────
#  Expression Nodes
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NumberNode:
    """An unsigned integer literal."""
    value: int


@dataclass(frozen=True)
class VariableNode:
    """A reference to a single-letter variable."""
    name: str


@dataclass(frozen=True)
class UnaryNode:
    """A sign applied to an operand: -A, +(B * 2)."""
    op: BinaryOperator
    operand: "ExpressionNode"


@dataclass(frozen=True)
class BinaryNode:
    """An operator strictly between two operands."""
    left: "ExpressionNode"
    op: BinaryOperator
    right: "ExpressionNode"


Term = Union[NumberNode, VariableNode]
ExpressionNode = Union[NumberNode, VariableNode, UnaryNode, BinaryNode]


# ─────────────────────────────────────────────────────────────
#  Statement Nodes
# ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LetNode:
    """LET A = expression."""
    variable: str
    expression: ExpressionNode


@dataclass(frozen=True)
class PrintStringNode:
    """PRINT "literal"."""
    value: str


@dataclass(frozen=True)
class PrintExprNode:
    """PRINT expression."""
    expression: ExpressionNode


@dataclass(frozen=True)
class EndNode:
    """END, which stops the program."""


StatementNode = Union[LetNode, PrintStringNode, PrintExprNode, EndNode]


# ─────────────────────────────────────────────────────────────
#  Token Cursor
# ─────────────────────────────────────────────────────────────

class TokenCursor:
    """
    Forward-only cursor over a token stream with one token of lookahead.

    Shared by the expression and statement parsers so that a caller can keep
    consuming whatever a sub-parser leaves behind.
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._lookahead: Token | None = None
        self._filled = False

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        if not self._filled:
            self._lookahead = next(self._tokens, None)
            self._filled = True
        return self._lookahead

    @property
    def exhausted(self) -> bool:
        return self.peek() is None

    def advance(self) -> Token:
        """Consume the next token, raising EndOfInput if there is none."""
        token = self.peek()
        if token is None:
            raise EndOfInput()
        self._filled = False
        self._lookahead = None
        return token

    def expect(self, token_type: TokenType) -> Token:
        """Consume the next token, which must be of the given type."""
        token = self.advance()
        if token.type != token_type:
            raise UnexpectedToken(token)
        return token

    def __iter__(self) -> Iterator[Token]:
        while not self.exhausted:
            yield self.advance()


def _as_cursor(tokens: Union[TokenCursor, Iterable[Token], str]) -> TokenCursor:
    if isinstance(tokens, TokenCursor):
        return tokens
    if isinstance(tokens, str):
        tokens = tokenize(tokens)
    return TokenCursor(tokens)


# ─────────────────────────────────────────────────────────────
#  Parser
# ─────────────────────────────────────────────────────────────

class Parser:
    """
    Recursive-descent parser for one line of glot.

    Usage:
        expr = Parser(tokens).parse_expression()
        stmt = Parser(tokens).parse_statement()
    """

    def __init__(self, tokens: Union[TokenCursor, Iterable[Token]]):
        self.cursor = _as_cursor(tokens)

    # ─────────────────────────────────────────────────────────
    #  Expressions
    # ─────────────────────────────────────────────────────────

    def parse_expression(self) -> ExpressionNode:
        """Parse an expression running to the end of the token stream."""
        return self._parse_sum(depth=0)

    def _at_expression_end(self, depth: int) -> bool:
        token = self.cursor.peek()
        if token is None:
            return True
        return depth > 0 and token.type == TokenType.RPAREN

    def _parse_sum(self, depth: int) -> ExpressionNode:
        left = self._parse_product(depth)
        while not self._at_expression_end(depth):
            token = self.cursor.advance()
            op = ADDITIVE_OPERATORS.get(token.type)
            if op is None:
                # Anything left over after a full product must be an operator
                raise InvalidOperatorToken(token)
            right = self._parse_product(depth)
            left = BinaryNode(left, op, right)
        return left

    def _parse_product(self, depth: int) -> ExpressionNode:
        left = self._parse_factor(depth)
        while True:
            token = self.cursor.peek()
            if token is None or token.type not in MULTIPLICATIVE_OPERATORS:
                return left
            self.cursor.advance()
            right = self._parse_factor(depth)
            left = BinaryNode(left, MULTIPLICATIVE_OPERATORS[token.type], right)

    def _parse_factor(self, depth: int) -> ExpressionNode:
        token = self.cursor.peek()
        if token is not None and token.type in ADDITIVE_OPERATORS:
            self.cursor.advance()
            return UnaryNode(ADDITIVE_OPERATORS[token.type], self._parse_factor(depth))
        return self._parse_term(depth)

    def _parse_term(self, depth: int) -> ExpressionNode:
        token = self.cursor.advance()
        match token.type:
            case TokenType.NUMBER:
                return NumberNode(token.value)
            case TokenType.IDENTIFIER:
                return VariableNode(token.value)
            case TokenType.LPAREN:
                inner = self._parse_sum(depth + 1)
                self.cursor.advance()  # the closing ) seen by _at_expression_end
                return inner
            case _:
                raise InvalidValueToken(token)

    # ─────────────────────────────────────────────────────────
    #  Statements
    # ─────────────────────────────────────────────────────────

    def parse_statement(self) -> StatementNode:
        """Parse one complete statement from the token stream."""
        token = self.cursor.advance()
        match token.type:
            case TokenType.KW_LET:
                return self._parse_let()
            case TokenType.KW_PRINT:
                return self._parse_print()
            case TokenType.KW_END:
                self._expect_end()
                return EndNode()
            case _:
                raise UnexpectedToken(token)

    def _parse_let(self) -> LetNode:
        """Parse: LET <letter> = <expression>."""
        name = self.cursor.expect(TokenType.IDENTIFIER)
        self.cursor.expect(TokenType.EQUALS)
        return LetNode(name.value, self.parse_expression())

    def _parse_print(self) -> StatementNode:
        """Parse: PRINT "text" or PRINT <expression>."""
        token = self.cursor.peek()
        if token is None:
            raise EndOfInput()
        if token.type == TokenType.STRING:
            self.cursor.advance()
            self._expect_end()
            return PrintStringNode(token.value)
        if token.type in EXPRESSION_START:
            return PrintExprNode(self.parse_expression())
        raise UnexpectedToken(token)

    def _expect_end(self):
        token = self.cursor.peek()
        if token is not None:
            raise UnexpectedToken(token)


# ─────────────────────────────────────────────────────────────
#  Convenience API
# ─────────────────────────────────────────────────────────────

def parse_expression(tokens: Union[TokenCursor, Iterable[Token], str]) -> ExpressionNode:
    """Parse an expression from a cursor, a token sequence or source text."""
    return Parser(_as_cursor(tokens)).parse_expression()


def parse_statement(tokens: Union[TokenCursor, Iterable[Token], str]) -> StatementNode:
    """Parse a statement from a cursor, a token sequence or source text."""
    return Parser(_as_cursor(tokens)).parse_statement()


def expression_items(node: ExpressionNode) -> Iterator[Union[Term, BinaryOperator]]:
    """Walk a tree in order, yielding terms and operators as written.

    For `A + 10 * B` this yields Var A, ADD, Num 10, MULTIPLY, Var B. A sign
    is yielded before its operand.
    """
    match node:
        case UnaryNode(op=op, operand=operand):
            yield op
            yield from expression_items(operand)
        case BinaryNode(left=left, op=op, right=right):
            yield from expression_items(left)
            yield op
            yield from expression_items(right)
        case _:
            yield node


def format_expression(node: ExpressionNode) -> str:
    """Render a tree as source, adding only the parentheses its shape needs."""
    match node:
        case NumberNode(value=value):
            return str(value)
        case VariableNode(name=name):
            return name
        case UnaryNode(op=op, operand=operand):
            inner = format_expression(operand)
            if isinstance(operand, BinaryNode):
                inner = f"({inner})"
            return f"{op}{inner}"
        case BinaryNode(left=left, op=op, right=right):
            lhs = format_expression(left)
            rhs = format_expression(right)
            if isinstance(left, BinaryNode) and left.op.precedence < op.precedence:
                lhs = f"({lhs})"
            # Operators are left-associative, so an equal-precedence right
            # operand only keeps its shape inside parentheses.
            if isinstance(right, BinaryNode) and right.op.precedence <= op.precedence:
                rhs = f"({rhs})"
            return f"{lhs} {op} {rhs}"
    raise TypeError(f"Not an expression node: {node!r}")


def format_statement(node: StatementNode) -> str:
    """Render a statement as source."""
    match node:
        case LetNode(variable=variable, expression=expression):
            return f"LET {variable} = {format_expression(expression)}"
        case PrintStringNode(value=value):
            return f"PRINT {format_token(Token(TokenType.STRING, value))}"
        case PrintExprNode(expression=expression):
            return f"PRINT {format_expression(expression)}"
        case EndNode():
            return "END"
    raise TypeError(f"Not a statement node: {node!r}")
