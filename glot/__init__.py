"""
Glot: a minimal line-oriented programming language.
Tokenizer, parsers and evaluator for numbered LET / PRINT / END programs.
"""
__version__ = "0.1.0"

from .errors import (
    GlotError, InvalidCharacter, InvalidNumber, InvalidIdentifier,
    UnterminatedString, InvalidValueToken, InvalidOperatorToken,
    UnexpectedToken, EndOfInput, InvalidUnaryOperator, DivisionByZero,
    IntegerOverflow, UndefinedVariable, InvalidSourceFile, LineError,
)
from .lexer import Lexer, Token, TokenType, tokenize, format_tokens
from .parser import (
    Parser, TokenCursor, BinaryOperator,
    NumberNode, VariableNode, UnaryNode, BinaryNode,
    LetNode, PrintStringNode, PrintExprNode, EndNode,
    parse_expression, parse_statement, expression_items,
    format_expression, format_statement,
)
from .interpreter import Interpreter, interpret
from .program import Program, ProgramLine, parse_line, parse_program, load_program
from .config import GlotConfig

__all__ = [
    "GlotError", "InvalidCharacter", "InvalidNumber", "InvalidIdentifier",
    "UnterminatedString", "InvalidValueToken", "InvalidOperatorToken",
    "UnexpectedToken", "EndOfInput", "InvalidUnaryOperator", "DivisionByZero",
    "IntegerOverflow", "UndefinedVariable", "InvalidSourceFile", "LineError",
    "Lexer", "Token", "TokenType", "tokenize", "format_tokens",
    "Parser", "TokenCursor", "BinaryOperator",
    "NumberNode", "VariableNode", "UnaryNode", "BinaryNode",
    "LetNode", "PrintStringNode", "PrintExprNode", "EndNode",
    "parse_expression", "parse_statement", "expression_items",
    "format_expression", "format_statement",
    "Interpreter", "interpret",
    "Program", "ProgramLine", "parse_line", "parse_program", "load_program",
    "GlotConfig",
]
