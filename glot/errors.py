"""
Glot Errors
===========
Every failure raised by the tokenizer, the parsers, the evaluator and the
program assembler derives from GlotError. Each error carries the offending
datum (character, digit run, token, ...) so callers can report exactly
where and why a line was rejected.
"""
from __future__ import annotations

from typing import Any


class GlotError(Exception):
    """Base class for all glot failures."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


# ─────────────────────────────────────────────────────────────
#  Lexical errors
# ─────────────────────────────────────────────────────────────

class InvalidCharacter(GlotError):
    """A character that cannot start any token."""

    def __init__(self, char: str, col: int = 0):
        super().__init__(char)
        self.char = char
        self.col = col

    def __str__(self) -> str:
        return f"Invalid character {self.char!r} at col {self.col}"


class InvalidNumber(GlotError):
    """A digit run that does not fit an unsigned 64-bit integer."""

    def __init__(self, digits: str):
        super().__init__(digits)
        self.digits = digits

    def __str__(self) -> str:
        return f"Invalid number: {self.digits}"


class InvalidIdentifier(GlotError):
    """A letter run that is neither a keyword nor a single-letter variable."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Invalid identifier {self.name!r} (variables are a single letter A-Z)"


class UnterminatedString(GlotError):
    def __init__(self, col: int):
        super().__init__(col)
        self.col = col

    def __str__(self) -> str:
        return f"Unterminated string starting at col {self.col}"


# ─────────────────────────────────────────────────────────────
#  Syntax errors
# ─────────────────────────────────────────────────────────────

class _TokenError(GlotError):
    """An error naming the token found in the wrong place."""

    description = "Unexpected token"

    def __init__(self, token: Any):
        super().__init__(token)
        self.token = token

    def __str__(self) -> str:
        return f"{self.description}: {self.token}"


class InvalidValueToken(_TokenError):
    description = "Expected a number or variable, got"


class InvalidOperatorToken(_TokenError):
    description = "Expected an arithmetic operator, got"


class UnexpectedToken(_TokenError):
    description = "Unexpected token"


class EndOfInput(GlotError):
    """Tokens ran out before a required token."""

    def __str__(self) -> str:
        return "Unexpected end of input"


# ─────────────────────────────────────────────────────────────
#  Evaluation errors
# ─────────────────────────────────────────────────────────────

class InvalidUnaryOperator(GlotError):
    def __init__(self, operator: Any):
        super().__init__(operator)
        self.operator = operator

    def __str__(self) -> str:
        return f"Operator {self.operator} cannot be used as a sign"


class DivisionByZero(GlotError):
    def __init__(self, operator: Any):
        super().__init__(operator)
        self.operator = operator

    def __str__(self) -> str:
        return f"Division by zero ({self.operator})"


class IntegerOverflow(GlotError):
    """A value outside the signed 64-bit range."""

    def __init__(self, value: int):
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"Integer overflow: {self.value}"


class UndefinedVariable(GlotError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Undefined variable: {self.name}"


# ─────────────────────────────────────────────────────────────
#  Program errors
# ─────────────────────────────────────────────────────────────

class InvalidSourceFile(GlotError):
    def __init__(self, path: str, reason: str = ""):
        super().__init__(path)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        if self.reason:
            return f"Cannot read source file {self.path}: {self.reason}"
        return f"Cannot read source file {self.path}"


class LineError(GlotError):
    """Wraps a failure with the program line it came from.

    line_index is the 1-based position in the source (file line or REPL
    entry); line_number is the glot line number when one was parsed.
    """

    def __init__(self, error: GlotError, line_index: int | None = None,
                 line_number: int | None = None, text: str = ""):
        super().__init__(error, line_index, line_number, text)
        self.error = error
        self.line_index = line_index
        self.line_number = line_number
        self.text = text

    @property
    def kind(self) -> str:
        return self.error.kind

    def __str__(self) -> str:
        where = []
        if self.line_index is not None:
            where.append(f"line {self.line_index}")
        if self.line_number is not None:
            where.append(f"[{self.line_number}]")
        prefix = " ".join(where)
        if prefix:
            return f"{prefix}: {self.error}"
        return str(self.error)
