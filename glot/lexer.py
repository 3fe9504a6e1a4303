"""
Glot Lexer
==========
Tokenizes a single line of glot source into a list of typed tokens.

The scan is left to right with one character of lookahead. Digit runs and
letter runs are consumed greedily (maximal munch) and only then classified:
a letter run is a keyword when it spells one exactly, a variable when it is
a single letter, and an error otherwise. `AB` is never two variables.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Iterable, Iterator

from .errors import InvalidCharacter, InvalidIdentifier, InvalidNumber, UnterminatedString


MAX_NUMBER = 2**64 - 1


class TokenType(Enum):
    """All token types in the glot language."""
    # Keywords
    KW_LET      = auto()   # LET
    KW_PRINT    = auto()   # PRINT
    KW_END      = auto()   # END

    # Literals
    IDENTIFIER  = auto()   # A..Z
    NUMBER      = auto()   # 42
    STRING      = auto()   # "..."

    # Assignment (not a comparator)
    EQUALS      = auto()   # =

    # Arithmetic
    PLUS        = auto()   # +
    MINUS       = auto()   # -
    STAR        = auto()   # *
    SLASH       = auto()   # /
    PERCENT     = auto()   # %

    # Grouping
    LPAREN      = auto()   # (
    RPAREN      = auto()   # )


@dataclass(frozen=True)
class Token:
    """A single token from a glot line.

    `col` is the 1-based column where the token starts. It is kept for
    diagnostics only and does not take part in equality.
    """
    type: TokenType
    value: Any = None
    col: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type.name})"
        return f"Token({self.type.name}, {self.value!r})"

    def __str__(self) -> str:
        if self.type in (TokenType.NUMBER, TokenType.IDENTIFIER):
            return f"{self.type.name} {self.value}"
        if self.type == TokenType.STRING:
            return f"STRING {_quote(self.value)}"
        return f"{self.type.name} ({self.value!r})"


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
    "=": TokenType.EQUALS,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

KEYWORDS = {
    "LET": TokenType.KW_LET,
    "PRINT": TokenType.KW_PRINT,
    "END": TokenType.KW_END,
}

WHITESPACE = (" ", "\t", "\r", "\n")

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}
_UNESCAPES = {v: "\\" + k for k, v in _ESCAPES.items()}


def _is_digit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


def _is_upper(ch: str | None) -> bool:
    return ch is not None and "A" <= ch <= "Z"


class Lexer:
    """
    Tokenizes one line of glot source.

    Usage:
        tokens = Lexer("10 LET C = 4 + 2").tokenize()
    """

    def __init__(self, line: str):
        self.line = line
        self.pos = 0

    @property
    def col(self) -> int:
        return self.pos + 1

    def _current(self) -> str | None:
        if self.pos >= len(self.line):
            return None
        return self.line[self.pos]

    def _advance(self) -> str:
        ch = self.line[self.pos]
        self.pos += 1
        return ch

    def _read_run(self, predicate) -> str:
        chars = []
        while predicate(self._current()):
            chars.append(self._advance())
        return "".join(chars)

    def _read_number(self) -> Token:
        """Read a run of digits as an unsigned 64-bit integer."""
        col = self.col
        digits = self._read_run(_is_digit)
        significant = digits.lstrip("0") or "0"
        # Longer runs cannot fit and would trip int()'s digit limit.
        if len(significant) > len(str(MAX_NUMBER)) or int(significant) > MAX_NUMBER:
            raise InvalidNumber(digits)
        value = int(significant)
        return Token(TokenType.NUMBER, value, col)

    def _read_word(self) -> Token:
        """Read a run of uppercase letters as a keyword or a variable."""
        col = self.col
        word = self._read_run(_is_upper)
        if word in KEYWORDS:
            return Token(KEYWORDS[word], word, col)
        if len(word) == 1:
            return Token(TokenType.IDENTIFIER, word, col)
        raise InvalidIdentifier(word)

    def _read_string(self) -> Token:
        """Read a double-quoted string literal."""
        col = self.col
        self._advance()  # consume opening "
        chars = []
        while self._current() is not None:
            ch = self._advance()
            if ch == '"':
                return Token(TokenType.STRING, "".join(chars), col)
            if ch == "\\" and self._current() is not None:
                next_ch = self._advance()
                # unknown escapes are kept verbatim
                chars.append(_ESCAPES.get(next_ch, "\\" + next_ch))
            else:
                chars.append(ch)
        raise UnterminatedString(col)

    def tokenize(self) -> list[Token]:
        """Tokenize the whole line into a list of tokens."""
        return list(self._iter_tokens())

    def _iter_tokens(self) -> Iterator[Token]:
        while self.pos < len(self.line):
            ch = self._current()

            if ch in WHITESPACE:
                self._advance()
                continue

            if ch in SINGLE_CHAR_TOKENS:
                yield Token(SINGLE_CHAR_TOKENS[ch], ch, self.col)
                self._advance()
                continue

            if _is_digit(ch):
                yield self._read_number()
                continue

            if _is_upper(ch):
                yield self._read_word()
                continue

            if ch == '"':
                yield self._read_string()
                continue

            raise InvalidCharacter(ch, self.col)


def tokenize(line: str) -> list[Token]:
    """Tokenize one line of glot source."""
    return Lexer(line).tokenize()


def _quote(text: str) -> str:
    return '"' + "".join(_UNESCAPES.get(ch, ch) for ch in text) + '"'


def format_token(token: Token) -> str:
    """Render a single token back to glot source."""
    if token.type == TokenType.NUMBER:
        return str(token.value)
    if token.type == TokenType.STRING:
        return _quote(token.value)
    if token.type == TokenType.IDENTIFIER:
        return token.value
    for spelling, token_type in KEYWORDS.items():
        if token_type == token.type:
            return spelling
    for spelling, token_type in SINGLE_CHAR_TOKENS.items():
        if token_type == token.type:
            return spelling
    raise ValueError(f"Cannot format token {token!r}")


def format_tokens(tokens: Iterable[Token]) -> str:
    """Reconstruct source text that tokenizes back to the same tokens."""
    return " ".join(format_token(t) for t in tokens)
