"""
Glot Program Assembler
======================
Turns numbered source lines into a Program: an ordered mapping of line
numbers to parsed statements.

    10 LET A = 4 + 2
    20 PRINT A * 7
    30 END

Entering a number that already exists replaces that line; a bare line
number deletes it. Each line is parsed independently, so one malformed line
never affects the others.
"""
import logging
import os
from dataclasses import dataclass
from typing import Iterable, Iterator

from .errors import GlotError, InvalidSourceFile, LineError, UnexpectedToken
from .lexer import TokenType, tokenize
from .parser import StatementNode, TokenCursor, format_statement, parse_statement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgramLine:
    """One numbered statement."""
    number: int
    statement: StatementNode
    source: str = ""

    def __str__(self) -> str:
        return f"{self.number} {format_statement(self.statement)}"


class Program:
    """Numbered statements kept in ascending line order."""

    def __init__(self, lines: Iterable[ProgramLine] = ()):
        self._lines: dict[int, ProgramLine] = {}
        self.errors: list[LineError] = []
        for line in lines:
            self.add(line)

    def add(self, line: ProgramLine):
        if line.number in self._lines:
            logger.debug("replacing line %d", line.number)
        self._lines[line.number] = line

    def remove(self, number: int) -> bool:
        """Delete a line. Returns False if there was no such line."""
        return self._lines.pop(number, None) is not None

    def get(self, number: int) -> ProgramLine | None:
        return self._lines.get(number)

    def clear(self):
        self._lines.clear()
        self.errors.clear()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[ProgramLine]:
        for number in sorted(self._lines):
            yield self._lines[number]

    def __contains__(self, number: int) -> bool:
        return number in self._lines

    def listing(self) -> list[str]:
        return [str(line) for line in self]


def parse_line(text: str) -> ProgramLine | int | None:
    """
    Parse one numbered source line.

    Returns:
        None for a blank line, the line number alone for a deletion request,
        otherwise a ProgramLine.
    """
    tokens = tokenize(text)
    if not tokens:
        return None

    cursor = TokenCursor(tokens)
    first = cursor.advance()
    if first.type != TokenType.NUMBER:
        raise UnexpectedToken(first)
    if cursor.exhausted:
        return first.value

    statement = parse_statement(cursor)
    return ProgramLine(first.value, statement, text.strip())


def _apply_line(program: Program, index: int, text: str):
    try:
        entry = parse_line(text)
    except GlotError as e:
        raise LineError(e, line_index=index, text=text.strip()) from e
    if entry is None:
        return
    if isinstance(entry, ProgramLine):
        program.add(entry)
    elif not program.remove(entry):
        logger.debug("line %d: no line %d to delete", index, entry)


def parse_program(lines: Iterable[str], continue_on_error: bool = False) -> Program:
    """
    Assemble a Program from source lines.

    Args:
        lines: Source lines, with or without trailing newlines
        continue_on_error: If True, skip malformed lines and collect their
            LineErrors on Program.errors instead of raising the first one

    Returns:
        The assembled Program
    """
    program = Program()
    for index, text in enumerate(lines, start=1):
        try:
            _apply_line(program, index, text)
        except LineError as e:
            if not continue_on_error:
                raise
            logger.warning("skipping %s", e)
            program.errors.append(e)
    logger.info("assembled %d line(s), %d error(s)", len(program), len(program.errors))
    return program


def load_program(path: str, continue_on_error: bool = False,
                 encoding: str = "utf-8") -> Program:
    """Read a glot source file one line at a time and assemble it."""
    if not os.path.isfile(path):
        raise InvalidSourceFile(path, "file not found")
    logger.debug("loading %s", path)
    try:
        with open(path, "r", encoding=encoding) as f:
            return parse_program(f, continue_on_error=continue_on_error)
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidSourceFile(path, str(e)) from e
