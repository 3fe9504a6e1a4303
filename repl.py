"""
Glot REPL
=========
Interactive Read-Eval-Print Loop for glot.

Numbered input is stored into the current program (a bare number deletes
that line). Anything else runs immediately:

    > 10 LET A = 6
    > 20 PRINT A * 7
    > RUN
    42
    > PRINT (2*9)-1+(1+8)
    26
"""
import os
import sys
from typing import Callable

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from glot import __version__
from glot.errors import GlotError
from glot.interpreter import Interpreter
from glot.lexer import TokenType, tokenize
from glot.log import configure
from glot.parser import parse_statement
from glot.program import Program, ProgramLine, parse_line


BANNER = f"""
  GLOT {__version__}
  Type HELP for a reference, EXIT or Ctrl+D to quit.
"""

HELP_TEXT = """
  Statements:
    LET A = <expression>     assign a single-letter variable
    PRINT "text"             print a string
    PRINT <expression>       print a value
    END                      stop the program

  Expressions:  + - * / %   ( )   unary + -   integers   A..Z

  Program lines:
    10 PRINT "HI"            store line 10
    10                       delete line 10

  Commands: RUN, LIST, NEW, VARS, HELP, EXIT
"""


class ReplSession:
    """State of one interactive session: the stored program and its variables."""

    def __init__(self, output_fn: Callable[[str], None] | None = None):
        self.output_fn = output_fn or (lambda s: print(s))
        self.program = Program()
        self.interp = Interpreter(output_fn=self.output_fn)

    def _command(self, word: str) -> bool | None:
        """Handle a REPL command. Returns None if `word` is not one."""
        match word:
            case "EXIT" | "QUIT":
                return False
            case "HELP":
                self.output_fn(HELP_TEXT)
            case "LIST":
                for text in self.program.listing():
                    self.output_fn(text)
            case "NEW":
                self.program.clear()
                self.interp.reset()
            case "VARS":
                for text in self.interp.format_variables() or ["(no variables)"]:
                    self.output_fn(text)
            case "RUN":
                self.interp.reset()
                self.interp.run(self.program)
            case _:
                return None
        return True

    def handle(self, line: str) -> bool:
        """Process one line of input. Returns False when the session should end."""
        line = line.strip()
        if not line:
            return True

        handled = self._command(line.upper())
        if handled is not None:
            return handled

        tokens = tokenize(line)
        if tokens[0].type == TokenType.NUMBER:
            entry = parse_line(line)
            if isinstance(entry, ProgramLine):
                self.program.add(entry)
            else:
                self.program.remove(entry)
            return True

        self.interp.execute(parse_statement(tokens))
        return True


def run_repl():
    """Run the interactive glot REPL."""
    configure()
    print(BANNER)
    session = ReplSession()

    while True:
        try:
            line = input("  > ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        try:
            if not session.handle(line):
                break
        except GlotError as e:
            print(f"  ⚠ {e.kind}: {e}")


if __name__ == "__main__":
    run_repl()
