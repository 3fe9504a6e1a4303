"""
Glot File Runner
================
Execute .glot source files from the command line.

Usage:
    python run.py <filename.glot>
    python run.py <filename.glot> --tokens
    python run.py <filename.glot> --ast
    python run.py <filename.glot> --keep-going -v
"""
import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from glot.config import GlotConfig
from glot.errors import GlotError, InvalidSourceFile, LineError
from glot.interpreter import Interpreter
from glot.lexer import tokenize
from glot.log import configure, get_logger
from glot.program import load_program

logger = get_logger("run")


def _report(e: GlotError, stream=None):
    print(f"⚠ {e.kind}: {e}", file=stream or sys.stdout)


def dump_tokens(filepath: str, encoding: str = "utf-8") -> int:
    """Print the token stream of every line. Returns the number of bad lines."""
    if not os.path.isfile(filepath):
        raise InvalidSourceFile(filepath, "file not found")
    failures = 0
    try:
        with open(filepath, "r", encoding=encoding) as f:
            for index, text in enumerate(f, start=1):
                try:
                    tokens = tokenize(text)
                except GlotError as e:
                    _report(LineError(e, line_index=index, text=text.strip()))
                    failures += 1
                    continue
                if tokens:
                    print(f"{index:>4}  " + " ".join(repr(t) for t in tokens))
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidSourceFile(filepath, str(e)) from e
    return failures


def run_file(filepath: str, config: GlotConfig | None = None,
             tokens: bool = False, ast: bool = False) -> int:
    """
    Execute a .glot source file.

    Args:
        filepath: Path to the .glot file
        config: Runner settings (defaults from the environment)
        tokens: If True, print each line's tokens instead of running
        ast: If True, print the assembled program instead of running

    Returns:
        0 on success, 1 on error
    """
    config = config or GlotConfig.from_env()

    try:
        if tokens:
            return 1 if dump_tokens(filepath, config.encoding) else 0

        program = load_program(
            filepath,
            continue_on_error=config.continue_on_error,
            encoding=config.encoding,
        )
        for error in program.errors:
            _report(error, sys.stderr)

        if ast:
            for line in program:
                print(f"{line.number:>4}  {line.statement!r}")
            return 1 if program.errors else 0

        interp = Interpreter()
        interp.run(program)
        return 1 if program.errors else 0

    except GlotError as e:
        _report(e)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glot-run",
        description="Run a numbered glot program.",
    )
    parser.add_argument("file", help="Path to a .glot source file")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--tokens", action="store_true", help="Print tokens for each line")
    mode.add_argument("--ast", action="store_true", help="Print the parsed program")
    parser.add_argument("--keep-going", action="store_true",
                        help="Skip malformed lines instead of stopping")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None):
    args = build_parser().parse_args(argv)

    config = GlotConfig.from_env()
    if args.keep_going:
        config.continue_on_error = True
    if args.verbose:
        config.log_level = "DEBUG"
    configure(config.log_level)
    logger.debug("config: %s", config)

    exit_code = run_file(args.file, config, tokens=args.tokens, ast=args.ast)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
