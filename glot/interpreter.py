"""
Glot Interpreter
================
Tree-walking evaluation of glot expressions and execution of statements.

`interpret` is pure: it maps an expression tree (plus a read-only view of
the variables) to a signed 64-bit integer. `Interpreter` owns the variable
store and the output channel and runs whole programs line by line.
"""
import logging
from typing import Callable, Iterable, Mapping

from .errors import (
    DivisionByZero, GlotError, IntegerOverflow, InvalidUnaryOperator,
    LineError, UndefinedVariable,
)
from .parser import (
    BinaryNode, BinaryOperator, EndNode, ExpressionNode, LetNode, NumberNode,
    PrintExprNode, PrintStringNode, StatementNode, UnaryNode, VariableNode,
)

logger = logging.getLogger(__name__)

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


def _checked(value: int) -> int:
    if value < INT_MIN or value > INT_MAX:
        raise IntegerOverflow(value)
    return value


def _divide(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return quotient


def apply_unary(op: BinaryOperator, value: int) -> int:
    match op:
        case BinaryOperator.ADD:
            return value
        case BinaryOperator.SUBTRACT:
            return _checked(-value)
        case _:
            raise InvalidUnaryOperator(op)


def apply_binary(op: BinaryOperator, left: int, right: int) -> int:
    """Combine two operands. Remainders take the sign of the dividend."""
    match op:
        case BinaryOperator.ADD:
            result = left + right
        case BinaryOperator.SUBTRACT:
            result = left - right
        case BinaryOperator.MULTIPLY:
            result = left * right
        case BinaryOperator.DIVIDE:
            if right == 0:
                raise DivisionByZero(op)
            result = _divide(left, right)
        case BinaryOperator.MODULO:
            if right == 0:
                raise DivisionByZero(op)
            result = left - right * _divide(left, right)
    return _checked(result)


def interpret(node: ExpressionNode, variables: Mapping[str, int] | None = None) -> int:
    """Evaluate an expression tree to an integer."""
    match node:
        case NumberNode(value=value):
            return _checked(value)
        case VariableNode(name=name):
            if variables is None or name not in variables:
                raise UndefinedVariable(name)
            return _checked(variables[name])
        case UnaryNode(op=op, operand=operand):
            return apply_unary(op, interpret(operand, variables))
        case BinaryNode(left=left, op=op, right=right):
            lhs = interpret(left, variables)
            rhs = interpret(right, variables)
            return apply_binary(op, lhs, rhs)
    raise TypeError(f"Not an expression node: {node!r}")


class Interpreter:
    """
    Executes glot statements against a variable store.

    Usage:
        interp = Interpreter()
        interp.run(program)
    """

    def __init__(self, output_fn: Callable[[str], None] | None = None):
        self.variables: dict[str, int] = {}
        self.output_log: list[str] = []
        self.output_fn = output_fn or (lambda s: print(s))

    def _emit(self, text: str):
        self.output_log.append(text)
        self.output_fn(text)

    def execute(self, statement: StatementNode) -> bool:
        """Execute one statement. Returns False when the program must stop."""
        match statement:
            case LetNode(variable=variable, expression=expression):
                self.variables[variable] = interpret(expression, self.variables)
            case PrintStringNode(value=value):
                self._emit(value)
            case PrintExprNode(expression=expression):
                self._emit(str(interpret(expression, self.variables)))
            case EndNode():
                return False
            case _:
                raise TypeError(f"Not a statement node: {statement!r}")
        return True

    def run(self, program: Iterable) -> int:
        """Run program lines in order until END or the last line.

        `program` yields ProgramLine entries (a Program does). Returns the
        number of statements executed.
        """
        executed = 0
        for line in program:
            logger.debug("exec [%s] %s", line.number, line.source)
            executed += 1
            try:
                keep_going = self.execute(line.statement)
            except GlotError as e:
                raise LineError(e, line_number=line.number, text=line.source) from e
            if not keep_going:
                logger.debug("END reached at line %s", line.number)
                break
        logger.info("executed %d statement(s)", executed)
        return executed

    def reset(self):
        self.variables.clear()
        self.output_log.clear()

    def format_variables(self) -> list[str]:
        return [f"{name} = {value}" for name, value in sorted(self.variables.items())]
