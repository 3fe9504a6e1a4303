"""
Glot Test Suite: Parser
=======================
Tests for expression and statement parsing.

Usage:
    python -m pytest tests/test_parser.py -v
    python -m unittest tests.test_parser -v
"""
import sys
import os
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from glot.lexer import Token, TokenType, tokenize
from glot.parser import (
    BinaryNode, BinaryOperator, EndNode, LetNode, NumberNode, PrintExprNode,
    PrintStringNode, TokenCursor, UnaryNode, VariableNode,
    expression_items, format_expression, format_statement,
    parse_expression, parse_statement,
)
from glot.errors import (
    EndOfInput, InvalidOperatorToken, InvalidValueToken, UnexpectedToken,
)

A, B = VariableNode("A"), VariableNode("B")
ADD, SUB = BinaryOperator.ADD, BinaryOperator.SUBTRACT
MUL, DIV, MOD = BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE, BinaryOperator.MODULO


def expr(source: str):
    return parse_expression(tokenize(source))


def stmt(source: str):
    return parse_statement(tokenize(source))


# ─────────────────────────────────────────────
#  Token Cursor
# ─────────────────────────────────────────────

class TestTokenCursor(unittest.TestCase):

    def test_peek_does_not_consume(self):
        cursor = TokenCursor(tokenize("A B"))
        self.assertEqual(cursor.peek(), Token(TokenType.IDENTIFIER, "A"))
        self.assertEqual(cursor.peek(), Token(TokenType.IDENTIFIER, "A"))
        self.assertEqual(cursor.advance(), Token(TokenType.IDENTIFIER, "A"))
        self.assertEqual(cursor.advance(), Token(TokenType.IDENTIFIER, "B"))
        self.assertTrue(cursor.exhausted)

    def test_advance_past_end(self):
        cursor = TokenCursor([])
        self.assertIsNone(cursor.peek())
        with self.assertRaises(EndOfInput):
            cursor.advance()

    def test_expect(self):
        cursor = TokenCursor(tokenize("= 5"))
        cursor.expect(TokenType.EQUALS)
        with self.assertRaises(UnexpectedToken) as ctx:
            cursor.expect(TokenType.IDENTIFIER)
        self.assertEqual(ctx.exception.token, Token(TokenType.NUMBER, 5))

    def test_works_over_a_generator(self):
        cursor = TokenCursor(t for t in tokenize("1 + 2"))
        self.assertEqual(parse_expression(cursor), BinaryNode(NumberNode(1), ADD, NumberNode(2)))
        self.assertTrue(cursor.exhausted)


# ─────────────────────────────────────────────
#  Expressions
# ─────────────────────────────────────────────

class TestExpressionParser(unittest.TestCase):

    def test_single_variable(self):
        self.assertEqual(expr("A"), A)
        self.assertEqual(list(expression_items(expr("A"))), [A])

    def test_single_number(self):
        self.assertEqual(expr("10"), NumberNode(10))

    def test_flat_items_keep_source_order(self):
        items = list(expression_items(expr("A + 10 * B")))
        self.assertEqual(items, [A, ADD, NumberNode(10), MUL, B])

    def test_multiplication_binds_tighter(self):
        self.assertEqual(expr("A + 10 * B"), BinaryNode(A, ADD, BinaryNode(NumberNode(10), MUL, B)))

    def test_left_associative(self):
        self.assertEqual(
            expr("8 - 3 - 1"),
            BinaryNode(BinaryNode(NumberNode(8), SUB, NumberNode(3)), SUB, NumberNode(1)),
        )
        self.assertEqual(
            expr("8 / 4 % 3"),
            BinaryNode(BinaryNode(NumberNode(8), DIV, NumberNode(4)), MOD, NumberNode(3)),
        )

    def test_parentheses_override_precedence(self):
        self.assertEqual(expr("(A + 10) * B"), BinaryNode(BinaryNode(A, ADD, NumberNode(10)), MUL, B))

    def test_parentheses_add_no_node(self):
        self.assertEqual(expr("((A))"), A)

    def test_unary_minus(self):
        self.assertEqual(expr("-A"), UnaryNode(SUB, A))
        self.assertEqual(expr("2 * -3"), BinaryNode(NumberNode(2), MUL, UnaryNode(SUB, NumberNode(3))))
        self.assertEqual(expr("+-A"), UnaryNode(ADD, UnaryNode(SUB, A)))

    def test_unary_before_group(self):
        self.assertEqual(expr("-(A + B)"), UnaryNode(SUB, BinaryNode(A, ADD, B)))

    def test_grouped_example(self):
        tree = expr("(2*9)-1+(1+8)")
        self.assertEqual(tree, BinaryNode(
            BinaryNode(BinaryNode(NumberNode(2), MUL, NumberNode(9)), SUB, NumberNode(1)),
            ADD,
            BinaryNode(NumberNode(1), ADD, NumberNode(8)),
        ))

    def test_assignment_is_not_an_operator(self):
        with self.assertRaises(InvalidOperatorToken) as ctx:
            expr("A = 5")
        self.assertEqual(ctx.exception.token, Token(TokenType.EQUALS, "="))

    def test_two_terms_in_a_row(self):
        with self.assertRaises(InvalidOperatorToken) as ctx:
            expr("A B")
        self.assertEqual(ctx.exception.token, Token(TokenType.IDENTIFIER, "B"))

    def test_keyword_as_term(self):
        with self.assertRaises(InvalidValueToken) as ctx:
            expr("LET")
        self.assertEqual(ctx.exception.token, Token(TokenType.KW_LET, "LET"))

    def test_statement_is_not_an_expression(self):
        with self.assertRaises(InvalidValueToken) as ctx:
            expr("LET A = 5")
        self.assertEqual(ctx.exception.token, Token(TokenType.KW_LET, "LET"))

    def test_print_keyword_as_term(self):
        with self.assertRaises(InvalidValueToken) as ctx:
            expr("PRINT")
        self.assertEqual(ctx.exception.token, Token(TokenType.KW_PRINT, "PRINT"))

    def test_empty_expression(self):
        with self.assertRaises(EndOfInput):
            expr("")

    def test_dangling_operator(self):
        with self.assertRaises(EndOfInput):
            expr("A +")

    def test_missing_close_paren(self):
        with self.assertRaises(EndOfInput):
            expr("(A + 1")

    def test_stray_close_paren(self):
        with self.assertRaises(InvalidOperatorToken) as ctx:
            expr("A + 1)")
        self.assertEqual(ctx.exception.token.type, TokenType.RPAREN)

    def test_empty_parens(self):
        with self.assertRaises(InvalidValueToken) as ctx:
            expr("()")
        self.assertEqual(ctx.exception.token.type, TokenType.RPAREN)

    def test_string_is_not_a_term(self):
        with self.assertRaises(InvalidValueToken):
            expr('"A"')


# ─────────────────────────────────────────────
#  Statements
# ─────────────────────────────────────────────

class TestStatementParser(unittest.TestCase):

    def test_let(self):
        self.assertEqual(stmt("LET A = 5"), LetNode("A", NumberNode(5)))

    def test_let_expression(self):
        self.assertEqual(stmt("LET C = 4 + 2"), LetNode("C", BinaryNode(NumberNode(4), ADD, NumberNode(2))))

    def test_let_missing_variable(self):
        with self.assertRaises(UnexpectedToken) as ctx:
            stmt("LET 5 = 5")
        self.assertEqual(ctx.exception.token, Token(TokenType.NUMBER, 5))

    def test_let_missing_equals(self):
        with self.assertRaises(UnexpectedToken) as ctx:
            stmt("LET A 5")
        self.assertEqual(ctx.exception.token, Token(TokenType.NUMBER, 5))

    def test_let_truncated(self):
        for source in ["LET", "LET A", "LET A ="]:
            with self.assertRaises(EndOfInput):
                stmt(source)

    def test_print_string(self):
        self.assertEqual(stmt('PRINT "HELLO"'), PrintStringNode("HELLO"))

    def test_print_string_trailing_token(self):
        with self.assertRaises(UnexpectedToken) as ctx:
            stmt('PRINT "HELLO" A')
        self.assertEqual(ctx.exception.token, Token(TokenType.IDENTIFIER, "A"))

    def test_print_expression(self):
        self.assertEqual(stmt("PRINT A * 2"), PrintExprNode(BinaryNode(A, MUL, NumberNode(2))))

    def test_print_number(self):
        self.assertEqual(stmt("PRINT 42"), PrintExprNode(NumberNode(42)))

    def test_print_signed_and_grouped(self):
        self.assertEqual(stmt("PRINT -A"), PrintExprNode(UnaryNode(SUB, A)))
        self.assertEqual(stmt("PRINT (A)"), PrintExprNode(A))

    def test_print_nothing(self):
        with self.assertRaises(EndOfInput):
            stmt("PRINT")

    def test_print_keyword(self):
        with self.assertRaises(UnexpectedToken) as ctx:
            stmt("PRINT END")
        self.assertEqual(ctx.exception.token, Token(TokenType.KW_END, "END"))

    def test_end(self):
        self.assertEqual(stmt("END"), EndNode())

    def test_end_with_trailing_token(self):
        with self.assertRaises(UnexpectedToken):
            stmt("END 5")

    def test_unknown_statement(self):
        with self.assertRaises(UnexpectedToken) as ctx:
            stmt("A = 5")
        self.assertEqual(ctx.exception.token, Token(TokenType.IDENTIFIER, "A"))

    def test_empty_statement(self):
        with self.assertRaises(EndOfInput):
            stmt("")

    def test_statements_are_immutable(self):
        node = stmt("LET A = 5")
        with self.assertRaises(Exception):
            node.variable = "B"


# ─────────────────────────────────────────────
#  Formatting
# ─────────────────────────────────────────────

class TestFormatting(unittest.TestCase):

    def test_format_expression_reparses_to_same_tree(self):
        sources = [
            "A + 10 * B", "(A + 10) * B", "8 - (3 - 1)", "8 - 3 - 1",
            "-(A + B) * 2", "2 * -3", "(2*9)-1+(1+8)", "A / (B % 3)",
        ]
        for source in sources:
            tree = expr(source)
            self.assertEqual(expr(format_expression(tree)), tree, source)

    def test_format_expression_minimal_parens(self):
        self.assertEqual(format_expression(expr("((A)) + (10 * B)")), "A + 10 * B")
        self.assertEqual(format_expression(expr("(A + 10) * B")), "(A + 10) * B")

    def test_format_statement(self):
        self.assertEqual(format_statement(stmt("LET A=4+2")), "LET A = 4 + 2")
        self.assertEqual(format_statement(stmt('PRINT "HI \\"YOU\\""')), 'PRINT "HI \\"YOU\\""')
        self.assertEqual(format_statement(stmt("END")), "END")


if __name__ == "__main__":
    unittest.main(verbosity=2)
