"""
Test suite for MiniJava expression parsing.

Tests cover:
- Binary operator precedence and left associativity
- The prefix '!' operator
- Postfix indexing, .length and (nested) method calls
- Primary expressions
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from minijava.parser import (
    parse_string, Precedence,
    And, LessThan, Plus, Minus, Times, Not,
    ArrayLookup, ArrayLength, Call, IntegerLiteral, TrueLiteral, FalseLiteral,
    IdentifierExp, This, NewArray, NewObject, Identifier,
)

MAIN = "class Main { public static void main(String[] a) { System.out.println(%s); } }"


def ident(name: str) -> IdentifierExp:
    return IdentifierExp(name)


def lit(value: int) -> IntegerLiteral:
    return IntegerLiteral(value)


class ExpressionTestCase(unittest.TestCase):

    def parse_exp(self, source: str):
        """Parse source as the argument of a print statement."""
        program, parser = parse_string(MAIN % source)
        self.assertEqual(parser.error_count, 0, [str(e) for e in parser.errors])
        return program.main_class.statement.exp


class TestPrecedence(ExpressionTestCase):
    """Test precedence climbing over the binary operators."""

    def test_levels_are_ordered(self):
        self.assertLess(Precedence.NONE, Precedence.AND)
        self.assertLess(Precedence.AND, Precedence.LESS_THAN)
        self.assertLess(Precedence.LESS_THAN, Precedence.TERM)
        self.assertLess(Precedence.TERM, Precedence.FACTOR)

    def test_times_binds_tighter_than_plus(self):
        self.assertEqual(self.parse_exp("1 + 2 * 3"), Plus(lit(1), Times(lit(2), lit(3))))
        self.assertEqual(self.parse_exp("1 * 2 + 3"), Plus(Times(lit(1), lit(2)), lit(3)))

    def test_minus_is_left_associative(self):
        self.assertEqual(self.parse_exp("1 - 2 - 3"), Minus(Minus(lit(1), lit(2)), lit(3)))

    def test_mixed_term_operators_are_left_associative(self):
        self.assertEqual(self.parse_exp("1 - 2 + 3"), Plus(Minus(lit(1), lit(2)), lit(3)))

    def test_and_is_left_associative(self):
        self.assertEqual(self.parse_exp("a && b && c"),
                         And(And(ident("a"), ident("b")), ident("c")))

    def test_less_than_binds_tighter_than_and(self):
        self.assertEqual(self.parse_exp("a < b && c < d"),
                         And(LessThan(ident("a"), ident("b")), LessThan(ident("c"), ident("d"))))

    def test_sum_on_right_of_less_than(self):
        self.assertEqual(self.parse_exp("a < b * c + d"),
                         LessThan(ident("a"), Plus(Times(ident("b"), ident("c")), ident("d"))))

    def test_products_on_both_sides_of_plus(self):
        self.assertEqual(self.parse_exp("a * b + c * d < e"),
                         LessThan(Plus(Times(ident("a"), ident("b")), Times(ident("c"), ident("d"))),
                                  ident("e")))

    def test_parentheses_override_precedence(self):
        self.assertEqual(self.parse_exp("(1 + 2) * 3"), Times(Plus(lit(1), lit(2)), lit(3)))
        self.assertEqual(self.parse_exp("1 - (2 - 3)"), Minus(lit(1), Minus(lit(2), lit(3))))

    def test_binop_sample_expression(self):
        """args[1-1+2] < 5 && 4 + 5 * 3 < args.length"""
        expected = And(
            LessThan(ArrayLookup(ident("args"), Plus(Minus(lit(1), lit(1)), lit(2))), lit(5)),
            LessThan(Plus(lit(4), Times(lit(5), lit(3))), ArrayLength(ident("args"))),
        )
        self.assertEqual(self.parse_exp("args[(1-1+2)] < 5 && 4 + 5 * 3 < args.length"), expected)
        self.assertEqual(self.parse_exp("args[1-1+2] < 5 && 4 + 5 * 3 < args.length"), expected)


class TestNot(ExpressionTestCase):
    """Test the prefix '!' operator."""

    def test_not_binds_tighter_than_and(self):
        self.assertEqual(self.parse_exp("!a && b"), And(Not(ident("a")), ident("b")))

    def test_not_binds_tighter_than_less_than(self):
        self.assertEqual(self.parse_exp("!a < b"), LessThan(Not(ident("a")), ident("b")))

    def test_double_negation(self):
        self.assertEqual(self.parse_exp("!!a"), Not(Not(ident("a"))))

    def test_not_of_parenthesized_expression(self):
        self.assertEqual(self.parse_exp("!(a && b)"), Not(And(ident("a"), ident("b"))))

    def test_not_applies_to_whole_call_chain(self):
        self.assertEqual(self.parse_exp("!this.f()"),
                         Not(Call(This(), Identifier("f"), ())))


class TestPostfix(ExpressionTestCase):
    """Test indexing, .length and method calls."""

    def test_array_lookup(self):
        self.assertEqual(self.parse_exp("a[1]"), ArrayLookup(ident("a"), lit(1)))

    def test_chained_lookups(self):
        self.assertEqual(self.parse_exp("a[1][2]"),
                         ArrayLookup(ArrayLookup(ident("a"), lit(1)), lit(2)))

    def test_array_length(self):
        self.assertEqual(self.parse_exp("a.length"), ArrayLength(ident("a")))

    def test_length_of_lookup(self):
        self.assertEqual(self.parse_exp("a[0].length"), ArrayLength(ArrayLookup(ident("a"), lit(0))))

    def test_length_binds_tighter_than_plus(self):
        self.assertEqual(self.parse_exp("x + y.length"), Plus(ident("x"), ArrayLength(ident("y"))))

    def test_call_without_arguments(self):
        self.assertEqual(self.parse_exp("this.f()"), Call(This(), Identifier("f"), ()))

    def test_call_with_arguments(self):
        self.assertEqual(self.parse_exp("o.m(1, x + 2, true)"),
                         Call(ident("o"), Identifier("m"),
                              (lit(1), Plus(ident("x"), lit(2)), TrueLiteral())))

    def test_nested_call_as_argument(self):
        self.assertEqual(self.parse_exp("a.m(b.n())"),
                         Call(ident("a"), Identifier("m"),
                              (Call(ident("b"), Identifier("n"), ()),)))

    def test_call_chain(self):
        self.assertEqual(self.parse_exp("a.b().c(1)"),
                         Call(Call(ident("a"), Identifier("b"), ()), Identifier("c"), (lit(1),)))

    def test_call_on_new_object(self):
        self.assertEqual(self.parse_exp("new A().f(1, 2)"),
                         Call(NewObject(Identifier("A")), Identifier("f"), (lit(1), lit(2))))

    def test_call_result_in_arithmetic(self):
        self.assertEqual(self.parse_exp("num * (this.f(num - 1))"),
                         Times(ident("num"),
                               Call(This(), Identifier("f"), (Minus(ident("num"), lit(1)),))))

    def test_lookup_on_parenthesized_expression(self):
        self.assertEqual(self.parse_exp("(a)[i + 1]"),
                         ArrayLookup(ident("a"), Plus(ident("i"), lit(1))))


class TestPrimary(ExpressionTestCase):
    """Test primary expressions."""

    def test_literals(self):
        self.assertEqual(self.parse_exp("42"), lit(42))
        self.assertEqual(self.parse_exp("true"), TrueLiteral())
        self.assertEqual(self.parse_exp("false"), FalseLiteral())

    def test_this_and_identifier(self):
        self.assertEqual(self.parse_exp("this"), This())
        self.assertEqual(self.parse_exp("x"), ident("x"))

    def test_new_array(self):
        self.assertEqual(self.parse_exp("new int[10]"), NewArray(lit(10)))

    def test_new_array_length(self):
        self.assertEqual(self.parse_exp("new int[n].length"), ArrayLength(NewArray(ident("n"))))

    def test_new_object(self):
        self.assertEqual(self.parse_exp("new Fac()"), NewObject(Identifier("Fac")))

    def test_largest_literal(self):
        self.assertEqual(self.parse_exp("2147483647"), lit(2147483647))


if __name__ == '__main__':
    unittest.main()
