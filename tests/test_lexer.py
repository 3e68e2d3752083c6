"""
Test suite for the MiniJava lexer.

Tests cover:
- Token classification (keywords, identifiers, literals, punctuation)
- Line/column tracking across line endings and tabs
- Nested and unterminated block comments
- Invalid input, integer overflow and re-scanning of probed characters
- Lookahead and end-of-input behaviour
"""

import io
import os
import sys
import tempfile
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from minijava.lexer import Lexer, TokenType, tokenize_string, tokenize_file
from minijava.lexer.tokens import Token, MAX_INTEGER_LITERAL


def token_types(source: str, **kwargs):
    return [token.type for token in tokenize_string(source, **kwargs)]


class TestTokenClassification(unittest.TestCase):
    """Test that characters are grouped into the right tokens."""

    def test_keywords(self):
        """Every reserved word maps to its own token type."""
        source = ("class public static void main String extends return "
                  "int boolean if else while true false this new")
        expected = [
            TokenType.CLASS, TokenType.PUBLIC, TokenType.STATIC, TokenType.VOID,
            TokenType.MAIN, TokenType.STRING, TokenType.EXTENDS, TokenType.RETURN,
            TokenType.INT, TokenType.BOOLEAN, TokenType.IF, TokenType.ELSE,
            TokenType.WHILE, TokenType.TRUE, TokenType.FALSE, TokenType.THIS,
            TokenType.NEW, TokenType.EOF,
        ]
        self.assertEqual(token_types(source), expected)

    def test_keywords_are_case_sensitive(self):
        tokens = tokenize_string("string Class length")
        self.assertEqual([t.type for t in tokens[:3]], [TokenType.IDENTIFIER] * 3)
        self.assertEqual([t.value for t in tokens[:3]], ["string", "Class", "length"])

    def test_identifiers(self):
        tokens = tokenize_string("num_aux x1 A_b_2")
        self.assertEqual([t.value for t in tokens[:-1]], ["num_aux", "x1", "A_b_2"])
        for token in tokens[:-1]:
            self.assertTrue(token.is_identifier)

    def test_identifier_cannot_start_with_underscore(self):
        """'_' is not an identifier start; the rest is scanned normally."""
        lexer = Lexer("_a")
        first = lexer.next_token()
        second = lexer.next_token()
        self.assertEqual(first.type, TokenType.INVALID)
        self.assertEqual(first.lexeme, "_")
        self.assertEqual(second.type, TokenType.IDENTIFIER)
        self.assertEqual(second.value, "a")

    def test_integer_literals(self):
        tokens = tokenize_string("0 42 007")
        self.assertEqual([t.value for t in tokens[:-1]], [0, 42, 7])
        self.assertEqual(tokens[2].lexeme, "007")

    def test_punctuation_and_operators(self):
        source = "( ) [ ] { } ; , . = ! < + - * &&"
        expected = [
            TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
            TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
            TokenType.SEMICOLON, TokenType.COMMA, TokenType.DOT,
            TokenType.ASSIGN, TokenType.LOGICAL_NOT, TokenType.LESS_THAN,
            TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY,
            TokenType.LOGICAL_AND, TokenType.EOF,
        ]
        self.assertEqual(token_types(source), expected)

    def test_tokens_without_whitespace(self):
        self.assertEqual(
            token_types("a[i]=b.length&&!c;"),
            [TokenType.IDENTIFIER, TokenType.LEFT_BRACKET, TokenType.IDENTIFIER,
             TokenType.RIGHT_BRACKET, TokenType.ASSIGN, TokenType.IDENTIFIER,
             TokenType.DOT, TokenType.IDENTIFIER, TokenType.LOGICAL_AND,
             TokenType.LOGICAL_NOT, TokenType.IDENTIFIER, TokenType.SEMICOLON,
             TokenType.EOF]
        )

    def test_token_string_form(self):
        tokens = tokenize_string("foo 12 ;")
        self.assertEqual(str(tokens[0]), "IDENTIFIER (1,1): foo")
        self.assertEqual(str(tokens[1]), "INTEGER_LITERAL (1,5): 12")
        self.assertEqual(str(tokens[2]), "SEMICOLON (1,8)")

    def test_token_properties(self):
        token = Token(TokenType.PLUS, "+", 1, 1)
        self.assertTrue(token.is_operator)
        self.assertFalse(token.is_keyword)
        self.assertTrue(Token(TokenType.WHILE, "while", 1, 1).is_keyword)


class TestPositions(unittest.TestCase):
    """Test line and column tracking."""

    def _second_token(self, source: str, **kwargs) -> Token:
        return tokenize_string(source, **kwargs)[1]

    def test_columns_on_one_line(self):
        tokens = tokenize_string("class Foo {")
        self.assertEqual([(t.line, t.column) for t in tokens[:3]], [(1, 1), (1, 7), (1, 11)])

    def test_line_feed(self):
        token = self._second_token("a\nb")
        self.assertEqual((token.line, token.column), (2, 1))

    def test_crlf_counts_as_one_newline(self):
        token = self._second_token("a\r\nb")
        self.assertEqual((token.line, token.column), (2, 1))

    def test_bare_carriage_return(self):
        token = self._second_token("a\rb")
        self.assertEqual((token.line, token.column), (2, 1))

    def test_mixed_line_endings(self):
        tokens = tokenize_string("a\r\n\nb\r\rc")
        self.assertEqual([(t.line, t.column) for t in tokens[:3]], [(1, 1), (3, 1), (5, 1)])

    def test_tab_advances_by_tab_width(self):
        self.assertEqual(self._second_token("a\tb").column, 6)
        self.assertEqual(self._second_token("a\tb", tab_width=8).column, 10)

    def test_invalid_tab_width(self):
        with self.assertRaises(ValueError):
            Lexer("x", tab_width=0)

    def test_line_comment(self):
        token = self._second_token("a // comment ; class\n  b")
        self.assertEqual((token.line, token.column, token.value), (2, 3, "b"))


class TestComments(unittest.TestCase):
    """Test block comment handling."""

    def test_nested_comment_produces_no_tokens(self):
        self.assertEqual(token_types("/* a /* b */ c */"), [TokenType.EOF])

    def test_tokens_around_nested_comment(self):
        tokens = tokenize_string("x /* /* */ */ y")
        self.assertEqual([t.value for t in tokens[:-1]], ["x", "y"])

    def test_single_close_does_not_end_nested_comment(self):
        """Text after the first '*/' is still inside the outer comment."""
        self.assertEqual(token_types("/* /* */ class */"), [TokenType.EOF])

    def test_unterminated_comment_is_a_warning(self):
        lexer = Lexer("x /* never closed")
        tokens = lexer.tokenize()
        self.assertEqual([t.type for t in tokens], [TokenType.IDENTIFIER, TokenType.EOF])
        self.assertFalse(lexer.has_errors())
        self.assertTrue(lexer.has_warnings())
        self.assertEqual(lexer.warnings[0].code, "L011")

    def test_comment_spanning_lines(self):
        tokens = tokenize_string("/* one\r\ntwo\n */ z")
        self.assertEqual((tokens[0].line, tokens[0].column), (3, 5))


class TestInvalidInput(unittest.TestCase):
    """Test that malformed input never raises."""

    def test_invalid_character(self):
        lexer = Lexer("a # b")
        tokens = lexer.tokenize()
        self.assertEqual([t.type for t in tokens],
                         [TokenType.IDENTIFIER, TokenType.INVALID, TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(len(lexer.errors), 1)
        error = lexer.errors[0]
        self.assertEqual((error.code, error.line, error.column), ("L001", 1, 3))

    def test_lone_ampersand_rescans_next_character(self):
        tokens = tokenize_string("&x")
        self.assertEqual(tokens[0].type, TokenType.INVALID)
        self.assertEqual(tokens[0].lexeme, "&")
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertEqual((tokens[1].line, tokens[1].column), (1, 2))

    def test_triple_ampersand(self):
        self.assertEqual(token_types("&&&"),
                         [TokenType.LOGICAL_AND, TokenType.INVALID, TokenType.EOF])

    def test_ampersand_before_newline(self):
        tokens = tokenize_string("&\nb")
        self.assertEqual(tokens[0].type, TokenType.INVALID)
        self.assertEqual((tokens[1].line, tokens[1].column), (2, 1))

    def test_lone_slash(self):
        lexer = Lexer("a / b")
        types = [t.type for t in lexer.tokenize()]
        self.assertEqual(types, [TokenType.IDENTIFIER, TokenType.INVALID,
                                 TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(lexer.errors[0].code, "L001")
        self.assertIn("comment", lexer.errors[0].diagnostic.help_text)

    def test_slash_before_star_token(self):
        self.assertEqual(token_types("/+*"),
                         [TokenType.INVALID, TokenType.PLUS, TokenType.MULTIPLY, TokenType.EOF])

    def test_non_printable_character(self):
        lexer = Lexer("\x00")
        self.assertEqual(lexer.next_token().type, TokenType.INVALID)
        self.assertIn("U+0000", str(lexer.errors[0]))

    def test_largest_integer_literal(self):
        tokens = tokenize_string(str(MAX_INTEGER_LITERAL))
        self.assertEqual(tokens[0].type, TokenType.INTEGER_LITERAL)
        self.assertEqual(tokens[0].value, 2147483647)

    def test_integer_overflow_is_rejected(self):
        lexer = Lexer("2147483648 1")
        first = lexer.next_token()
        second = lexer.next_token()
        self.assertEqual(first.type, TokenType.INVALID)
        self.assertEqual(first.lexeme, "2147483648")
        self.assertEqual(second.value, 1)
        self.assertEqual(lexer.errors[0].code, "L007")

    def test_very_long_integer_is_rejected(self):
        lexer = Lexer("9" * 5000 + " 1")
        first = lexer.next_token()
        self.assertEqual(first.type, TokenType.INVALID)
        self.assertEqual(len(first.lexeme), 5000)
        self.assertEqual(lexer.next_token().value, 1)
        self.assertEqual(lexer.errors[0].code, "L007")
        self.assertLess(len(lexer.errors[0].diagnostic.message), 100)

    def test_leading_zeros_do_not_count_toward_range(self):
        tokens = tokenize_string("0" * 5000 + "7")
        self.assertEqual(tokens[0].type, TokenType.INTEGER_LITERAL)
        self.assertEqual(tokens[0].value, 7)

    def test_diagnostics_report(self):
        lexer = Lexer("@", filename="Bad.java")
        lexer.tokenize()
        report = str(lexer.get_diagnostics()[0])
        self.assertTrue(report.startswith("ERROR[L001]: Invalid character"))
        self.assertIn("--> Bad.java:1:1", report)


class TestLookaheadAndEOF(unittest.TestCase):
    """Test peek(), payload accessors and end-of-input."""

    def test_eof_is_idempotent(self):
        lexer = Lexer("x\n")
        lexer.next_token()
        first = lexer.next_token()
        second = lexer.next_token()
        self.assertEqual(first.type, TokenType.EOF)
        self.assertEqual(first, second)
        self.assertEqual((second.line, second.column), (2, 1))

    def test_empty_source(self):
        tokens = tokenize_string("")
        self.assertEqual(len(tokens), 1)
        self.assertEqual((tokens[0].type, tokens[0].line, tokens[0].column), (TokenType.EOF, 1, 1))

    def test_peek_does_not_consume(self):
        lexer = Lexer("a b c")
        self.assertEqual(lexer.next_token().value, "a")
        peeked = lexer.peek()
        self.assertEqual(lexer.peek(), peeked)
        self.assertEqual(lexer.next_token(), peeked)
        self.assertEqual(lexer.next_token().value, "c")

    def test_peek_keeps_sequence_unchanged(self):
        source = "class A { int[] x; } /* c */ y = 1 && z;"
        plain = tokenize_string(source)

        lexer = Lexer(source)
        peeked = []
        while True:
            lexer.peek()
            token = lexer.next_token()
            peeked.append(token)
            if token.type == TokenType.EOF:
                break
        self.assertEqual(peeked, plain)

    def test_payload_tracks_returned_tokens_only(self):
        lexer = Lexer("a 7 b 9")
        lexer.next_token()
        lexer.next_token()
        self.assertEqual((lexer.id_value, lexer.int_value), ("a", 7))

        lexer.peek()
        self.assertEqual(lexer.id_value, "a")

        lexer.next_token()
        self.assertEqual(lexer.id_value, "b")
        lexer.next_token()
        self.assertEqual(lexer.int_value, 9)

    def test_stream_source(self):
        lexer = Lexer(io.StringIO("int x;"), filename="stream.java")
        types = [t.type for t in lexer]
        self.assertEqual(types, [TokenType.INT, TokenType.IDENTIFIER, TokenType.SEMICOLON, TokenType.EOF])

    def test_tokenize_file_keeps_crlf(self):
        with tempfile.NamedTemporaryFile("w", suffix=".java", delete=False, newline="") as f:
            f.write("a\r\nb")
            path = f.name
        try:
            tokens = tokenize_file(path)
        finally:
            os.unlink(path)
        self.assertEqual((tokens[1].line, tokens[1].column), (2, 1))


if __name__ == '__main__':
    unittest.main()
