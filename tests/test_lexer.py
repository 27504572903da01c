"""
Test suite for the jj lexer.

Tests cover:
- Token types and values for names, keywords, numbers, strings and symbols
- Comments and whitespace
- Source locations and diagnostic formatting
- Lexical errors

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from jjc.lexer import Lexer, TokenType, TranspileError, LexerError, tokenize_string
from jjc.lexer.errors import ERROR_CODES


class TestLexer(unittest.TestCase):
    """Test cases for tokenization."""

    def _types(self, code: str):
        return [token.type for token in tokenize_string(code)]

    def test_mixed_tokens(self):
        """Names, a keyword, numbers, a string and a symbol."""
        tokens = tokenize_string("aa Bb class 1 2.4 'hi' ++")

        self.assertEqual([t.type for t in tokens], [
            TokenType.NAME, TokenType.NAME, TokenType.CLASS,
            TokenType.NUMBER, TokenType.NUMBER, TokenType.STRING,
            TokenType.PLUS_PLUS, TokenType.EOF,
        ])
        self.assertEqual([t.value for t in tokens],
                         ["aa", "Bb", None, "1", "2.4", "hi", None, None])

    def test_single_trailing_eof(self):
        tokens = tokenize_string("x")
        self.assertEqual(len(tokens), 2)
        self.assertEqual(tokens[-1].type, TokenType.EOF)
        self.assertEqual(self._types(""), [TokenType.EOF])
        self.assertEqual(self._types("  \n\t "), [TokenType.EOF])

    def test_peek_and_advance(self):
        """peek() doesn't consume; EOF is returned forever once reached."""
        lexer = Lexer("a b")

        self.assertEqual(lexer.peek().value, "a")
        self.assertEqual(lexer.peek().value, "a")
        self.assertEqual(lexer.advance().value, "a")
        self.assertEqual(lexer.advance().value, "b")
        self.assertEqual(lexer.advance().type, TokenType.EOF)
        self.assertEqual(lexer.advance().type, TokenType.EOF)
        self.assertEqual(lexer.peek().type, TokenType.EOF)

    def test_keywords(self):
        code = "package import class extends def async await is not or and new true false null"
        types = self._types(code)[:-1]
        self.assertEqual([t.value for t in types], code.split())

    def test_keyword_prefix_is_a_name(self):
        tokens = tokenize_string("classy defs")
        self.assertEqual(tokens[0].type, TokenType.NAME)
        self.assertEqual(tokens[0].value, "classy")
        self.assertEqual(tokens[1].value, "defs")

    def test_numbers(self):
        tokens = tokenize_string("0 42 3.14 1. .5")
        self.assertEqual([t.value for t in tokens[:-1]], ["0", "42", "3.14", "1.", ".5"])
        self.assertTrue(all(t.type == TokenType.NUMBER for t in tokens[:-1]))

    def test_dot_between_names(self):
        self.assertEqual(self._types("x.y"), [
            TokenType.NAME, TokenType.DOT, TokenType.NAME, TokenType.EOF])

    def test_longest_symbol_wins(self):
        self.assertEqual(self._types("== = => #<= #< < <= += ++ +"), [
            TokenType.EQUAL, TokenType.ASSIGN, TokenType.FAT_ARROW,
            TokenType.NATIVE_LESS_EQUAL, TokenType.NATIVE_LESS_THAN,
            TokenType.LESS_THAN, TokenType.LESS_EQUAL,
            TokenType.PLUS_ASSIGN, TokenType.PLUS_PLUS, TokenType.PLUS,
            TokenType.EOF,
        ])

    def test_hash_alone(self):
        self.assertEqual(self._types("#foo #["), [
            TokenType.HASH, TokenType.NAME, TokenType.HASH,
            TokenType.LEFT_BRACKET, TokenType.EOF])

    def test_string_forms(self):
        """Both quotes, tripled quotes, raw strings and escapes."""
        tokens = tokenize_string(r"""'a' "b" '''c'd''' r"\d" "x\ty\n\\" 'it\'s'""")
        self.assertEqual([t.value for t in tokens[:-1]],
                         ["a", "b", "c'd", "\\d", "x\ty\n\\", "it's"])

    def test_comments_are_skipped(self):
        tokens = tokenize_string("a // line comment\nb /* block\ncomment */ c")
        self.assertEqual([t.value for t in tokens[:-1]], ["a", "b", "c"])

    def test_source_location(self):
        tokens = tokenize_string("a\n\n  bc", "m.jj")
        token = tokens[1]

        self.assertEqual(token.location.uri, "m.jj")
        self.assertEqual(token.line, 3)
        self.assertEqual(token.location.column, 3)
        self.assertEqual(token.location.line_text, "  bc")

    def test_lexer_tokens_have_no_context(self):
        token = tokenize_string("x")[0]
        self.assertIsNone(token.context_name)
        with self.assertRaises(TranspileError):
            token.function_name
        self.assertEqual(token.with_context(".f").function_name, ".f")

    def test_tag_message(self):
        token = tokenize_string("\nx", "m.jj")[0]
        self.assertEqual(token.tag_message(".main"), ".main@m.jj@2")

    def test_keyword_and_symbol_flags(self):
        keyword, symbol, name = tokenize_string("class += x")[:3]

        self.assertTrue(keyword.is_keyword)
        self.assertFalse(keyword.is_symbol)
        self.assertTrue(symbol.is_symbol)
        self.assertFalse(name.is_keyword or name.is_symbol)


class TestLexerErrors(unittest.TestCase):
    """Test cases for lexical errors."""

    def _error(self, code: str, filename: str = "t.jj") -> LexerError:
        with self.assertRaises(LexerError) as cm:
            tokenize_string(code, filename)
        self.assertIn(cm.exception.code, ERROR_CODES)
        return cm.exception

    def test_unrecognized_token(self):
        error = self._error("x = @;")
        self.assertEqual(error.code, "L003")
        self.assertEqual(str(error),
                         "Unrecognized token\nin t.jj, line 1\nx = @;\n    *")

    def test_non_ascii_is_unrecognized(self):
        self.assertEqual(self._error("café").code, "L003")

    def test_unterminated_comment(self):
        error = self._error("a\n/* never closed")
        self.assertEqual(error.code, "L001")
        self.assertEqual(error.token.line, 2)

    def test_unknown_escape(self):
        error = self._error(r"'\q'")
        self.assertEqual(error.code, "L002")
        self.assertIn("\\q", error.message)

    def test_unterminated_string(self):
        error = self._error("x = 'abc")
        self.assertEqual(error.code, "L004")
        self.assertEqual(error.token.location.column, 5)

    def test_errors_are_transpile_errors(self):
        self.assertIsInstance(self._error("@"), TranspileError)

    def test_error_without_token(self):
        error = TranspileError("Something broke", code="A002")
        self.assertEqual(str(error), "Something broke")
        self.assertIsNone(error.token)
        self.assertEqual(ERROR_CODES[error.code], "DuplicateUri")


if __name__ == '__main__':
    unittest.main()
