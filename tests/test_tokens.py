"""
Tests for Token, TokenStream and TokenReader.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from langscan.lexer.tokens import Token, TokenKind, TokenStream, TokenReader, SourceLocation


def _loc(column: int, offset: int, line: int = 1) -> SourceLocation:
    return SourceLocation("<test>", line, column, offset)


def _stream() -> TokenStream:
    return TokenStream([
        Token(TokenKind.KEYWORD, "let", "let", _loc(1, 0)),
        Token(TokenKind.IDENTIFIER, "x", "x", _loc(5, 4), " "),
        Token(TokenKind.OPERATOR, "=", "=", _loc(7, 6), " "),
        Token(TokenKind.NUMERIC_LITERAL, "1", 1, _loc(9, 8), " "),
        Token(TokenKind.END_OF_INPUT, "", None, _loc(10, 9), "\n"),
    ])


class TestToken(unittest.TestCase):

    def test_position_accessors(self):
        token = Token(TokenKind.STRING_LITERAL, '"a\\n"', "a\n", _loc(3, 10, line=2))
        self.assertEqual((token.line, token.column, token.offset), (2, 3, 10))
        self.assertEqual(token.end_offset, 15)
        self.assertTrue(token.is_literal)
        self.assertFalse(token.is_symbol)

    def test_classification_helpers(self):
        stream = _stream()
        self.assertTrue(stream[0].is_keyword)
        self.assertFalse(stream[1].is_keyword)
        self.assertTrue(stream[2].is_symbol)
        self.assertTrue(stream[3].is_literal)
        self.assertTrue(stream[4].is_end)

    def test_str_shows_decoded_value(self):
        token = Token(TokenKind.NUMERIC_LITERAL, "0x10", 16, _loc(1, 0))
        self.assertEqual(str(token), "NUMERIC_LITERAL('0x10' -> 16)")
        self.assertEqual(str(_stream()[1]), "IDENTIFIER('x')")

    def test_tokens_are_frozen(self):
        token = _stream()[0]
        with self.assertRaises(AttributeError):
            token.lexeme = "var"

    def test_location_str(self):
        self.assertEqual(str(_loc(4, 3, line=7)), "<test>:7:4")


class TestTokenStream(unittest.TestCase):

    def test_length_and_indexing(self):
        stream = _stream()
        self.assertEqual(len(stream), 5)
        self.assertEqual(stream[1].lexeme, "x")
        self.assertEqual(stream[-1].kind, TokenKind.END_OF_INPUT)
        self.assertEqual([t.lexeme for t in stream[1:3]], ["x", "="])
        self.assertIs(stream.end, stream[-1])

    def test_iteration_is_restartable(self):
        stream = _stream()
        first = [token.lexeme for token in stream]
        second = [token.lexeme for token in stream]
        self.assertEqual(first, second)
        self.assertEqual(stream.kinds()[-1], TokenKind.END_OF_INPUT)

    def test_reconstruct(self):
        self.assertEqual(_stream().reconstruct(), "let x = 1\n")

    def test_requires_terminal_end_token(self):
        with self.assertRaises(ValueError):
            TokenStream([])
        with self.assertRaises(ValueError):
            TokenStream([Token(TokenKind.IDENTIFIER, "x", "x", _loc(1, 0))])

    def test_rejects_inner_end_token(self):
        end = Token(TokenKind.END_OF_INPUT, "", None, _loc(1, 0))
        with self.assertRaises(ValueError):
            TokenStream([end, end])

    def test_equality(self):
        self.assertEqual(_stream(), _stream())
        self.assertEqual(hash(_stream()), hash(_stream()))


class TestTokenReader(unittest.TestCase):

    def test_sequential_reading(self):
        reader = _stream().reader()
        self.assertIsInstance(reader, TokenReader)
        self.assertEqual(reader.peek().lexeme, "let")
        self.assertEqual(reader.peek(2).lexeme, "=")
        self.assertEqual(reader.next().lexeme, "let")
        self.assertEqual(reader.position, 1)

    def test_reading_past_end_returns_end_token(self):
        reader = _stream().reader()
        for _ in range(10):
            token = reader.next()
        self.assertTrue(token.is_end)
        self.assertTrue(reader.at_end)
        self.assertTrue(reader.peek(5).is_end)

    def test_seek_and_reset(self):
        reader = _stream().reader()
        reader.seek(3)
        self.assertEqual(reader.next().value, 1)
        reader.reset()
        self.assertEqual(reader.next().lexeme, "let")
        with self.assertRaises(IndexError):
            reader.seek(5)

    def test_iterating_reader_yields_remaining_tokens(self):
        reader = _stream().reader()
        reader.next()
        lexemes = [token.lexeme for token in reader]
        self.assertEqual(lexemes, ["x", "=", "1", ""])

    def test_readers_are_independent(self):
        stream = _stream()
        first, second = stream.reader(), stream.reader()
        first.next()
        self.assertEqual(second.peek().lexeme, "let")


if __name__ == '__main__':
    unittest.main()
