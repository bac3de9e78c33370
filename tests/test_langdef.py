"""
Tests for LanguageDefinition construction and validation.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from langscan.lexer.langdef import (
    LanguageDefinition, DEFAULT_OPERATORS, DEFAULT_PUNCTUATORS, is_identifier_shaped
)
from langscan.lexer.tokens import TokenKind
from langscan.lexer.errors import InvalidLanguageDefinition


class TestLanguageDefinition(unittest.TestCase):
    """Vocabulary lookups and defaults."""

    def test_keywords_only_uses_default_symbols(self):
        definition = LanguageDefinition(["if", "else"])
        self.assertEqual(definition.keywords, frozenset({"if", "else"}))
        self.assertEqual(definition.operators, DEFAULT_OPERATORS)
        self.assertEqual(definition.punctuators, DEFAULT_PUNCTUATORS)
        self.assertEqual(definition.line_comments, ("//", "#"))
        self.assertEqual(definition.block_comments, (("/*", "*/"),))

    def test_lookups(self):
        definition = LanguageDefinition(["let"], operators=["=", "=="], punctuators=[";"])
        self.assertTrue(definition.is_keyword("let"))
        self.assertFalse(definition.is_keyword("Let"))
        self.assertEqual(definition.symbol_kind("=="), TokenKind.OPERATOR)
        self.assertEqual(definition.symbol_kind(";"), TokenKind.PUNCTUATOR)
        self.assertIsNone(definition.symbol_kind("+"))
        self.assertEqual(definition.symbols, frozenset({"=", "==", ";"}))
        self.assertEqual(definition.max_symbol_length, 2)

    def test_symbols_starting_with(self):
        definition = LanguageDefinition([], operators=["=", "==", "=>", "!"], punctuators=["."])
        self.assertEqual(definition.symbols_starting_with("="), frozenset({"=", "==", "=>"}))
        self.assertEqual(definition.symbols_starting_with("."), frozenset({"."}))
        self.assertEqual(definition.symbols_starting_with("?"), frozenset())
        self.assertEqual(definition.symbols_starting_with(">"), frozenset())

    def test_empty_symbol_sets(self):
        definition = LanguageDefinition([], operators=[], punctuators=[])
        self.assertEqual(definition.max_symbol_length, 0)
        self.assertEqual(definition.symbols, frozenset())

    def test_definition_is_immutable(self):
        definition = LanguageDefinition(["if"])
        with self.assertRaises(AttributeError):
            definition.keywords = frozenset({"while"})
        with self.assertRaises(AttributeError):
            del definition.operators

    def test_equal_definitions_hash_equal(self):
        first = LanguageDefinition(["if", "else"])
        second = LanguageDefinition(["else", "if"])
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertNotEqual(first, LanguageDefinition(["if"]))

    def test_identifier_shape(self):
        self.assertTrue(is_identifier_shaped("_private2"))
        self.assertTrue(is_identifier_shaped("größe"))
        self.assertFalse(is_identifier_shaped("2fast"))
        self.assertFalse(is_identifier_shaped("two words"))
        self.assertFalse(is_identifier_shaped(""))


class TestLanguageDefinitionValidation(unittest.TestCase):
    """Invariant violations are reported at construction time."""

    def assertInvalid(self, *args, **kwargs):
        with self.assertRaises(InvalidLanguageDefinition) as ctx:
            LanguageDefinition(*args, **kwargs)
        return ctx.exception

    def test_empty_keyword(self):
        error = self.assertInvalid(["if", ""])
        self.assertEqual(len(error.problems), 1)
        self.assertIn("non-empty", error.problems[0])

    def test_keyword_with_whitespace_or_symbols(self):
        self.assertInvalid(["else if"])
        self.assertInvalid(["a+b"])
        self.assertInvalid(["9lives"])

    def test_duplicate_across_categories(self):
        error = self.assertInvalid([], operators=["=", ";"], punctuators=[";"])
        self.assertEqual(error.problems, ["';' is listed as both operator and punctuator"])

    def test_symbol_starting_with_letter_or_quote(self):
        self.assertInvalid([], operators=["and"])
        self.assertInvalid([], operators=["1+"])
        self.assertInvalid([], punctuators=['"'])

    def test_symbol_with_whitespace(self):
        self.assertInvalid([], operators=["= ="])

    def test_comment_marker_conflicts_with_symbol(self):
        self.assertInvalid([], operators=["//"])
        self.assertInvalid([], operators=["#"], line_comments=["#"])

    def test_comment_marker_shape(self):
        self.assertInvalid([], line_comments=[""])
        self.assertInvalid([], block_comments=[("(*", "* )")])
        self.assertInvalid([], block_comments=[("(*",)])

    def test_comment_marker_starting_with_letter_digit_or_quote(self):
        error = self.assertInvalid([], line_comments=["rem"])
        self.assertIn("starts with a letter", error.problems[0])
        self.assertInvalid([], line_comments=["_c"])
        self.assertInvalid([], line_comments=["1!"])
        self.assertInvalid([], block_comments=[('"""', '"""')])

    def test_comment_marker_equal_to_keyword(self):
        error = self.assertInvalid(["rem"], line_comments=["rem"])
        self.assertEqual(len(error.problems), 1)

    def test_block_comment_closer_may_be_a_word(self):
        definition = LanguageDefinition(["let"], block_comments=[("{-", "end")])
        self.assertEqual(definition.block_comments, (("{-", "end"),))

    def test_non_string_entries_are_reported(self):
        error = self.assertInvalid([["a"]])
        self.assertIn("must be a non-empty string", error.problems[0])
        self.assertInvalid([], operators=[None, "+"])
        self.assertInvalid([], line_comments=[("#",)])

    def test_every_problem_is_reported(self):
        error = self.assertInvalid(["", "bad word"], operators=["x"])
        self.assertEqual(len(error.problems), 3)
        self.assertEqual(error.diagnostic.code, "L100")
        self.assertIn("Invalid language definition", str(error))

    def test_is_a_value_error(self):
        with self.assertRaises(ValueError):
            LanguageDefinition([""])

    def test_custom_comment_markers_may_reuse_default_symbols(self):
        definition = LanguageDefinition(
            ["let"], operators=["#", "/"], line_comments=["--"], block_comments=[]
        )
        self.assertEqual(definition.line_comments, ("--",))
        self.assertEqual(definition.block_comments, ())


if __name__ == '__main__':
    unittest.main()
