"""
langscan Lexer Package

Implements a from-scratch lexical analyzer (tokenizer) for languages whose
vocabulary is supplied at runtime through a LanguageDefinition.

Key Features:
- Keyword resolution against a caller-supplied keyword set
- Longest-match operators and punctuators
- Numeric literals (decimal, fractions, exponents, 0x/0o/0b)
- String literals in double or single quotes with escape decoding
- Line and block comments kept as trivia for lossless round-trips
- Source location tracking (line, column, offset) for diagnostics
"""

from .tokens import Token, TokenKind, TokenStream, TokenReader, SourceLocation
from .langdef import LanguageDefinition
from .scanner import Scanner
from .lexer import Tokenizer, LexerConfiguration, tokenize, collect_errors
from .errors import (
    Diagnostic,
    LexError,
    LexErrorKind,
    UnrecognizedCharacterError,
    UnterminatedStringError,
    InvalidNumericLiteralError,
    InvalidEscapeSequenceError,
    UnterminatedCommentError,
    InvalidLanguageDefinition,
)

__all__ = [
    "Tokenizer",
    "LexerConfiguration",
    "tokenize",
    "collect_errors",
    "LanguageDefinition",
    "Scanner",
    "Token",
    "TokenKind",
    "TokenStream",
    "TokenReader",
    "SourceLocation",
    "Diagnostic",
    "LexError",
    "LexErrorKind",
    "UnrecognizedCharacterError",
    "UnterminatedStringError",
    "InvalidNumericLiteralError",
    "InvalidEscapeSequenceError",
    "UnterminatedCommentError",
    "InvalidLanguageDefinition",
]
