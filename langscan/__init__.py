"""
langscan

Lexical scanner for user-definable interpreted languages. Converts source
text into a stream of classified tokens for later composition and grammar
stages.

Architecture:
    langscan/
    └── lexer/           # Language definitions, scanning and tokens
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import (
    LanguageDefinition,
    LexerConfiguration,
    Tokenizer,
    TokenKind,
    TokenStream,
    LexError,
    InvalidLanguageDefinition,
    tokenize,
    collect_errors,
)

__all__ = [
    "LanguageDefinition",
    "LexerConfiguration",
    "Tokenizer",
    "TokenKind",
    "TokenStream",
    "LexError",
    "InvalidLanguageDefinition",
    "tokenize",
    "collect_errors",

    # Version info
    "__version__",
    "__license__",
]
