"""
Error handling for the langscan lexer.

Provides error reporting with source location information, help text and
suggestions, plus the construction-time error raised by invalid language
definitions.
"""

from enum import Enum, auto
from typing import TYPE_CHECKING, Iterable, List, Optional
from dataclasses import dataclass

from .tokens import SourceLocation

if TYPE_CHECKING:
    from .langdef import LanguageDefinition


@dataclass
class Diagnostic:
    """A rendered lexer diagnostic."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexErrorKind(Enum):
    """Classification of fatal scan errors."""
    UNRECOGNIZED_CHARACTER = auto()
    UNTERMINATED_STRING_LITERAL = auto()
    INVALID_NUMERIC_LITERAL = auto()
    INVALID_ESCAPE_SEQUENCE = auto()
    UNTERMINATED_COMMENT = auto()


class LexError(Exception):
    """
    Exception raised when the tokenizer hits a fatal error.

    Subclasses fix ``kind``; every instance carries the location of the
    offending text and a Diagnostic for reporting.
    """

    kind: LexErrorKind

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class UnrecognizedCharacterError(LexError):
    kind = LexErrorKind.UNRECOGNIZED_CHARACTER

    def __init__(self, char: str, location: SourceLocation, **kwargs):
        super().__init__(f"Unrecognized character: {char!r}", location, **kwargs)
        self.char = char


class UnterminatedStringError(LexError):
    kind = LexErrorKind.UNTERMINATED_STRING_LITERAL

    def __init__(self, quote: str, location: SourceLocation, **kwargs):
        super().__init__("Unterminated string literal", location, **kwargs)
        self.quote = quote


class InvalidNumericLiteralError(LexError):
    kind = LexErrorKind.INVALID_NUMERIC_LITERAL

    def __init__(self, lexeme: str, location: SourceLocation, **kwargs):
        super().__init__(f"Invalid numeric literal: {lexeme!r}", location, **kwargs)
        self.lexeme = lexeme


class InvalidEscapeSequenceError(LexError):
    kind = LexErrorKind.INVALID_ESCAPE_SEQUENCE

    def __init__(self, sequence: str, location: SourceLocation, **kwargs):
        super().__init__(f"Invalid escape sequence: {sequence!r}", location, **kwargs)
        self.sequence = sequence


class UnterminatedCommentError(LexError):
    kind = LexErrorKind.UNTERMINATED_COMMENT

    def __init__(self, opener: str, location: SourceLocation, **kwargs):
        super().__init__("Unterminated block comment", location, **kwargs)
        self.opener = opener


class InvalidLanguageDefinition(ValueError):
    """
    Raised when a LanguageDefinition violates its invariants.

    Reported at construction time, so no tokenize call can start with a
    broken vocabulary. ``problems`` lists every violation found.
    """

    code = "L100"

    def __init__(self, problems: Iterable[str]):
        self.problems = list(problems)
        self.diagnostic = Diagnostic(
            message="Invalid language definition",
            location=None,
            severity="error",
            code=self.code,
            suggestions=self.problems or None
        )
        super().__init__("; ".join(self.problems) or "invalid language definition")

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorRecovery:
    """Suggestion helpers used to fill in diagnostics."""

    @staticmethod
    def suggest_symbols(char: str, definition: "LanguageDefinition") -> List[str]:
        """Suggest defined operators/punctuators sharing the character."""
        suggestions = [symbol for symbol in definition.symbols if char in symbol]
        return sorted(suggestions, key=lambda s: (len(s), s))[:3]

    @staticmethod
    def suggest_escapes() -> List[str]:
        return [f"\\{name}" for name in "ntr0\\\"'"] + ["\\xHH", "\\uHHHH"]


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unrecognized character",
    "L002": "Unterminated string literal",
    "L003": "Invalid numeric literal",
    "L006": "Invalid escape sequence",
    "L011": "Unterminated block comment",
    "L100": "Invalid language definition",
}


def create_unrecognized_character_error(
    char: str,
    location: SourceLocation,
    definition: "LanguageDefinition"
) -> UnrecognizedCharacterError:
    """Create an error for a character no token class accepts."""
    suggestions = ErrorRecovery.suggest_symbols(char, definition)

    if suggestions:
        help_text = f"'{char}' only appears inside longer symbols: {', '.join(suggestions)}"
    elif char.isprintable():
        help_text = f"The character '{char}' is not part of this language's vocabulary."
    else:
        help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    return UnrecognizedCharacterError(
        char,
        location,
        code="L001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_unterminated_string_error(quote: str, location: SourceLocation) -> UnterminatedStringError:
    return UnterminatedStringError(
        quote,
        location,
        code="L002",
        help_text=f"String literals must be closed with a matching {quote} quote.",
        suggestions=[f"Add a closing {quote} quote", "Check for an escaped closing quote"]
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation, reason: str) -> InvalidNumericLiteralError:
    return InvalidNumericLiteralError(
        lexeme,
        location,
        code="L003",
        help_text=reason
    )


def create_invalid_escape_error(sequence: str, location: SourceLocation) -> InvalidEscapeSequenceError:
    return InvalidEscapeSequenceError(
        sequence,
        location,
        code="L006",
        help_text="Use a recognized escape or write '\\\\' for a literal backslash.",
        suggestions=ErrorRecovery.suggest_escapes()
    )


def create_unterminated_comment_error(opener: str, closer: str, location: SourceLocation) -> UnterminatedCommentError:
    return UnterminatedCommentError(
        opener,
        location,
        code="L011",
        help_text=f"Block comments opened with '{opener}' must be closed with '{closer}'."
    )
