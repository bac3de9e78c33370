"""
langscan Lexer - turns source text into a TokenStream

The scanning loop is plain maximal munch driven by the first character of
each token: identifier/keyword, then number, then string, then the longest
operator or punctuator the language definition knows. Whitespace and
comments are kept as trivia on the following token instead of being thrown
away, which makes every stream reversible back into its text.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .tokens import Token, TokenKind, TokenStream, SourceLocation
from .langdef import LanguageDefinition, is_identifier_start, is_identifier_continue
from .scanner import Scanner
from .errors import (
    LexError, create_unrecognized_character_error, create_unterminated_string_error,
    create_invalid_number_error, create_invalid_escape_error,
    create_unterminated_comment_error
)

logger = logging.getLogger(__name__)


DECIMAL_DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"

# Stays under the interpreter's int/str conversion digit limit
DECIMAL_CHUNK = 4000

# prefix letter -> (base, allowed digits)
RADIX_PREFIXES = {
    "x": (16, HEX_DIGITS),
    "o": (8, "01234567"),
    "b": (2, "01"),
}

ESCAPE_SEQUENCES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

# \xHH and \uHHHH
HEX_ESCAPE_WIDTHS = {
    "x": 2,
    "u": 4,
}


def _is_digit(char: str) -> bool:
    return char != "" and char in DECIMAL_DIGITS


@dataclass(frozen=True)
class LexerConfiguration:
    """Scanning options that are not part of the language vocabulary."""

    filename: str = "<string>"

    # Numeric literals
    strict_numbers: bool = True         # reject 1.2.3, 1e, 12abc instead of splitting
    allow_radix_prefixes: bool = True   # 0x1F, 0o17, 0b101
    allow_exponents: bool = True        # 1e10, 2.5E-3

    # String literals
    quotes: Tuple[str, ...] = ('"', "'")
    strict_escapes: bool = True         # reject unknown escapes like \q

    def __post_init__(self):
        if not self.quotes:
            raise ValueError("at least one quote character is required")
        for quote in self.quotes:
            if len(quote) != 1 or is_identifier_continue(quote) or quote.isspace() or quote == "\\":
                raise ValueError(f"invalid quote character: {quote!r}")


class Tokenizer:
    """
    Lexical analyzer for a user-defined language.

    A Tokenizer keeps no state between calls: every ``tokenize`` gets its own
    Scanner, so one instance can serve many threads.

    Args:
        definition: Vocabulary of the language being scanned
        config: Scanning options, defaults to LexerConfiguration()
    """

    def __init__(self, definition: LanguageDefinition, config: Optional[LexerConfiguration] = None):
        self.definition = definition
        self.config = config or LexerConfiguration()

        # Longest marker first
        markers = [(marker, None) for marker in definition.line_comments]
        markers.extend(definition.block_comments)
        self._comment_markers: Tuple[Tuple[str, Optional[str]], ...] = tuple(
            sorted(markers, key=lambda pair: -len(pair[0]))
        )

    def tokenize(self, text: str) -> TokenStream:
        """
        Tokenize the entire text.

        Returns:
            TokenStream terminated by a single END_OF_INPUT token

        Raises:
            LexError: On the first fatal scan error; no tokens are returned
        """
        scanner = Scanner(text, self.config.filename)
        try:
            tokens = list(self._scan(scanner))
        except LexError as e:
            logger.debug("Tokenizing %s aborted at %s: %s", self.config.filename, e.location, e.message)
            raise

        logger.debug("Tokenized %s: %d characters, %d tokens",
                     self.config.filename, len(text), len(tokens))
        return TokenStream(tokens)

    def collect_errors(self, text: str, limit: Optional[int] = None) -> List[LexError]:
        """
        Scan the whole text, resuming one character past each error.

        Meant for callers that want every diagnostic in one pass; the
        tokens themselves are discarded.
        """
        scanner = Scanner(text, self.config.filename)
        errors: List[LexError] = []

        while True:
            try:
                for _ in self._scan(scanner):
                    pass
                return errors
            except LexError as e:
                errors.append(e)
                if limit is not None and len(errors) >= limit:
                    return errors
                scanner.restore(e.location)
                scanner.advance()

    def _scan(self, scanner: Scanner) -> Iterator[Token]:
        while True:
            trivia = self._skip_trivia(scanner)
            if scanner.at_end:
                yield Token(TokenKind.END_OF_INPUT, "", None, scanner.location(), trivia)
                return
            yield self._next_token(scanner, trivia)

    def _next_token(self, scanner: Scanner, trivia: str) -> Token:
        """Classify by the first character and scan one token."""
        char = scanner.peek()
        start = scanner.location()

        if is_identifier_start(char):
            return self._scan_word(scanner, start, trivia)

        if _is_digit(char):
            return self._scan_number(scanner, start, trivia)

        if char in self.config.quotes:
            return self._scan_string(scanner, start, trivia)

        token = self._scan_symbol(scanner, start, trivia)
        if token is not None:
            return token

        raise create_unrecognized_character_error(char, start, self.definition)

    def _skip_trivia(self, scanner: Scanner) -> str:
        """Skip whitespace and comments, return the skipped text."""
        start = scanner.offset

        while not scanner.at_end:
            if scanner.peek().isspace():
                scanner.advance()
                continue

            for opener, closer in self._comment_markers:
                if scanner.startswith(opener):
                    if closer is None:
                        scanner.advance_while(lambda c: c != "\n")
                    else:
                        self._skip_block_comment(scanner, opener, closer)
                    break
            else:
                break

        return scanner.slice_from(start)

    def _skip_block_comment(self, scanner: Scanner, opener: str, closer: str):
        location = scanner.location()
        scanner.advance_by(len(opener))

        while not scanner.startswith(closer):
            if scanner.at_end:
                raise create_unterminated_comment_error(opener, closer, location)
            scanner.advance()

        scanner.advance_by(len(closer))

    def _scan_word(self, scanner: Scanner, start: SourceLocation, trivia: str) -> Token:
        """Tokenize an identifier or keyword."""
        lexeme = scanner.advance_while(is_identifier_continue)

        if self.definition.is_keyword(lexeme):
            kind = TokenKind.KEYWORD
        else:
            kind = TokenKind.IDENTIFIER

        return Token(kind, lexeme, lexeme, start, trivia)

    def _scan_number(self, scanner: Scanner, start: SourceLocation, trivia: str) -> Token:
        """Tokenize an integer or float literal."""
        if (self.config.allow_radix_prefixes and scanner.peek() == "0"
                and scanner.peek(1).lower() in RADIX_PREFIXES):
            return self._scan_radix_integer(scanner, start, trivia)

        strict = self.config.strict_numbers
        scanner.advance_while(_is_digit)
        is_float = False

        # The '.' only belongs to the number when a digit follows it
        if scanner.peek() == "." and _is_digit(scanner.peek(1)):
            scanner.advance()
            scanner.advance_while(_is_digit)
            is_float = True

            if strict and scanner.peek() == "." and _is_digit(scanner.peek(1)):
                raise create_invalid_number_error(
                    self._bad_literal_text(scanner, start), start,
                    "A numeric literal may contain only one decimal point."
                )

        if self.config.allow_exponents and scanner.peek() in ("e", "E"):
            sign_width = 1 if scanner.peek(1) in ("+", "-") else 0
            if _is_digit(scanner.peek(1 + sign_width)):
                scanner.advance_by(1 + sign_width)
                scanner.advance_while(_is_digit)
                is_float = True
            elif strict:
                raise create_invalid_number_error(
                    self._bad_literal_text(scanner, start), start,
                    "The exponent marker must be followed by digits."
                )

        if strict and is_identifier_continue(scanner.peek()):
            raise create_invalid_number_error(
                self._bad_literal_text(scanner, start), start,
                f"Unexpected character {scanner.peek()!r} directly after a number."
            )

        lexeme = scanner.slice_from(start.offset)
        value = float(lexeme) if is_float else _decimal_int(lexeme)
        return Token(TokenKind.NUMERIC_LITERAL, lexeme, value, start, trivia)

    def _scan_radix_integer(self, scanner: Scanner, start: SourceLocation, trivia: str) -> Token:
        """Tokenize 0x / 0o / 0b integers."""
        prefix = scanner.peek(1).lower()
        base, digits = RADIX_PREFIXES[prefix]
        scanner.advance_by(2)
        body = scanner.advance_while(lambda c: c in digits)

        if not body:
            if self.config.strict_numbers:
                raise create_invalid_number_error(
                    self._bad_literal_text(scanner, start), start,
                    f"Expected base-{base} digits after '0{prefix}'."
                )
            # Lenient: the literal is just the leading zero
            scanner.restore(start)
            scanner.advance()
            return Token(TokenKind.NUMERIC_LITERAL, "0", 0, start, trivia)

        if self.config.strict_numbers and is_identifier_continue(scanner.peek()):
            raise create_invalid_number_error(
                self._bad_literal_text(scanner, start), start,
                f"{scanner.peek()!r} is not a valid base-{base} digit."
            )

        lexeme = scanner.slice_from(start.offset)
        return Token(TokenKind.NUMERIC_LITERAL, lexeme, int(body, base), start, trivia)

    @staticmethod
    def _bad_literal_text(scanner: Scanner, start: SourceLocation) -> str:
        """The malformed literal as written, for error messages."""
        text = scanner.text
        end = scanner.offset
        while end < len(text) and (is_identifier_continue(text[end]) or text[end] == "."):
            end += 1
        return text[start.offset:end]

    def _scan_string(self, scanner: Scanner, start: SourceLocation, trivia: str) -> Token:
        """Tokenize a quoted string literal, decoding escapes."""
        quote = scanner.advance()
        value_parts = []

        while True:
            if scanner.at_end:
                raise create_unterminated_string_error(quote, start)

            char = scanner.peek()
            if char == quote:
                scanner.advance()
                break
            if char == "\\":
                value_parts.append(self._scan_escape(scanner, quote, start))
            else:
                value_parts.append(scanner.advance())

        lexeme = scanner.slice_from(start.offset)
        return Token(TokenKind.STRING_LITERAL, lexeme, "".join(value_parts), start, trivia)

    def _scan_escape(self, scanner: Scanner, quote: str, start: SourceLocation) -> str:
        """Decode one escape sequence, cursor on the backslash."""
        location = scanner.location()
        scanner.advance()

        if scanner.at_end:
            raise create_unterminated_string_error(quote, start)

        escape_char = scanner.advance()

        if escape_char in ESCAPE_SEQUENCES:
            return ESCAPE_SEQUENCES[escape_char]
        if escape_char in self.config.quotes:
            return escape_char

        width = HEX_ESCAPE_WIDTHS.get(escape_char)
        if width:
            hex_digits = scanner.lookahead(width)
            if len(hex_digits) == width and all(c in HEX_DIGITS for c in hex_digits):
                scanner.advance_by(width)
                return chr(int(hex_digits, 16))

        if self.config.strict_escapes:
            raise create_invalid_escape_error("\\" + escape_char, location)

        # Lenient: keep the sequence as written
        return "\\" + escape_char

    def _scan_symbol(self, scanner: Scanner, start: SourceLocation, trivia: str) -> Optional[Token]:
        """Longest operator/punctuator match, or None."""
        candidates = self.definition.symbols_starting_with(scanner.peek())
        for candidate in sorted(candidates, key=len, reverse=True):
            if scanner.startswith(candidate):
                scanner.advance_by(len(candidate))
                return Token(self.definition.symbol_kind(candidate), candidate, candidate, start, trivia)

        return None


def _decimal_int(digits: str) -> int:
    """Convert a decimal digit string of any length to int."""
    value = 0
    for i in range(0, len(digits), DECIMAL_CHUNK):
        chunk = digits[i:i + DECIMAL_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def tokenize(
    definition: LanguageDefinition,
    text: str,
    config: Optional[LexerConfiguration] = None
) -> TokenStream:
    """
    Convenience function to tokenize a string.

    Args:
        definition: Vocabulary of the language
        text: Source text
        config: Optional scanning options

    Returns:
        TokenStream ending in END_OF_INPUT

    Raises:
        LexError: If scanning fails
    """
    return Tokenizer(definition, config).tokenize(text)


def collect_errors(
    definition: LanguageDefinition,
    text: str,
    config: Optional[LexerConfiguration] = None,
    limit: Optional[int] = None
) -> List[LexError]:
    """Return every scan error in ``text`` (empty when it tokenizes cleanly)."""
    return Tokenizer(definition, config).collect_errors(text, limit)
