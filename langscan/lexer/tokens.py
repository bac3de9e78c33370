"""
Token definitions for the langscan lexer.

This module defines the output data model of the tokenizer:
- TokenKind, the closed set of lexical classes
- SourceLocation, a position inside the scanned text
- Token, a single classified lexeme
- TokenStream / TokenReader, the immutable result of one tokenize call
  and a cursor over it for downstream parsers
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Sequence, Tuple, Union, overload


class TokenKind(Enum):
    """
    Enumeration of all token kinds.

    The set is closed: a new literal kind means a new member here and a new
    classification branch in the lexer.
    """

    KEYWORD = auto()                # if, else, let
    IDENTIFIER = auto()             # x, total_count, _tmp
    NUMERIC_LITERAL = auto()        # 42, 3.14, 1e-3, 0xFF
    STRING_LITERAL = auto()         # "hello", 'a\tb'
    OPERATOR = auto()               # =, ==, +, &&
    PUNCTUATOR = auto()             # ( ) { } ; ,
    END_OF_INPUT = auto()           # terminal marker, empty lexeme


LITERAL_KINDS = frozenset({TokenKind.NUMERIC_LITERAL, TokenKind.STRING_LITERAL})
SYMBOL_KINDS = frozenset({TokenKind.OPERATOR, TokenKind.PUNCTUATOR})


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the scanned text.

    Line and column are 1-based, column and offset count characters.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    ``lexeme`` is always the raw source text, ``value`` the decoded value
    (number for numeric literals, unescaped text for string literals).
    ``trivia`` holds the whitespace and comments skipped right before the
    token, so a stream can be turned back into its source text.
    """
    kind: TokenKind
    lexeme: str
    value: Any
    location: SourceLocation
    trivia: str = ""

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.kind.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.kind.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.kind.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def offset(self) -> int:
        return self.location.offset

    @property
    def end_offset(self) -> int:
        """Offset one past the last character of the lexeme."""
        return self.location.offset + len(self.lexeme)

    @property
    def is_literal(self) -> bool:
        return self.kind in LITERAL_KINDS

    @property
    def is_keyword(self) -> bool:
        return self.kind == TokenKind.KEYWORD

    @property
    def is_symbol(self) -> bool:
        """Check if this token is an operator or a punctuator."""
        return self.kind in SYMBOL_KINDS

    @property
    def is_end(self) -> bool:
        return self.kind == TokenKind.END_OF_INPUT


class TokenStream(Sequence):
    """
    Ordered, immutable collection of tokens produced by one tokenize call.

    Always terminated by exactly one END_OF_INPUT token. Supports len(),
    indexing, slicing (returning plain tuples) and restartable iteration.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[Token]):
        tokens = tuple(tokens)
        if not tokens or tokens[-1].kind != TokenKind.END_OF_INPUT:
            raise ValueError("token stream must end with an END_OF_INPUT token")
        if any(token.kind == TokenKind.END_OF_INPUT for token in tokens[:-1]):
            raise ValueError("END_OF_INPUT may only appear as the last token")
        self._tokens: Tuple[Token, ...] = tokens

    def __len__(self) -> int:
        return len(self._tokens)

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Token, ...]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Token, Tuple[Token, ...]]:
        return self._tokens[index]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TokenStream):
            return self._tokens == other._tokens
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __repr__(self) -> str:
        return f"TokenStream({', '.join(str(token) for token in self._tokens)})"

    @property
    def end(self) -> Token:
        """The terminal END_OF_INPUT token."""
        return self._tokens[-1]

    def reader(self) -> "TokenReader":
        """Return a new cursor positioned at the first token."""
        return TokenReader(self)

    def kinds(self) -> List[TokenKind]:
        return [token.kind for token in self._tokens]

    def reconstruct(self) -> str:
        """Rebuild the scanned text from trivia and lexemes."""
        return "".join(token.trivia + token.lexeme for token in self._tokens)


class TokenReader:
    """
    Sequential cursor over a TokenStream.

    Reading past the end keeps returning the END_OF_INPUT token, so parsers
    never have to bounds-check. ``seek`` and ``reset`` support backtracking.
    """

    def __init__(self, stream: TokenStream):
        self._stream = stream
        self._index = 0

    @property
    def position(self) -> int:
        return self._index

    @property
    def at_end(self) -> bool:
        return self.peek().kind == TokenKind.END_OF_INPUT

    def peek(self, n: int = 0) -> Token:
        """Look at the token ``n`` places ahead without consuming it."""
        index = min(self._index + n, len(self._stream) - 1)
        return self._stream[index]

    def next(self) -> Token:
        """Consume and return the current token."""
        token = self.peek()
        if self._index < len(self._stream) - 1:
            self._index += 1
        return token

    def seek(self, index: int) -> None:
        if not 0 <= index < len(self._stream):
            raise IndexError(f"token index {index} out of range")
        self._index = index

    def reset(self) -> None:
        self._index = 0

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            yield token
            if token.kind == TokenKind.END_OF_INPUT:
                return
