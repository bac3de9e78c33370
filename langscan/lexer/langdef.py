"""
Language definitions for the langscan lexer.

A LanguageDefinition describes the lexical vocabulary of the language being
scanned: reserved keywords, operator and punctuator symbols, and comment
markers. It is validated once at construction and never changes afterwards,
so a single instance can be shared by any number of tokenize calls.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .tokens import TokenKind
from .errors import InvalidLanguageDefinition


DEFAULT_OPERATORS = frozenset({
    "+", "-", "*", "/", "%",
    "=", "==", "!=", "<", ">", "<=", ">=",
    "!", "&&", "||",
})

DEFAULT_PUNCTUATORS = frozenset({
    "(", ")", "{", "}", "[", "]", ";", ",", ".", ":",
})

DEFAULT_LINE_COMMENTS = ("//", "#")
DEFAULT_BLOCK_COMMENTS = (("/*", "*/"),)

QUOTE_CHARS = frozenset({'"', "'"})


def is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def is_identifier_continue(char: str) -> bool:
    return char.isalnum() or char == "_"


def is_identifier_shaped(word: str) -> bool:
    """Check that a word would be scanned as one identifier run."""
    return (bool(word) and is_identifier_start(word[0])
            and all(is_identifier_continue(c) for c in word[1:]))


def _strings(items) -> set:
    return {item for item in items if isinstance(item, str)}


class LanguageDefinition:
    """
    Immutable description of a language's lexical vocabulary.

    Args:
        keywords: Reserved words, take precedence over identifiers
        operators: Operator symbols, ``None`` selects DEFAULT_OPERATORS
        punctuators: Structural symbols, ``None`` selects DEFAULT_PUNCTUATORS
        line_comments: Markers starting a comment that runs to end of line
        block_comments: ``(open, close)`` marker pairs

    Raises:
        InvalidLanguageDefinition: If any invariant is violated
    """

    __slots__ = (
        "keywords", "operators", "punctuators", "line_comments",
        "block_comments", "_symbol_kinds", "_symbols_by_first_char", "_max_symbol_length",
    )

    def __init__(
        self,
        keywords: Iterable[str],
        operators: Optional[Iterable[str]] = None,
        punctuators: Optional[Iterable[str]] = None,
        line_comments: Optional[Sequence[str]] = None,
        block_comments: Optional[Sequence[Tuple[str, str]]] = None,
    ):
        keywords = list(keywords)
        operators = list(DEFAULT_OPERATORS if operators is None else operators)
        punctuators = list(DEFAULT_PUNCTUATORS if punctuators is None else punctuators)
        line_comments = tuple(DEFAULT_LINE_COMMENTS if line_comments is None else line_comments)
        block_comments = tuple(
            tuple(pair) for pair in (DEFAULT_BLOCK_COMMENTS if block_comments is None else block_comments)
        )

        problems = self._validate(keywords, operators, punctuators, line_comments, block_comments)
        if problems:
            raise InvalidLanguageDefinition(problems)

        symbol_kinds: Dict[str, TokenKind] = {op: TokenKind.OPERATOR for op in operators}
        symbol_kinds.update((p, TokenKind.PUNCTUATOR) for p in punctuators)
        by_first_char: Dict[str, set] = {}
        for symbol in symbol_kinds:
            by_first_char.setdefault(symbol[0], set()).add(symbol)

        set_attr = object.__setattr__
        set_attr(self, "keywords", frozenset(keywords))
        set_attr(self, "operators", frozenset(operators))
        set_attr(self, "punctuators", frozenset(punctuators))
        set_attr(self, "line_comments", line_comments)
        set_attr(self, "block_comments", block_comments)
        set_attr(self, "_symbol_kinds", symbol_kinds)
        set_attr(self, "_symbols_by_first_char",
                 {char: frozenset(group) for char, group in by_first_char.items()})
        set_attr(self, "_max_symbol_length", max((len(s) for s in symbol_kinds), default=0))

    @staticmethod
    def _validate(keywords, operators, punctuators, line_comments, block_comments) -> List[str]:
        problems = []

        for keyword in keywords:
            if not isinstance(keyword, str) or not keyword:
                problems.append(f"keyword {keyword!r} must be a non-empty string")
            elif not is_identifier_shaped(keyword):
                problems.append(f"keyword {keyword!r} is not a valid identifier shape")

        for category, symbols in (("operator", operators), ("punctuator", punctuators)):
            for symbol in symbols:
                if not isinstance(symbol, str) or not symbol:
                    problems.append(f"{category} {symbol!r} must be a non-empty string")
                elif any(c.isspace() for c in symbol):
                    problems.append(f"{category} {symbol!r} contains whitespace")
                elif is_identifier_continue(symbol[0]) or symbol[0] in QUOTE_CHARS:
                    problems.append(
                        f"{category} {symbol!r} starts with a letter, digit, underscore or quote"
                    )

        categories = (
            ("keyword", _strings(keywords)),
            ("operator", _strings(operators)),
            ("punctuator", _strings(punctuators)),
        )
        for i, (first_name, first) in enumerate(categories):
            for second_name, second in categories[i + 1:]:
                for shared in sorted(first & second, key=str):
                    problems.append(f"{shared!r} is listed as both {first_name} and {second_name}")

        openers = list(line_comments)
        closers = []
        for pair in block_comments:
            if len(pair) != 2:
                problems.append(f"block comment {pair!r} must be an (open, close) pair")
                continue
            openers.append(pair[0])
            closers.append(pair[1])
        symbols = _strings(operators) | _strings(punctuators)
        for marker in openers + closers:
            if not isinstance(marker, str) or not marker:
                problems.append(f"comment marker {marker!r} must be a non-empty string")
            elif any(c.isspace() for c in marker):
                problems.append(f"comment marker {marker!r} contains whitespace")
            elif marker in symbols:
                problems.append(f"comment marker {marker!r} is also an operator or punctuator")
            elif marker in openers and (is_identifier_continue(marker[0]) or marker[0] in QUOTE_CHARS):
                # Markers are tried before words, numbers and strings
                problems.append(
                    f"comment marker {marker!r} starts with a letter, digit, underscore or quote"
                )

        return problems

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguageDefinition):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (f"LanguageDefinition(keywords={sorted(self.keywords)!r}, "
                f"operators={sorted(self.operators)!r}, "
                f"punctuators={sorted(self.punctuators)!r})")

    def _key(self):
        return (self.keywords, self.operators, self.punctuators,
                self.line_comments, self.block_comments)

    @property
    def symbols(self) -> FrozenSet[str]:
        """All operators and punctuators."""
        return frozenset(self._symbol_kinds)

    @property
    def max_symbol_length(self) -> int:
        return self._max_symbol_length

    def is_keyword(self, word: str) -> bool:
        return word in self.keywords

    def symbol_kind(self, symbol: str) -> Optional[TokenKind]:
        """Return OPERATOR, PUNCTUATOR or None for an unknown symbol."""
        return self._symbol_kinds.get(symbol)

    def symbols_starting_with(self, char: str) -> FrozenSet[str]:
        """Operators and punctuators whose first character is ``char``."""
        return self._symbols_by_first_char.get(char, frozenset())
