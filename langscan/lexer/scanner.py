"""
Character cursor used by the tokenizer.

Tracks offset, line and column while walking an in-memory string one
character (code point) at a time.
"""

from typing import Callable

from .tokens import SourceLocation


class Scanner:
    """
    Cursor over the text being tokenized.

    Args:
        text: Text to scan
        filename: Name reported in source locations
    """

    def __init__(self, text: str, filename: str = "<string>"):
        self.text = text
        self.filename = filename
        self.offset = 0
        self.line = 1
        self.column = 1

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def peek(self, n: int = 0) -> str:
        """Character ``n`` places ahead without consuming; "" past the end."""
        index = self.offset + n
        if 0 <= index < len(self.text):
            return self.text[index]
        return ""

    def lookahead(self, count: int) -> str:
        """The next ``count`` characters, shorter near the end."""
        return self.text[self.offset:self.offset + count]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.offset)

    def advance(self) -> str:
        """Consume one character, updating line/column."""
        if self.at_end:
            return ""
        char = self.text[self.offset]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.offset += 1
        return char

    def advance_by(self, count: int) -> str:
        start = self.offset
        for _ in range(count):
            if not self.advance():
                break
        return self.text[start:self.offset]

    def advance_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while ``predicate`` holds, return them."""
        start = self.offset
        while not self.at_end and predicate(self.text[self.offset]):
            self.advance()
        return self.text[start:self.offset]

    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.offset)

    def slice_from(self, offset: int) -> str:
        return self.text[offset:self.offset]

    def restore(self, location: SourceLocation) -> None:
        """Move the cursor to a location previously taken from this scanner."""
        self.offset = location.offset
        self.line = location.line
        self.column = location.column
