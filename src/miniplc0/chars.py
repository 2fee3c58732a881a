"""
Character Stream
================

Positioned access to raw source text with one character of lookahead.
The tokenizer reads the program exclusively through this class, which
keeps the line/column bookkeeping in one place so every token can be
given an exact (start, end) range.
"""

from miniplc0.errors import SourceLocation


class CharStream:
    """
    Sequential reader over source text.

    Lines and columns are 1-indexed. Consuming a newline moves to
    column 1 of the following line.

    Usage:
        stream = CharStream("begin end", "prog.pl0")
        while not stream.at_end():
            char = stream.advance()
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

        # Location of the most recently consumed character
        self._previous = SourceLocation(filename, 1, 1)

        self._lines: list[str] | None = None

    def at_end(self) -> bool:
        """Check if every character has been consumed."""
        return self._pos >= len(self.source)

    def peek(self) -> str:
        """Return the next character without consuming it ("" at end)."""
        if self.at_end():
            return ""
        return self.source[self._pos]

    def advance(self) -> str:
        """
        Consume and return the current character.

        Returns an empty string once the source is exhausted.
        """
        if self.at_end():
            return ""

        self._previous = self.location()
        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def location(self) -> SourceLocation:
        """Location of the next unread character."""
        return SourceLocation(self.filename, self._line, self._column)

    def previous_location(self) -> SourceLocation:
        """Location of the last consumed character."""
        return self._previous

    @property
    def lines(self) -> list[str]:
        """
        Source split into lines, computed once.

        Only a line feed ends a line, matching how advance() counts lines.
        """
        if self._lines is None:
            self._lines = self.source.split("\n")
        return self._lines

    def line_text(self, line: int) -> str:
        """Return the text of a 1-indexed source line, or "" if out of range."""
        lines = self.lines
        if 1 <= line <= len(lines):
            return lines[line - 1]
        return ""
