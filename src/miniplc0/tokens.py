"""
Token Definitions
=================

Token types and the immutable Token value produced by the tokenizer.

Token Categories
----------------
- Keywords: begin, end, const, var, print
- Identifiers: letter followed by letters/digits
- Unsigned integers: decimal digit runs
- Operators: + - * / =
- Delimiters: ; ( )
"""

from dataclasses import dataclass
from enum import Enum, auto

from miniplc0.errors import SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for the miniplc0 language."""

    # === Structural Tokens ===
    EOF = auto()            # End of input

    # === Keywords ===
    BEGIN = auto()          # begin
    END = auto()            # end
    CONST = auto()          # const
    VAR = auto()            # var
    PRINT = auto()          # print

    # === Identifiers and Literals ===
    IDENT = auto()          # Variable/constant names
    UINT = auto()           # Unsigned decimal integer

    # === Operators ===
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULT = auto()           # *
    DIV = auto()            # /
    EQUAL = auto()          # =

    # === Delimiters ===
    SEMICOLON = auto()      # ;
    LPAREN = auto()         # (
    RPAREN = auto()         # )


# Keywords are matched case-sensitively: "Begin" is an identifier
KEYWORDS: dict[str, TokenType] = {
    "begin": TokenType.BEGIN,
    "end": TokenType.END,
    "const": TokenType.CONST,
    "var": TokenType.VAR,
    "print": TokenType.PRINT,
}

OPERATORS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULT,
    "/": TokenType.DIV,
    "=": TokenType.EQUAL,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical unit of miniplc0 source.

    Attributes:
        type: The TokenType classification
        value: Spelling for keywords, identifiers and operators; the
               integer value for UINT; None for EOF
        start: Location of the first character
        end: Location just past the last character
    """
    type: TokenType
    value: str | int | None
    start: SourceLocation
    end: SourceLocation

    def __repr__(self) -> str:
        """Format token for debugging output."""
        where = f"{self.start.line}:{self.start.column}"
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {where})"
            return f"Token({self.type.name}, {self.value!r}, {where})"
        return f"Token({self.type.name}, {where})"

    @property
    def location(self) -> SourceLocation:
        """Return the start location for error reporting."""
        return self.start

    def describe(self) -> str:
        """Short human-readable form used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.value}'"

    def format(self) -> str:
        """One-line listing entry: type, value and source range."""
        value = "" if self.value is None else self.value
        return (
            f"{self.type.name:<10} {value!s:<12} "
            f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        )
