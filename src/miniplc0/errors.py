"""
miniplc0 Error Hierarchy
========================

This module defines the exception hierarchy for the miniplc0 compiler.
All exceptions inherit from PL0Error, allowing callers to catch every
compiler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
PL0Error (base)
└── CompileError (anything that aborts a compilation)
    ├── TokenizeError - lexical errors
    │   ├── InvalidInputError - unrecognized character
    │   └── InvalidIntegerError - literal out of the integer range
    └── AnalyzeError - syntax and semantic errors
        ├── ExpectedTokenError - grammar expectation not met
        ├── DuplicateDeclarationError - name declared twice
        ├── NotDeclaredError - name used without declaration
        ├── NotInitializedError - name read before it has a value
        ├── AssignToConstantError - assignment target is a constant
        └── InvalidStatementError - token cannot start a statement

Compilation is fail-fast: the first error raised aborts the whole run.
Each error carries an ErrorCode so callers can tell the kinds apart
without matching on classes.

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from miniplc0.tokens import Token, TokenType


# =============================================================================
# Base Exception Class
# =============================================================================

class PL0Error(Exception):
    """
    Base exception for all miniplc0 errors.

        try:
            compile_plc0(source)
        except PL0Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCode(Enum):
    """Kind of a compilation failure."""

    INVALID_INPUT = auto()
    INVALID_INTEGER = auto()
    EXPECTED_TOKEN = auto()
    DUPLICATE_DECLARATION = auto()
    NOT_DECLARED = auto()
    NOT_INITIALIZED = auto()
    ASSIGN_TO_CONSTANT = auto()


# =============================================================================
# Compilation Errors
# =============================================================================

class CompileError(PL0Error):
    """
    Base exception for errors that abort a compilation.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
        code: The ErrorCode classifying this error
    """

    code: Optional[ErrorCode] = None

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.pl0:3:5: error: 'b' is not initialized
                b = b + 1;
                    ^
            hint: assign a value to 'b' before reading it
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Tokenizer Errors
# =============================================================================

class TokenizeError(CompileError):
    """Lexical error raised while splitting source text into tokens."""
    pass


class InvalidInputError(TokenizeError):
    """
    Unrecognized character in source code.

    Only letters, digits, whitespace and the characters + - * / = ; ( )
    may appear in a program.
    """

    code = ErrorCode.INVALID_INPUT

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


class InvalidIntegerError(TokenizeError):
    """
    Integer literal that does not fit the target integer type.

    Example:
        print(99999999999);    // larger than 2**31 - 1
    """

    code = ErrorCode.INVALID_INTEGER

    def __init__(
        self,
        literal: str,
        maximum: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.literal = literal
        self.maximum = maximum
        super().__init__(
            f"integer literal '{literal}' is out of range",
            location=location,
            hint=f"the largest allowed literal is {maximum}",
            source_line=source_line,
        )


# =============================================================================
# Analyser Errors
# =============================================================================

class AnalyzeError(CompileError):
    """
    Syntax or semantic error found by the analyser.

    Raised when the token stream is well formed but violates the grammar
    or the declaration rules of the language.
    """
    pass


class ExpectedTokenError(AnalyzeError):
    """
    The next token does not match what the grammar requires.

    Attributes:
        expected: Token types that would have been accepted
        actual: The token that was found instead
    """

    code = ErrorCode.EXPECTED_TOKEN

    def __init__(
        self,
        expected: "TokenType | Sequence[TokenType]",
        actual: "Token",
        source_line: Optional[str] = None,
    ):
        if not isinstance(expected, (list, tuple)):
            expected = (expected,)
        self.expected = tuple(expected)
        self.actual = actual

        names = " or ".join(t.name for t in self.expected)
        super().__init__(
            f"expected {names}, found {actual.describe()}",
            location=actual.start,
            source_line=source_line,
        )


class DuplicateDeclarationError(AnalyzeError):
    """
    Identifier declared more than once.

    The program has a single flat scope, so a name may be declared by
    exactly one const or var declaration.
    """

    code = ErrorCode.DUPLICATE_DECLARATION

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{identifier}' was first declared at {original_location}"

        super().__init__(
            f"redeclaration of '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class NotDeclaredError(AnalyzeError):
    """Identifier read or assigned without a prior declaration."""

    code = ErrorCode.NOT_DECLARED

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"undeclared identifier '{identifier}'",
            location=location,
            hint=f"declare it with 'var {identifier};' or 'const {identifier} = ...;'",
            source_line=source_line,
        )


class NotInitializedError(AnalyzeError):
    """Variable read in an expression before it has been given a value."""

    code = ErrorCode.NOT_INITIALIZED

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"'{identifier}' is not initialized",
            location=location,
            hint=f"assign a value to '{identifier}' before reading it",
            source_line=source_line,
        )


class AssignToConstantError(AnalyzeError):
    """Assignment whose target was declared with 'const'."""

    code = ErrorCode.ASSIGN_TO_CONSTANT

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        super().__init__(
            f"cannot assign to constant '{identifier}'",
            location=location,
            hint=f"declare '{identifier}' with 'var' to make it assignable",
            source_line=source_line,
        )


class InvalidStatementError(AnalyzeError):
    """
    Token cannot start a statement.

    Statements begin with an identifier, 'print' or ';'.
    """

    code = ErrorCode.INVALID_INPUT

    def __init__(
        self,
        token: "Token",
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            f"{token.describe()} cannot start a statement",
            location=token.start,
            source_line=source_line,
        )
