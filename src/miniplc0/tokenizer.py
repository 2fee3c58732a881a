"""
miniplc0 Tokenizer
==================

This module converts miniplc0 source text into tokens. Tokens are
produced on demand: the analyser asks for one token at a time through
next_token(), so the tokenizer itself keeps no token lookahead, only its
position in the character stream.

Lexical Rules
-------------
- Whitespace separates tokens and is otherwise ignored.
- A digit starts an unsigned decimal integer (maximal run of digits).
- A letter starts an identifier or keyword (maximal run of letters and
  digits). Keywords are case-sensitive.
- Any other character must be one of + - * / = ; ( ).

Example Usage
-------------
>>> from miniplc0.tokenizer import Tokenizer
>>> for token in Tokenizer("begin print(1); end").tokenize():
...     print(token)
Token(BEGIN, 'begin', 1:1)
Token(PRINT, 'print', 1:7)
Token(LPAREN, '(', 1:12)
Token(UINT, 1, 1:13)
Token(RPAREN, ')', 1:14)
Token(SEMICOLON, ';', 1:15)
Token(END, 'end', 1:17)
Token(EOF, 1:20)
"""

import logging
import string
from typing import Iterator

from miniplc0.chars import CharStream
from miniplc0.errors import InvalidInputError, InvalidIntegerError
from miniplc0.tokens import KEYWORDS, OPERATORS, Token, TokenType

logger = logging.getLogger(__name__)

# Largest value a literal may have: the range of a signed 32-bit integer
DEFAULT_MAX_INTEGER = 2**31 - 1


class Tokenizer:
    """
    Tokenizes miniplc0 source code.

    Usage:
        tokenizer = Tokenizer(source_text, filename)
        token = tokenizer.next_token()

    Attributes:
        stream: The character stream being read
        max_integer: Largest accepted integer literal
    """

    DIGITS = string.digits

    IDENT_START = string.ascii_letters

    IDENT_CHARS = string.ascii_letters + string.digits

    def __init__(
        self,
        source: str | CharStream,
        filename: str = "<input>",
        max_integer: int = DEFAULT_MAX_INTEGER,
    ):
        """
        Initialize the tokenizer.

        Args:
            source: Source text, or an existing CharStream to read from
            filename: Name of the source file (ignored for a CharStream)
            max_integer: Literals above this value raise InvalidIntegerError
        """
        if isinstance(source, CharStream):
            self.stream = source
        else:
            self.stream = CharStream(source, filename)
        self.max_integer = max_integer

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Once the input is exhausted every call returns an EOF token.

        Raises:
            InvalidInputError: On a character that cannot start a token
            InvalidIntegerError: On an integer literal that is out of range
        """
        self._skip_whitespace()

        if self.stream.at_end():
            here = self.stream.location()
            return Token(TokenType.EOF, None, here, here)

        char = self.stream.peek()
        if char in self.DIGITS:
            return self._scan_uint()
        if char in self.IDENT_START:
            return self._scan_ident_or_keyword()
        return self._scan_operator()

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including the first EOF.

        Yields:
            Token objects in source order
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # =========================================================================
    # Scanning
    # =========================================================================

    def _skip_whitespace(self) -> None:
        while not self.stream.at_end() and self.stream.peek().isspace():
            self.stream.advance()

    def _scan_uint(self) -> Token:
        """Scan a maximal run of decimal digits."""
        start = self.stream.location()
        chars = []
        while self.stream.peek() and self.stream.peek() in self.DIGITS:
            chars.append(self.stream.advance())

        literal = "".join(chars)
        # Compare digit counts first so huge runs never reach int()
        significant = literal.lstrip("0") or "0"
        if (
            len(significant) > len(str(self.max_integer))
            or int(significant) > self.max_integer
        ):
            raise InvalidIntegerError(
                literal,
                self.max_integer,
                start,
                self.stream.line_text(start.line),
            )
        return Token(TokenType.UINT, int(significant), start, self.stream.location())

    def _scan_ident_or_keyword(self) -> Token:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter and continue with letters and
        digits. The finished word is looked up in the keyword table.
        """
        start = self.stream.location()
        chars = []
        while self.stream.peek() and self.stream.peek() in self.IDENT_CHARS:
            chars.append(self.stream.advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.IDENT)
        return Token(token_type, name, start, self.stream.location())

    def _scan_operator(self) -> Token:
        """Scan a single-character operator or delimiter."""
        start = self.stream.location()
        char = self.stream.advance()

        if char in OPERATORS:
            return Token(OPERATORS[char], char, start, self.stream.location())

        logger.debug(f"Unrecognized character {char!r} at {start}")
        raise InvalidInputError(char, start, self.stream.line_text(start.line))


def tokenize_source(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize a whole program, returning every token including EOF."""
    return list(Tokenizer(source, filename).tokenize())
