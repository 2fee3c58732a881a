# =============================================================================
# test_tokenizer.py - Tokenizer Unit Tests
# =============================================================================
# Tests for the character stream and the miniplc0 tokenizer.
#
# Test coverage includes:
#   - Character stream lookahead and line/column tracking
#   - Integer literals and the overflow limit
#   - Keywords versus identifiers
#   - Every single-character operator and delimiter
#   - Token start/end ranges
#   - EOF behaviour and error conditions
# =============================================================================

import pytest

from miniplc0.chars import CharStream
from miniplc0.errors import (
    ErrorCode,
    InvalidInputError,
    InvalidIntegerError,
    SourceLocation,
)
from miniplc0.tokenizer import Tokenizer, tokenize_source
from miniplc0.tokens import Token, TokenType


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str) -> list:
    """Tokenize and drop the trailing EOF token."""
    return [t for t in tokenize_source(source, "<test>") if t.type != TokenType.EOF]


# =============================================================================
# Character Stream Tests
# =============================================================================

class TestCharStream:
    """Tests for positioned character access."""

    def test_peek_does_not_consume(self):
        """Peeking twice returns the same character."""
        stream = CharStream("ab")
        assert stream.peek() == "a"
        assert stream.peek() == "a"

    def test_advance_consumes(self):
        """Advance returns the current character and moves on."""
        stream = CharStream("ab")
        assert stream.advance() == "a"
        assert stream.advance() == "b"
        assert stream.at_end()

    def test_end_of_input(self):
        """Past the end, peek and advance return an empty string."""
        stream = CharStream("")
        assert stream.at_end()
        assert stream.peek() == ""
        assert stream.advance() == ""

    def test_columns_advance(self):
        """Columns are 1-indexed and increase per character."""
        stream = CharStream("xyz", "f.pl0")
        assert stream.location() == SourceLocation("f.pl0", 1, 1)
        stream.advance()
        stream.advance()
        assert stream.location() == SourceLocation("f.pl0", 1, 3)

    def test_newline_starts_next_line(self):
        """Consuming a newline moves to column 1 of the next line."""
        stream = CharStream("a\nb")
        stream.advance()
        stream.advance()
        assert stream.location().line == 2
        assert stream.location().column == 1

    def test_previous_location(self):
        """previous_location reports the last consumed character."""
        stream = CharStream("ab")
        stream.advance()
        stream.advance()
        assert stream.previous_location().column == 2

    def test_line_text(self):
        """Source lines can be fetched for diagnostics."""
        stream = CharStream("first\nsecond\n")
        assert stream.line_text(2) == "second"
        assert stream.line_text(9) == ""

    def test_line_text_splits_on_line_feed_only(self):
        """Carriage returns and form feeds do not start a new line."""
        stream = CharStream("begin\r\x0cx\nend")
        assert stream.line_text(1) == "begin\r\x0cx"
        assert stream.line_text(2) == "end"

    def test_lines_computed_once(self):
        """The line list is built once and reused."""
        stream = CharStream("a\nb")
        assert stream.lines is stream.lines
        assert stream.lines == ["a", "b"]

    def test_error_line_after_carriage_return(self):
        """Diagnostics after a bare carriage return show the whole line."""
        with pytest.raises(InvalidInputError) as exc_info:
            tokenize("begin\r#")
        error = exc_info.value
        assert error.location == SourceLocation("<test>", 1, 7)
        assert error.source_line == "begin\r#"


# =============================================================================
# Integer Literal Tests
# =============================================================================

class TestIntegers:
    """Tests for unsigned integer literals."""

    def test_single_integer(self):
        """'123' is exactly one UINT token with value 123."""
        tokens = tokenize("123")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.UINT
        assert tokens[0].value == 123

    def test_leading_zeros(self):
        """Leading zeros are part of the digit run."""
        tokens = tokenize("007")
        assert len(tokens) == 1
        assert tokens[0].value == 7

    def test_maximal_munch(self):
        """Digits directly followed by a letter split into two tokens."""
        tokens = tokenize("12ab")
        assert [t.type for t in tokens] == [TokenType.UINT, TokenType.IDENT]
        assert tokens[1].value == "ab"

    def test_largest_literal(self):
        """2**31 - 1 is the largest accepted literal."""
        tokens = tokenize("2147483647")
        assert tokens[0].value == 2147483647

    def test_overflow(self):
        """A literal above the limit raises InvalidIntegerError."""
        with pytest.raises(InvalidIntegerError) as exc_info:
            tokenize("2147483648")
        assert exc_info.value.code == ErrorCode.INVALID_INTEGER
        assert exc_info.value.location.column == 1

    def test_custom_limit(self):
        """The literal limit is configurable."""
        tokenizer = Tokenizer("300", max_integer=255)
        with pytest.raises(InvalidIntegerError):
            tokenizer.next_token()

    def test_huge_literal(self):
        """A literal thousands of digits long raises InvalidIntegerError."""
        with pytest.raises(InvalidIntegerError) as exc_info:
            tokenize("9" * 5000)
        assert exc_info.value.code == ErrorCode.INVALID_INTEGER
        assert exc_info.value.location == SourceLocation("<test>", 1, 1)

    def test_long_run_of_leading_zeros(self):
        """Leading zeros do not count towards the limit."""
        tokens = tokenize("0" * 5000 + "1")
        assert len(tokens) == 1
        assert tokens[0].value == 1
        assert tokens[0].end.column == 5002

    def test_zero_digits_at_limit(self):
        """A zero-padded literal equal to the limit is accepted."""
        tokenizer = Tokenizer("000255", max_integer=255)
        assert tokenizer.next_token().value == 255


# =============================================================================
# Keyword and Identifier Tests
# =============================================================================

class TestKeywords:
    """Tests for keyword recognition."""

    @pytest.mark.parametrize("word,token_type", [
        ("begin", TokenType.BEGIN),
        ("end", TokenType.END),
        ("const", TokenType.CONST),
        ("var", TokenType.VAR),
        ("print", TokenType.PRINT),
    ])
    def test_keyword(self, word, token_type):
        """Each keyword produces its own token type."""
        tokens = tokenize(word)
        assert len(tokens) == 1
        assert tokens[0].type == token_type
        assert tokens[0].value == word

    def test_keywords_are_case_sensitive(self):
        """'Begin' is an identifier, not the keyword."""
        tokens = tokenize("Begin")
        assert tokens[0].type == TokenType.IDENT

    def test_keyword_prefix_is_identifier(self):
        """A word that merely starts with a keyword is an identifier."""
        tokens = tokenize("beginning var1")
        assert tokens[0].type == TokenType.IDENT
        assert tokens[0].value == "beginning"
        assert tokens[1].type == TokenType.IDENT
        assert tokens[1].value == "var1"


# =============================================================================
# Operator Tests
# =============================================================================

class TestOperators:
    """Tests for single-character operators and delimiters."""

    def test_each_operator_has_its_own_type(self):
        """+ - * / = ; ( ) map to distinct token types."""
        tokens = tokenize("+ - * / = ; ( )")
        assert [t.type for t in tokens] == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.MULT,
            TokenType.DIV,
            TokenType.EQUAL,
            TokenType.SEMICOLON,
            TokenType.LPAREN,
            TokenType.RPAREN,
        ]
        assert [t.value for t in tokens] == list("+-*/=;()")

    def test_no_whitespace_needed(self):
        """Operators delimit tokens without surrounding spaces."""
        tokens = tokenize("a=b*(2-c);")
        assert [t.type for t in tokens] == [
            TokenType.IDENT,
            TokenType.EQUAL,
            TokenType.IDENT,
            TokenType.MULT,
            TokenType.LPAREN,
            TokenType.UINT,
            TokenType.MINUS,
            TokenType.IDENT,
            TokenType.RPAREN,
            TokenType.SEMICOLON,
        ]

    def test_invalid_character(self):
        """An unknown character raises InvalidInputError at its position."""
        with pytest.raises(InvalidInputError) as exc_info:
            tokenize("a = 1;\nb = 2 % 3;")
        error = exc_info.value
        assert error.code == ErrorCode.INVALID_INPUT
        assert error.char == "%"
        assert error.location == SourceLocation("<test>", 2, 7)
        assert error.source_line == "b = 2 % 3;"


# =============================================================================
# Position and EOF Tests
# =============================================================================

class TestPositions:
    """Tests for token ranges and end-of-input handling."""

    def test_token_range(self):
        """Tokens record their start and the position just past their end."""
        tokens = tokenize("  print")
        assert tokens[0].start == SourceLocation("<test>", 1, 3)
        assert tokens[0].end == SourceLocation("<test>", 1, 8)

    def test_multiline_positions(self):
        """Tokens on later lines report their own line."""
        tokens = tokenize("begin\n  var x;\nend")
        var_token = tokens[1]
        assert var_token.type == TokenType.VAR
        assert var_token.start.line == 2
        assert var_token.start.column == 3
        assert tokens[-1].start.line == 3

    def test_empty_source(self):
        """Empty source produces only EOF."""
        tokens = tokenize_source("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].value is None

    def test_eof_repeats(self):
        """After the input is exhausted every call returns EOF."""
        tokenizer = Tokenizer("x")
        assert tokenizer.next_token().type == TokenType.IDENT
        assert tokenizer.next_token().type == TokenType.EOF
        assert tokenizer.next_token().type == TokenType.EOF

    def test_tokenize_stops_at_eof(self):
        """tokenize() yields exactly one EOF at the end."""
        tokens = list(Tokenizer("begin end").tokenize())
        assert [t.type for t in tokens] == [TokenType.BEGIN, TokenType.END, TokenType.EOF]

    def test_tokens_are_immutable(self):
        """Token instances are frozen."""
        token = tokenize("x")[0]
        with pytest.raises(AttributeError):
            token.value = "y"

    def test_token_repr(self):
        """repr shows type, value and position."""
        assert repr(tokenize("42")[0]) == "Token(UINT, 42, 1:1)"
        assert repr(tokenize("abc")[0]) == "Token(IDENT, 'abc', 1:1)"

    def test_token_format(self):
        """format() renders a listing line with the source range."""
        line = tokenize("abc")[0].format()
        assert line.startswith("IDENT")
        assert "abc" in line
        assert line.endswith("1:1-1:4")

    def test_tokenizer_accepts_char_stream(self):
        """A tokenizer can read from an existing CharStream."""
        stream = CharStream("var", "s.pl0")
        token = Tokenizer(stream).next_token()
        assert isinstance(token, Token)
        assert token.start.filename == "s.pl0"
