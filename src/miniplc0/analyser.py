"""
miniplc0 Recursive Descent Analyser
===================================

This module parses miniplc0 programs, checks them against the
declaration rules and generates stack machine code, all in a single
left-to-right pass. No syntax tree is built: each grammar procedure emits
its instructions as soon as it has recognised the construct.

Grammar (EBNF)
--------------
program     ::= 'begin' main 'end' EOF
main        ::= const_decl* var_decl* statement*
const_decl  ::= 'const' IDENT '=' const_expr ';'
var_decl    ::= 'var' IDENT ('=' expr)? ';'
statement   ::= assignment | output | ';'
assignment  ::= IDENT '=' expr ';'
output      ::= 'print' '(' expr ')' ';'
const_expr  ::= ('+' | '-')? UINT
expr        ::= item (('+' | '-') item)*
item        ::= factor (('*' | '/') factor)*
factor      ::= ('+' | '-')? (IDENT | UINT | '(' expr ')')

Every production is selected by one token of lookahead. The analyser
owns that lookahead; the tokenizer only ever hands over the next token.

Code Generation
---------------
- const declaration   -> LIT value
- operand identifier  -> LOD offset
- operand literal     -> LIT value
- unary minus         -> LIT 0, <operand>, SUB
- binary operator     -> <left>, <right>, ADD|SUB|MUL|DIV
- assignment          -> <expr>, STO offset
- print               -> <expr>, WRT

Example Usage
-------------
>>> from miniplc0.tokenizer import Tokenizer
>>> from miniplc0.analyser import Analyser
>>> analyser = Analyser(Tokenizer("begin print(2 + 3 * 4); end"))
>>> [str(i) for i in analyser.analyse()]
['LIT 2', 'LIT 3', 'LIT 4', 'MUL', 'ADD', 'WRT']
"""

import logging
from typing import Optional

from miniplc0.errors import (
    AssignToConstantError,
    ExpectedTokenError,
    InvalidStatementError,
    NotDeclaredError,
    NotInitializedError,
)
from miniplc0.instructions import Instruction, Operation
from miniplc0.symbols import SymbolEntry, SymbolTable
from miniplc0.tokenizer import Tokenizer
from miniplc0.tokens import Token, TokenType

logger = logging.getLogger(__name__)


# Tokens that may start a statement
STATEMENT_START = (TokenType.IDENT, TokenType.PRINT, TokenType.SEMICOLON)

ADDITIVE_OPERATIONS = {
    TokenType.PLUS: Operation.ADD,
    TokenType.MINUS: Operation.SUB,
}

MULTIPLICATIVE_OPERATIONS = {
    TokenType.MULT: Operation.MUL,
    TokenType.DIV: Operation.DIV,
}


class Analyser:
    """
    Single-pass parser, checker and code generator.

    An Analyser compiles exactly one program; it owns the symbol table
    and the instruction list for that compilation.

    Usage:
        analyser = Analyser(Tokenizer(source, filename))
        instructions = analyser.analyse()

    Attributes:
        tokenizer: Source of tokens
        store_initializers: Emit STO after a var initializer and on a
                            variable's first assignment
        symbols: The program's symbol table
        instructions: Code emitted so far
    """

    def __init__(self, tokenizer: Tokenizer, store_initializers: bool = True):
        self.tokenizer = tokenizer
        self.store_initializers = store_initializers
        self.symbols = SymbolTable()
        self.instructions: list[Instruction] = []

        # One token of lookahead
        self._peeked: Optional[Token] = None

    def analyse(self) -> list[Instruction]:
        """
        Compile the whole program.

        Returns:
            The emitted instruction list

        Raises:
            CompileError: On the first lexical, syntax or semantic error
        """
        self._analyse_program()
        logger.debug(
            f"Analysed {self.tokenizer.stream.filename}: "
            f"{len(self.symbols)} symbols, {len(self.instructions)} instructions"
        )
        return self.instructions

    # =========================================================================
    # Token Access
    # =========================================================================

    def peek(self) -> Token:
        """Look at the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self.tokenizer.next_token()
        return self._peeked

    def next(self) -> Token:
        """Consume and return the next token."""
        token = self.peek()
        self._peeked = None
        return token

    def check(self, token_type: TokenType) -> bool:
        """Check if the next token is of the given type."""
        return self.peek().type == token_type

    def next_if(self, token_type: TokenType) -> Optional[Token]:
        """
        Consume the next token if it is of the given type.

        Returns:
            The consumed token, or None if it did not match
        """
        if self.check(token_type):
            return self.next()
        return None

    def expect(self, token_type: TokenType) -> Token:
        """
        Consume a token of the given type.

        Raises:
            ExpectedTokenError: If the next token is of another type
        """
        if self.check(token_type):
            return self.next()
        raise self._expected(token_type)

    def _expected(self, *token_types: TokenType) -> ExpectedTokenError:
        actual = self.peek()
        return ExpectedTokenError(token_types, actual, self._source_line(actual))

    def _source_line(self, token: Token) -> str:
        return self.tokenizer.stream.line_text(token.start.line)

    # =========================================================================
    # Symbol Helpers
    # =========================================================================

    def _emit(self, operation: Operation, operand: Optional[int] = None) -> None:
        self.instructions.append(Instruction(operation, operand))

    def _declare(self, name_token: Token, is_constant: bool, is_initialized: bool) -> SymbolEntry:
        entry = self.symbols.add(
            name_token.value,
            is_constant=is_constant,
            is_initialized=is_initialized,
            location=name_token.start,
            source_line=self._source_line(name_token),
        )
        kind = "const" if is_constant else "var"
        logger.debug(f"Declared {kind} '{name_token.value}' at offset {entry.stack_offset}")
        return entry

    def _check_undeclared(self, name_token: Token) -> None:
        self.symbols.check_undeclared(
            name_token.value,
            name_token.start,
            self._source_line(name_token),
        )

    def _resolve(self, name_token: Token) -> SymbolEntry:
        """Look up an identifier, raising NotDeclaredError if it is unknown."""
        entry = self.symbols.get(name_token.value)
        if entry is None:
            raise NotDeclaredError(
                name_token.value,
                name_token.start,
                self._source_line(name_token),
            )
        return entry

    # =========================================================================
    # Program Structure
    # =========================================================================

    def _analyse_program(self) -> None:
        """program ::= 'begin' main 'end' EOF"""
        self.expect(TokenType.BEGIN)
        self._analyse_main()
        self.expect(TokenType.END)
        self.expect(TokenType.EOF)

    def _analyse_main(self) -> None:
        """main ::= const_decl* var_decl* statement*"""
        self._analyse_constant_declarations()
        self._analyse_variable_declarations()
        self._analyse_statement_sequence()

    def _analyse_constant_declarations(self) -> None:
        """
        const_decl ::= 'const' IDENT '=' const_expr ';'

        The value is folded at compile time and pushed with LIT, which
        places it in the constant's stack slot.
        """
        while self.next_if(TokenType.CONST) is not None:
            name_token = self.expect(TokenType.IDENT)
            self._check_undeclared(name_token)

            self.expect(TokenType.EQUAL)
            value = self._analyse_constant_expression()
            self.expect(TokenType.SEMICOLON)

            self._declare(name_token, is_constant=True, is_initialized=True)
            self._emit(Operation.LIT, value)

    def _analyse_variable_declarations(self) -> None:
        """var_decl ::= 'var' IDENT ('=' expr)? ';'"""
        while self.next_if(TokenType.VAR) is not None:
            name_token = self.expect(TokenType.IDENT)
            self._check_undeclared(name_token)

            if self.next_if(TokenType.EQUAL) is not None:
                self._analyse_expression()
                self.expect(TokenType.SEMICOLON)
                entry = self._declare(name_token, is_constant=False, is_initialized=True)
                if self.store_initializers:
                    self._emit(Operation.STO, entry.stack_offset)
                continue

            self.expect(TokenType.SEMICOLON)
            self._declare(name_token, is_constant=False, is_initialized=False)

    # =========================================================================
    # Statements
    # =========================================================================

    def _analyse_statement_sequence(self) -> None:
        """statement_seq ::= statement*"""
        while self.peek().type in STATEMENT_START:
            self._analyse_statement()

    def _analyse_statement(self) -> None:
        """statement ::= assignment | output | ';'"""
        if self.check(TokenType.IDENT):
            self._analyse_assignment_statement()
        elif self.check(TokenType.PRINT):
            self._analyse_output_statement()
        elif self.check(TokenType.SEMICOLON):
            self.next()
        else:
            token = self.next()
            raise InvalidStatementError(token, self._source_line(token))

    def _analyse_assignment_statement(self) -> None:
        """
        assignment ::= IDENT '=' expr ';'

        The first assignment to a variable is what initializes it.
        """
        name_token = self.expect(TokenType.IDENT)
        entry = self._resolve(name_token)
        if entry.is_constant:
            raise AssignToConstantError(
                name_token.value,
                name_token.start,
                self._source_line(name_token),
            )

        self.expect(TokenType.EQUAL)
        self._analyse_expression()
        self.expect(TokenType.SEMICOLON)

        if entry.is_initialized:
            self._emit(Operation.STO, entry.stack_offset)
            return

        self.symbols.mark_initialized(name_token.value)
        if self.store_initializers:
            self._emit(Operation.STO, entry.stack_offset)

    def _analyse_output_statement(self) -> None:
        """output ::= 'print' '(' expr ')' ';'"""
        self.expect(TokenType.PRINT)
        self.expect(TokenType.LPAREN)
        self._analyse_expression()
        self.expect(TokenType.RPAREN)
        self.expect(TokenType.SEMICOLON)
        self._emit(Operation.WRT)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _analyse_constant_expression(self) -> int:
        """
        const_expr ::= ('+' | '-')? UINT

        Returns:
            The signed value of the constant
        """
        sign = 1
        if self.next_if(TokenType.MINUS) is not None:
            sign = -1
        else:
            self.next_if(TokenType.PLUS)

        token = self.expect(TokenType.UINT)
        return sign * token.value

    def _analyse_expression(self) -> None:
        """expr ::= item (('+' | '-') item)*"""
        self._analyse_item()
        while self.peek().type in ADDITIVE_OPERATIONS:
            operator = self.next()
            self._analyse_item()
            self._emit(ADDITIVE_OPERATIONS[operator.type])

    def _analyse_item(self) -> None:
        """item ::= factor (('*' | '/') factor)*"""
        self._analyse_factor()
        while self.peek().type in MULTIPLICATIVE_OPERATIONS:
            operator = self.next()
            self._analyse_factor()
            self._emit(MULTIPLICATIVE_OPERATIONS[operator.type])

    def _analyse_factor(self) -> None:
        """
        factor ::= ('+' | '-')? (IDENT | UINT | '(' expr ')')

        Unary minus is computed as 0 - operand.
        """
        negate = False
        if self.next_if(TokenType.MINUS) is not None:
            negate = True
            self._emit(Operation.LIT, 0)
        else:
            self.next_if(TokenType.PLUS)

        if self.check(TokenType.IDENT):
            name_token = self.next()
            entry = self._resolve(name_token)
            if not entry.is_initialized:
                raise NotInitializedError(
                    name_token.value,
                    name_token.start,
                    self._source_line(name_token),
                )
            self._emit(Operation.LOD, entry.stack_offset)
        elif self.check(TokenType.UINT):
            self._emit(Operation.LIT, self.next().value)
        elif self.check(TokenType.LPAREN):
            self.next()
            self._analyse_expression()
            self.expect(TokenType.RPAREN)
        else:
            raise self._expected(TokenType.IDENT, TokenType.UINT, TokenType.LPAREN)

        if negate:
            self._emit(Operation.SUB)
