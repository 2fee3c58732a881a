"""
miniplc0 - Single-Pass Compiler for a PL/0 Subset
=================================================

This package compiles programs written in miniplc0, a small subset of
PL/0, into instructions for a simple stack machine.

    begin
        const a = 1;
        var b;
        b = a + 2;
        print(b);
    end

The language has one type (signed integer) and one flat scope: constant
and variable declarations, assignment, print, and arithmetic with
+ - * / and parentheses.

Main Components
---------------
- **tokenizer**: character-level scanner producing tokens on demand
- **analyser**: recursive descent parser that checks declarations and
  emits code in the same pass
- **symbols**: flat symbol table assigning stack offsets
- **instructions**: the LIT/LOD/STO/ADD/SUB/MUL/DIV/WRT instruction set
- **cli**: the plc0 command-line tool

Quick Start
-----------
    >>> from miniplc0 import compile_plc0, format_instructions
    >>> code = compile_plc0("begin print(2 + 3 * 4); end")
    >>> print(format_instructions(code), end="")
    LIT 2
    LIT 3
    LIT 4
    MUL
    ADD
    WRT
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from miniplc0.errors import (
    PL0Error,
    SourceLocation,
    ErrorCode,
    CompileError,
    TokenizeError,
    InvalidInputError,
    InvalidIntegerError,
    AnalyzeError,
    ExpectedTokenError,
    DuplicateDeclarationError,
    NotDeclaredError,
    NotInitializedError,
    AssignToConstantError,
    InvalidStatementError,
)
from miniplc0.chars import CharStream
from miniplc0.tokens import Token, TokenType, KEYWORDS
from miniplc0.tokenizer import Tokenizer, tokenize_source
from miniplc0.symbols import SymbolEntry, SymbolTable
from miniplc0.instructions import Instruction, Operation, format_instructions
from miniplc0.analyser import Analyser
from miniplc0.compiler import (
    CompilerOptions,
    CompilerResult,
    Plc0Compiler,
    compile_plc0,
)

__all__ = [
    # Version
    "__version__",
    # Main API
    "Plc0Compiler",
    "CompilerOptions",
    "CompilerResult",
    "compile_plc0",
    # Errors
    "PL0Error",
    "SourceLocation",
    "ErrorCode",
    "CompileError",
    "TokenizeError",
    "InvalidInputError",
    "InvalidIntegerError",
    "AnalyzeError",
    "ExpectedTokenError",
    "DuplicateDeclarationError",
    "NotDeclaredError",
    "NotInitializedError",
    "AssignToConstantError",
    "InvalidStatementError",
    # Tokenizer
    "CharStream",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Tokenizer",
    "tokenize_source",
    # Analyser
    "Analyser",
    "SymbolEntry",
    "SymbolTable",
    # Instructions
    "Instruction",
    "Operation",
    "format_instructions",
]
