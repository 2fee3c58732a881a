"""
miniplc0 Compiler Main Module
=============================

This module provides the main compiler interface. It wires the pieces
of a compilation together:

    Source → CharStream → Tokenizer → Analyser → Instructions

Usage
-----
Command line:
    $ plc0 prog.pl0 -o prog.s

Programmatic:
    >>> from miniplc0 import compile_plc0
    >>> [str(i) for i in compile_plc0('begin print(-1); end')]
    ['LIT 0', 'LIT 1', 'SUB', 'WRT']

Error Handling
--------------
Compilation stops at the first error; the CompileError raised by the
tokenizer or analyser reaches the caller unchanged.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from miniplc0.analyser import Analyser
from miniplc0.instructions import Instruction
from miniplc0.tokenizer import DEFAULT_MAX_INTEGER, Tokenizer
from miniplc0.tokens import Token

logger = logging.getLogger(__name__)


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        store_initializers: Emit STO after a var initializer and on the
                            first assignment of a variable. False keeps the
                            legacy code shape, where those values are left
                            on the stack (initializer) or dropped (first
                            assignment).
        max_integer: Largest accepted integer literal; larger literals
                     raise InvalidIntegerError.
        filename: Source name used in diagnostics when none is given.
    """
    store_initializers: bool = True
    max_integer: int = DEFAULT_MAX_INTEGER
    filename: str = "<input>"

    @classmethod
    def from_env(cls) -> "CompilerOptions":
        """
        Create CompilerOptions from environment variables.

        Environment variables (all optional):
            MINIPLC0_LEGACY_STORE: "1", "true" or "yes" disables
                                   store_initializers
            MINIPLC0_MAX_INTEGER: Largest accepted literal (integer)

        Returns:
            CompilerOptions with values from environment variables
        """
        options = cls()

        if legacy := os.environ.get("MINIPLC0_LEGACY_STORE"):
            options.store_initializers = legacy.strip().lower() not in ("1", "true", "yes")

        if max_integer := os.environ.get("MINIPLC0_MAX_INTEGER"):
            try:
                options.max_integer = int(max_integer)
            except ValueError:
                logger.warning(f"Ignoring invalid MINIPLC0_MAX_INTEGER={max_integer!r}")

        return options


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        success: True if compilation succeeded
        instructions: Generated instruction list
        symbols: Declared names mapped to their stack offsets
        token_count: Number of tokens consumed, including EOF
    """
    filename: str = ""
    success: bool = False
    instructions: list[Instruction] = field(default_factory=list)
    symbols: dict[str, int] = field(default_factory=dict)
    token_count: int = 0


class _CountingTokenizer(Tokenizer):
    """Tokenizer that counts the tokens handed to the analyser."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.count = 0

    def next_token(self) -> Token:
        token = super().next_token()
        self.count += 1
        return token


class Plc0Compiler:
    """
    miniplc0 compiler.

    Example:
        compiler = Plc0Compiler()
        result = compiler.compile_file("prog.pl0")
        for instruction in result.instructions:
            print(instruction)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    def compile_source(self, source: str, filename: Optional[str] = None) -> CompilerResult:
        """
        Compile source text to stack machine instructions.

        Args:
            source: Program source code
            filename: Source filename for error messages

        Returns:
            CompilerResult containing the instructions and symbol offsets

        Raises:
            CompileError: If compilation fails
        """
        filename = filename or self.options.filename
        logger.debug(f"Compiling {filename} ({len(source)} characters)")

        tokenizer = _CountingTokenizer(source, filename, max_integer=self.options.max_integer)
        analyser = Analyser(tokenizer, store_initializers=self.options.store_initializers)
        instructions = analyser.analyse()

        result = CompilerResult(
            filename=filename,
            success=True,
            instructions=instructions,
            symbols=analyser.symbols.offsets(),
            token_count=tokenizer.count,
        )
        logger.debug(f"Compiled {filename}: {len(instructions)} instructions")
        return result

    def compile_file(self, filepath: str | Path) -> CompilerResult:
        """
        Compile a source file.

        Raises:
            CompileError: If compilation fails
            FileNotFoundError: If source file not found
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.compile_source(source, str(filepath))

    def tokenize_source(self, source: str, filename: Optional[str] = None) -> list[Token]:
        """Tokenize source text, returning every token including EOF."""
        tokenizer = Tokenizer(
            source,
            filename or self.options.filename,
            max_integer=self.options.max_integer,
        )
        return list(tokenizer.tokenize())


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_plc0(source: str, filename: str = "<input>", **options) -> list[Instruction]:
    """
    Compile source text and return the instruction list.

    Keyword arguments are passed to CompilerOptions.

    Example:
        >>> [str(i) for i in compile_plc0('begin const a = 1; print(a); end')]
        ['LIT 1', 'LOD 0', 'WRT']
    """
    compiler = Plc0Compiler(CompilerOptions(**options))
    return compiler.compile_source(source, filename).instructions
