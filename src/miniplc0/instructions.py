"""
Stack Machine Instructions
==========================

The instruction set emitted by the analyser. Programs compile to a flat
list of Instruction values that a stack-machine interpreter executes in
order.

Instruction Set
---------------
| Opcode | Operand | Effect                                   |
|--------|---------|------------------------------------------|
| LIT    | value   | push literal value                       |
| LOD    | offset  | push the value in stack slot offset      |
| STO    | offset  | pop a value into stack slot offset       |
| ADD    |         | pop right, pop left, push left + right   |
| SUB    |         | pop right, pop left, push left - right   |
| MUL    |         | pop right, pop left, push left * right   |
| DIV    |         | pop right, pop left, push left / right   |
| WRT    |         | pop a value and write it to the output   |

Text Form
---------
Each instruction renders as its opcode followed by the operand, if any:

    LIT 1
    LOD 0
    ADD
    WRT
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional


class Operation(Enum):
    """Stack machine opcodes."""

    LIT = auto()    # push literal
    LOD = auto()    # push stack slot
    STO = auto()    # pop into stack slot
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    WRT = auto()    # pop and print

    @property
    def has_operand(self) -> bool:
        """True for opcodes that take an integer operand."""
        return self in (Operation.LIT, Operation.LOD, Operation.STO)


@dataclass(frozen=True)
class Instruction:
    """
    One stack machine instruction.

    Attributes:
        operation: The opcode
        operand: Literal value or stack offset; None for opcodes without one
    """
    operation: Operation
    operand: Optional[int] = None

    def __post_init__(self):
        if self.operation.has_operand and self.operand is None:
            raise ValueError(f"{self.operation.name} requires an operand")
        if not self.operation.has_operand and self.operand is not None:
            raise ValueError(f"{self.operation.name} takes no operand")

    def __str__(self) -> str:
        if self.operand is None:
            return self.operation.name
        return f"{self.operation.name} {self.operand}"


def format_instructions(instructions: Iterable[Instruction]) -> str:
    """Render instructions one per line in text form."""
    return "".join(f"{instruction}\n" for instruction in instructions)
