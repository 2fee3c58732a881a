"""
Symbol Table
============

The flat symbol table shared by an entire miniplc0 program. Every
declared name gets a stack offset; offsets are handed out in declaration
order starting at 0 and never reused within one compilation.

The only mutation an entry ever sees after creation is the one-way
transition from uninitialized to initialized.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from miniplc0.errors import DuplicateDeclarationError, SourceLocation


@dataclass
class SymbolEntry:
    """
    Information recorded for one declared name.

    Attributes:
        is_constant: True for names declared with 'const'
        is_initialized: True once the name holds a value
        stack_offset: Stack slot reserved for the name
        location: Where the name was declared
    """
    is_constant: bool
    is_initialized: bool
    stack_offset: int
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Mapping of identifier to SymbolEntry for one compilation.

    Example:
        table = SymbolTable()
        table.add("a", is_constant=True, is_initialized=True)   # offset 0
        table.add("b", is_constant=False, is_initialized=False) # offset 1
        table.mark_initialized("b")
    """

    def __init__(self):
        self._entries: dict[str, SymbolEntry] = {}
        self._next_offset = 0

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, name: str) -> Optional[SymbolEntry]:
        """Return the entry for a name, or None if it is not declared."""
        return self._entries.get(name)

    def add(
        self,
        name: str,
        is_constant: bool,
        is_initialized: bool,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> SymbolEntry:
        """
        Declare a new name and reserve the next stack offset for it.

        Args:
            name: Identifier being declared
            is_constant: True for a 'const' declaration
            is_initialized: True if the declaration provides a value
            location: Declaration site (for diagnostics)
            source_line: Source text of the declaration (for diagnostics)

        Returns:
            The newly created entry

        Raises:
            DuplicateDeclarationError: If the name is already declared
        """
        self.check_undeclared(name, location, source_line)

        entry = SymbolEntry(
            is_constant=is_constant,
            is_initialized=is_initialized,
            stack_offset=self._next_offset,
            location=location,
        )
        self._next_offset += 1
        self._entries[name] = entry
        return entry

    def check_undeclared(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ) -> None:
        """Raise DuplicateDeclarationError if the name is already declared."""
        existing = self._entries.get(name)
        if existing is not None:
            raise DuplicateDeclarationError(
                name,
                location=location,
                original_location=existing.location,
                source_line=source_line,
            )

    def mark_initialized(self, name: str) -> SymbolEntry:
        """
        Record that a declared name now holds a value.

        The flag only ever moves from False to True.

        Raises:
            KeyError: If the name has not been declared
        """
        entry = self._entries[name]
        entry.is_initialized = True
        return entry

    @property
    def next_offset(self) -> int:
        """Offset the next declared name will receive."""
        return self._next_offset

    def offsets(self) -> dict[str, int]:
        """Return a name -> stack offset mapping in declaration order."""
        return {name: entry.stack_offset for name, entry in self._entries.items()}
