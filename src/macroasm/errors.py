"""
macroasm Error Hierarchy
========================

This module defines the exception hierarchy for the macro assembler.
All exceptions inherit from MacroAsmError, allowing callers to catch all
assembler-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
MacroAsmError (base)
├── SourceReadError - source file missing or unreadable
└── AssemblerError (assembly-related)
    ├── OperandError - malformed register, integer or label-reference token
    ├── UndefinedSymbolError - reference to undefined label (strict mode)
    └── DuplicateSymbolError - label defined multiple times (strict mode)

Two Failure Kinds
-----------------
A SourceReadError is an I/O failure and is recovered at the command-line
boundary: the OS message is printed and the process exits normally.

An OperandError is a validation failure. It is fatal: the first one aborts
the whole run and no partial listing is produced. Its short message is
always exactly ``parse error on <token>``; the location and hint are only
shown by the full formatted form (``str(error)``).
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class MacroAsmError(Exception):
    """
    Base exception for all macroasm errors.

        try:
            assembler.assemble_file("program.masm")
        except MacroAsmError as e:
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
# I/O Failure
# =============================================================================

class SourceReadError(MacroAsmError):
    """
    The source file could not be read.

    Wraps the underlying OSError. ``str()`` of this exception is the
    platform error text, unchanged, so the CLI can print it as-is.

    Attributes:
        path: The path that was being read
        reason: The original OSError (or decode error)
    """

    def __init__(self, path: str, reason: Exception):
        self.path = path
        self.reason = reason
        super().__init__(str(reason))


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(MacroAsmError):
    """
    Base exception for all assembly errors.

    Attributes:
        message: The short error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

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
            loop.masm:3:10: error: parse error on 5x
                jneq reg4 5x $loop
                          ^
            hint: expected a signed 32-bit decimal integer
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


class OperandError(AssemblerError):
    """
    A macro operand failed token-shape validation.

    Raised by the macro expander when:
        - a register operand is not of the form regN
        - a numeric operand is not a signed 32-bit decimal integer
        - a branch target does not carry the '$' reference sigil
        - a macro has too few or too many operands

    Attributes:
        token: The offending token text
        expected: Short description of what was expected
    """

    def __init__(
        self,
        token: str,
        expected: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        self.expected = expected

        hint = f"expected {expected}" if expected else None

        super().__init__(
            f"parse error on {token}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UndefinedSymbolError(AssemblerError):
    """
    Reference to a label that is never defined.

    Only raised in strict mode; by default unresolved references are left
    in the listing unchanged. Similarly-named labels are offered as a hint.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        similar_symbols: Optional[list[str]] = None,
    ):
        self.symbol = symbol
        self.similar_symbols = similar_symbols or []

        hint = None
        if self.similar_symbols:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_symbols[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"undefined label '{symbol}'",
            location=location,
            hint=hint,
        )


class DuplicateSymbolError(AssemblerError):
    """
    Label defined more than once.

    Only raised in strict mode; by default the last definition wins.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_index: Optional[int] = None,
    ):
        self.symbol = symbol
        self.original_index = original_index

        hint = None
        if original_index is not None:
            hint = f"'{symbol}' was first defined at instruction {original_index}"

        super().__init__(
            f"duplicate label '{symbol}'",
            location=location,
            hint=hint,
        )
