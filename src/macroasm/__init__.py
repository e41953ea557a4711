"""
macroasm - Two-Pass Macro Assembler
===================================

This package assembles a small symbolic pseudo-assembly language into the
base instruction set of a single-accumulator machine. Macro instructions
(conditional branches, arithmetic, symbolic jumps) are expanded, labels are
resolved to instruction indices, and the result is emitted as a flat
instruction listing.

Main Components
---------------
- **assembler**: macro expansion and label resolution pipeline
- **target**: registers, opcodes and operand rules of the base instruction set
- **cli**: the ``macroasm`` command-line tool

Quick Start
-----------
Assemble a string:
    >>> from macroasm import Assembler
    >>> asm = Assembler()
    >>> listing = asm.assemble_string("jneq reg4 0 $loop\\n@loop\\n")

Or use the command-line tool:
    $ macroasm program.masm
"""

import logging

__version__ = "1.0.0"

# Library diagnostics stay silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

# =============================================================================
# Public API Exports
# =============================================================================

from macroasm.assembler import Assembler, assemble, assemble_file
from macroasm.errors import (
    MacroAsmError,
    SourceLocation,
    SourceReadError,
    AssemblerError,
    OperandError,
    UndefinedSymbolError,
    DuplicateSymbolError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "MacroAsmError",
    "SourceLocation",
    "SourceReadError",
    "AssemblerError",
    "OperandError",
    "UndefinedSymbolError",
    "DuplicateSymbolError",
]
