"""
macroasm Target Package
=======================

Definitions of the base instruction set the macro expander lowers to:
fixed-role registers, bare opcodes, and the lexical rules for register and
integer operands.

Usage:
    from macroasm.target import Register, Opcode, move, is_register
"""

from macroasm.target.isa import (
    # Core types
    Register,
    Opcode,
    # Lexical rules
    INPUT_TOKEN,
    REGISTER_PATTERN,
    INTEGER_PATTERN,
    INT32_MIN,
    INT32_MAX,
    # Helpers
    is_register,
    is_int32,
    move,
)

__all__ = [
    "Register",
    "Opcode",
    "INPUT_TOKEN",
    "REGISTER_PATTERN",
    "INTEGER_PATTERN",
    "INT32_MIN",
    "INT32_MAX",
    "is_register",
    "is_int32",
    "move",
]
