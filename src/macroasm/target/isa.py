"""
Target Instruction Set Definition
=================================

This module defines the lower-level, single-accumulator instruction set that
the macro expander emits. Every base instruction occupies exactly one line
and one instruction slot.

Instruction Forms
-----------------
1. **Bare opcode**: ``add``, ``sub``, ``goto``, ``jnz``, ``jz``
2. **Move**: ``<source>_to_<destination>``, e.g. ``reg4_to_reg1``
3. **Literal**: a bare signed decimal number, e.g. ``-12``. The machine
   loads it into the accumulator (``reg0``).

Fixed Registers
---------------
The macro templates use four registers with fixed roles:

| Register | Role        | Used by                                  |
|----------|-------------|------------------------------------------|
| reg0     | Accumulator | literal loads, right-hand side of a compare |
| reg1     | Left        | left arithmetic operand                  |
| reg2     | Right       | right arithmetic operand                 |
| reg3     | Compare     | value tested by a zero-immediate branch  |

Any other ``regN`` is a general-purpose register the source program may
name freely. The special operand ``in`` reads the machine's input port.
"""

import re
from enum import Enum


# =============================================================================
# Registers
# =============================================================================

class Register(str, Enum):
    """Registers with a fixed role in the expansion templates."""

    ACCUMULATOR = "reg0"
    LEFT = "reg1"
    RIGHT = "reg2"
    COMPARE = "reg3"

    def __str__(self) -> str:
        return self.value


# The operand token that reads from the input port
INPUT_TOKEN = "in"

# Lexical form of any register name
REGISTER_PATTERN = re.compile(r"reg[0-9]+")


# =============================================================================
# Opcodes
# =============================================================================

class Opcode(str, Enum):
    """Bare opcodes of the target instruction set."""

    ADD = "add"
    SUB = "sub"
    GOTO = "goto"
    JNZ = "jnz"     # jump if last result is not zero
    JZ = "jz"       # jump if last result is zero

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Numeric Literals
# =============================================================================

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Optional sign followed by decimal digits, nothing else
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# Helper Functions
# =============================================================================

def is_register(token: str) -> bool:
    """
    Check if a token has the lexical form of a register name.

    Args:
        token: The operand token

    Returns:
        True for tokens like 'reg0', 'reg12'
    """
    return REGISTER_PATTERN.fullmatch(token) is not None


def is_int32(token: str) -> bool:
    """
    Check if a token is a signed 32-bit decimal integer literal.

    Args:
        token: The operand token

    Returns:
        True if the token parses and fits in the int32 range
    """
    if INTEGER_PATTERN.fullmatch(token) is None:
        return False
    return INT32_MIN <= int(token) <= INT32_MAX


def move(source: str, destination: str) -> str:
    """
    Build a move instruction line.

    >>> move("reg4", Register.LEFT)
    'reg4_to_reg1'
    """
    return f"{source}_to_{destination}"
