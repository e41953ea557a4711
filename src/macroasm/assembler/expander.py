"""
Macro Expander
==============

This module lowers macro instructions into base instructions. Each source
line is expanded on its own, with no context from neighbouring lines; lines
that are not macros come back unchanged.

Expansion Templates
-------------------
``goto <op>``::

    <op>
    goto

``jneq <reg> 0 $label`` (``jeq`` ends in ``jz``)::

    <reg>_to_reg3
    $label
    jnz

``jneq <reg> <n> $label`` for non-zero ``n`` (``jeq`` ends in ``jz``)::

    <reg>_to_reg1
    <n>
    reg0_to_reg2
    sub
    $label
    jnz

``add <a> <b>`` / ``sub <a> <b>``::

    <load a into reg1>
    <load b into reg2>
    add

Operand loads:

| Operand   | Lines                     |
|-----------|---------------------------|
| ``in``    | ``in_to_<dst>``           |
| ``regN``  | ``regN_to_<dst>``         |
| literal   | ``<n>``, ``reg0_to_<dst>`` |

Branch and arithmetic expansions end with one empty separator line. The
separator never occupies an instruction slot and is removed at the end of
the pipeline.

When the comparand of a branch is literally zero, the subtraction is
skipped: the register is moved into reg3 and the jump tests it directly.
"""

import logging

from macroasm.assembler.parser import (
    LABEL_REF_SIGIL,
    Add,
    Arithmetic,
    Branch,
    Goto,
    Jeq,
    Jneq,
    Statement,
    Sub,
    operand_location,
    parse_line,
)
from macroasm.errors import OperandError
from macroasm.target import (
    INPUT_TOKEN,
    Opcode,
    Register,
    is_int32,
    is_register,
    move,
)


logger = logging.getLogger(__name__)

# Terminal jump opcode for each branch macro
BRANCH_OPCODES: dict[type, Opcode] = {
    Jneq: Opcode.JNZ,
    Jeq: Opcode.JZ,
}

# Arithmetic opcode for each arithmetic macro
ARITHMETIC_OPCODES: dict[type, Opcode] = {
    Add: Opcode.ADD,
    Sub: Opcode.SUB,
}

SEPARATOR = ""


# =============================================================================
# Operand Validation
# =============================================================================

def assert_num(token: str, statement: Statement | None = None) -> str:
    """
    Validate a signed 32-bit decimal integer literal.

    Args:
        token: The operand token
        statement: Statement the token came from (for error location)

    Returns:
        The token, unchanged

    Raises:
        OperandError: If the token is not a valid int32 literal
    """
    if is_int32(token):
        return token
    raise _operand_error(token, "a signed 32-bit decimal integer", statement)


def assert_reg(token: str, statement: Statement | None = None) -> str:
    """
    Validate a register name.

    Returns:
        The token, unchanged

    Raises:
        OperandError: If the token is not of the form regN
    """
    if is_register(token):
        return token
    raise _operand_error(token, "a register name such as reg4", statement)


def assert_label_ref(token: str, statement: Statement | None = None) -> str:
    """
    Validate a branch target label reference.

    Returns:
        The token, unchanged

    Raises:
        OperandError: If the token does not start with '$'
    """
    if token.startswith(LABEL_REF_SIGIL):
        return token
    raise _operand_error(token, "a label reference such as $loop", statement)


def _operand_error(token: str, expected: str, statement: Statement | None) -> OperandError:
    if statement is None:
        return OperandError(token, expected=expected)
    return OperandError(
        token,
        expected=expected,
        location=operand_location(statement, token),
        source_line=statement.text,
    )


# =============================================================================
# Expansion Templates
# =============================================================================

def load_operand(token: str, destination: Register, statement: Statement | None = None) -> list[str]:
    """
    Lower one arithmetic operand into lines that load it into a register.

    Args:
        token: 'in', a register name, or an integer literal
        destination: Register receiving the value
        statement: Statement the token came from (for error location)

    Returns:
        Base instruction lines

    Raises:
        OperandError: If the token is neither 'in', a register nor an int32
    """
    if token == INPUT_TOKEN:
        return [move(INPUT_TOKEN, destination)]
    if is_register(token):
        return [move(token, destination)]
    # Literal lines load into the accumulator, which is then moved
    return [assert_num(token, statement), move(Register.ACCUMULATOR, destination)]


def expand_goto(statement: Goto) -> list[str]:
    """Expand ``goto <op>`` into the operand line and the jump."""
    return [statement.target, str(Opcode.GOTO)]


def expand_branch(statement: Branch) -> list[str]:
    """
    Expand a ``jneq`` / ``jeq`` macro.

    Raises:
        OperandError: On a bad register, value or target token
    """
    register = assert_reg(statement.register, statement)
    value = assert_num(statement.value, statement)
    target = assert_label_ref(statement.target, statement)
    jump = str(BRANCH_OPCODES[type(statement)])

    if int(value) == 0:
        return [
            move(register, Register.COMPARE),
            target,
            jump,
            SEPARATOR,
        ]

    return [
        move(register, Register.LEFT),
        value,
        move(Register.ACCUMULATOR, Register.RIGHT),
        str(Opcode.SUB),
        target,
        jump,
        SEPARATOR,
    ]


def expand_arithmetic(statement: Arithmetic) -> list[str]:
    """
    Expand an ``add`` / ``sub`` macro.

    Raises:
        OperandError: On a malformed literal operand
    """
    lines = load_operand(statement.lhs, Register.LEFT, statement)
    lines += load_operand(statement.rhs, Register.RIGHT, statement)
    lines.append(str(ARITHMETIC_OPCODES[type(statement)]))
    lines.append(SEPARATOR)
    return lines


def expand_statement(statement: Statement) -> list[str]:
    """
    Expand a parsed statement into base instruction lines.

    Non-macro statements expand to their original text.
    """
    if isinstance(statement, Goto):
        return expand_goto(statement)
    if isinstance(statement, Branch):
        return expand_branch(statement)
    if isinstance(statement, Arithmetic):
        return expand_arithmetic(statement)
    return [statement.text]


# =============================================================================
# Public Interface
# =============================================================================

def expand_line(line: str, filename: str = "<input>", line_number: int = 1) -> list[str]:
    """
    Expand a single source line.

    Args:
        line: Source line without its terminator
        filename: Source filename for error locations
        line_number: 1-based line number for error locations

    Returns:
        Zero or more output lines (a separator counts as one empty line)

    Raises:
        OperandError: If a macro operand fails validation
    """
    return expand_statement(parse_line(line, filename, line_number))


def expand_lines(lines: list[str], filename: str = "<input>") -> list[str]:
    """
    Expand every line of a source text.

    Stops at the first validation error; no partial result is returned.

    Args:
        lines: Source lines
        filename: Source filename for error locations

    Returns:
        The expanded lines, in order

    Raises:
        OperandError: If any macro operand fails validation
    """
    expanded: list[str] = []
    macro_count = 0

    for number, line in enumerate(lines, start=1):
        statement = parse_line(line, filename, number)
        output = expand_statement(statement)
        if isinstance(statement, (Goto, Branch, Arithmetic)):
            macro_count += 1
            logger.debug(f"{filename}:{number}: expanded '{line}' into {len(output)} line(s)")
        expanded.extend(output)

    logger.debug(f"Expanded {macro_count} macro(s): {len(lines)} -> {len(expanded)} lines")
    return expanded
