"""
Label Resolution
================

This module implements the two linked passes that turn symbolic labels into
instruction indices:

1. **Label map**: walk the expanded text once, recording the instruction
   index each line would occupy, then keep only the ``@name`` lines.
2. **Substitution**: rewrite every ``$name`` line as ``<index> # $name``.

Instruction Slots
-----------------
Empty lines, comments (``#``) and label definitions (``@``) do not occupy an
instruction slot; every other line does, including ``$name`` reference lines.
Because a definition's recorded index is taken before the counter moves, a
label points at the next real instruction after it, or one past the last
instruction when it is the last thing in the program.

Example::

    @start          -> start = 0
    reg1_to_reg1    index 0
    $start          index 1   -> "0 # $start"
    jnz             index 2
    @end            -> end = 3

Unresolved references are left unchanged and duplicate definitions
overwrite earlier ones, unless strict checking is requested.
"""

import difflib
import logging

from macroasm.assembler.parser import COMMENT_SIGIL, LABEL_DEF_SIGIL, LABEL_REF_SIGIL
from macroasm.errors import DuplicateSymbolError, UndefinedSymbolError


logger = logging.getLogger(__name__)


# =============================================================================
# Position Counting
# =============================================================================

def occupies_slot(line: str) -> bool:
    """
    Check whether a line takes up an instruction slot in the final listing.

    Args:
        line: An expanded line

    Returns:
        False for empty, comment and label-definition lines, True otherwise
    """
    return not (
        line == ""
        or line.startswith(COMMENT_SIGIL)
        or line.startswith(LABEL_DEF_SIGIL)
    )


def compute_positions(lines: list[str]) -> list[tuple[str, int]]:
    """
    Pair every line with the instruction index current when it is reached.

    The index is recorded before it is incremented for the line itself, so
    non-slot lines share the index of the next real instruction.

    Args:
        lines: Expanded lines

    Returns:
        (line, index) pairs in source order
    """
    positions = []
    index = 0
    for line in lines:
        positions.append((line, index))
        if occupies_slot(line):
            index += 1
    return positions


# =============================================================================
# Label Table
# =============================================================================

def build_label_table(lines: list[str], strict: bool = False) -> dict[str, int]:
    """
    Build the label name -> instruction index table.

    Args:
        lines: Expanded lines
        strict: Raise on duplicate definitions instead of overwriting

    Returns:
        Mapping from bare label name to instruction index

    Raises:
        DuplicateSymbolError: In strict mode, if a label is defined twice
    """
    table: dict[str, int] = {}

    for line, index in compute_positions(lines):
        if not line.startswith(LABEL_DEF_SIGIL):
            continue
        name = line[len(LABEL_DEF_SIGIL):]
        if name in table:
            if strict:
                raise DuplicateSymbolError(name, original_index=table[name])
            logger.warning(f"label '{name}' redefined: {table[name]} -> {index}")
        table[name] = index

    logger.debug(f"Built label table with {len(table)} label(s)")
    return table


# =============================================================================
# Reference Substitution
# =============================================================================

def find_unresolved(lines: list[str], table: dict[str, int]) -> list[str]:
    """
    List label names referenced but not defined, in first-use order.

    Args:
        lines: Expanded lines
        table: Label table from build_label_table

    Returns:
        Names without the '$' sigil, each listed once
    """
    missing: list[str] = []
    for line in lines:
        if line.startswith(LABEL_REF_SIGIL):
            name = line[len(LABEL_REF_SIGIL):]
            if name not in table and name not in missing:
                missing.append(name)
    return missing


def resolve_references(lines: list[str], table: dict[str, int], strict: bool = False) -> list[str]:
    """
    Replace label reference lines with their instruction index.

    A resolved reference becomes ``"<index> # <original line>"``. An
    unresolved one is left exactly as it was.

    Args:
        lines: Expanded lines
        table: Label table from build_label_table
        strict: Raise on unresolved references instead of leaving them

    Returns:
        The rewritten lines

    Raises:
        UndefinedSymbolError: In strict mode, if a reference is unresolved
    """
    missing = find_unresolved(lines, table)
    if missing:
        if strict:
            name = missing[0]
            similar = difflib.get_close_matches(name, list(table), n=3)
            raise UndefinedSymbolError(name, similar_symbols=similar)
        for name in missing:
            logger.warning(f"reference to undefined label '{name}' left unresolved")

    resolved = []
    for line in lines:
        if line.startswith(LABEL_REF_SIGIL):
            index = table.get(line[len(LABEL_REF_SIGIL):])
            if index is not None:
                line = f"{index} # {line}"
        resolved.append(line)
    return resolved
