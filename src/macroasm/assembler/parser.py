"""
Source Line Parser
==================

This module classifies each line of macro-assembly source into exactly one
statement type. Classification happens once per line; every later stage
matches on the statement type instead of re-testing string prefixes.

Statement Types
---------------
The parser produces these types of statements:

1. **Blank**: an empty line

2. **Comment**: a line starting with ``#``
   ```
   # main loop
   ```

3. **LabelDef**: a line starting with ``@``; the rest of the line is the name
   ```
   @loop
   ```

4. **LabelRef**: a line starting with ``$``; a jump target standing on its
   own line, normally produced by the expander
   ```
   $loop
   ```

5. **Goto**, **Jneq**, **Jeq**, **Add**, **Sub**: macro instructions
   ```
   goto $loop
   jneq reg4 3 $loop
   add reg1 in
   ```

6. **Raw**: anything else, passed through verbatim as a base instruction
   ```
   reg4_to_reg1
   ```

A macro is recognized only when the line starts, at column 1, with a word
that is exactly the macro name, so ``gotox`` and indented macros are raw
text. The ``goto`` operand is the trimmed rest of the line, possibly empty.
Branch and arithmetic macros take their leading operands and ignore any
trailing words; missing operands are an error. Operand shapes are checked
by the expander.
"""

import re
from dataclasses import dataclass, field

from macroasm.errors import OperandError, SourceLocation


# =============================================================================
# Line Sigils
# =============================================================================

COMMENT_SIGIL = "#"
LABEL_DEF_SIGIL = "@"
LABEL_REF_SIGIL = "$"


# =============================================================================
# Statement Data Classes
# =============================================================================

@dataclass(frozen=True)
class Statement:
    """
    Base class for all parsed statements.

    Attributes:
        text: The original source line, unchanged
        location: Source location for error reporting
    """
    text: str
    location: SourceLocation = field(
        default=SourceLocation("<input>", 1, 1), compare=False
    )


@dataclass(frozen=True)
class Blank(Statement):
    """Empty line."""


@dataclass(frozen=True)
class Comment(Statement):
    """Comment line (``# ...``)."""


@dataclass(frozen=True)
class LabelDef(Statement):
    """
    Label definition (``@name``).

    Attributes:
        name: Label name without the sigil
    """
    name: str = ""


@dataclass(frozen=True)
class LabelRef(Statement):
    """
    Label reference line (``$name``).

    Attributes:
        name: Label name without the sigil
    """
    name: str = ""


@dataclass(frozen=True)
class Raw(Statement):
    """Base instruction text passed through unchanged."""


@dataclass(frozen=True)
class Goto(Statement):
    """
    Unconditional jump macro: ``goto <target>``.

    Attributes:
        target: The jump operand, usually a ``$label`` token
    """
    target: str = ""


@dataclass(frozen=True)
class Branch(Statement):
    """
    Conditional branch macro: ``<op> <register> <value> <target>``.

    Attributes:
        register: Register compared against the value
        value: Integer literal the register is compared to
        target: Branch target, must be a ``$label`` token
    """
    register: str = ""
    value: str = ""
    target: str = ""


@dataclass(frozen=True)
class Jneq(Branch):
    """Branch if register is not equal to value."""


@dataclass(frozen=True)
class Jeq(Branch):
    """Branch if register is equal to value."""


@dataclass(frozen=True)
class Arithmetic(Statement):
    """
    Arithmetic macro: ``<op> <lhs> <rhs>``.

    Attributes:
        lhs: Left operand (register, ``in`` or integer literal)
        rhs: Right operand (register, ``in`` or integer literal)
    """
    lhs: str = ""
    rhs: str = ""


@dataclass(frozen=True)
class Add(Arithmetic):
    """Add macro."""


@dataclass(frozen=True)
class Sub(Arithmetic):
    """Subtract macro."""


# =============================================================================
# Macro Table
# =============================================================================

# macro name -> (statement class, operand field names)
MACROS: dict[str, tuple[type, tuple[str, ...]]] = {
    "goto": (Goto, ("target",)),
    "jneq": (Jneq, ("register", "value", "target")),
    "jeq": (Jeq, ("register", "value", "target")),
    "add": (Add, ("lhs", "rhs")),
    "sub": (Sub, ("lhs", "rhs")),
}


# =============================================================================
# Parser Functions
# =============================================================================

def _word_columns(line: str) -> list[tuple[str, int]]:
    """Return each whitespace-delimited word with its 1-based column."""
    return [(m.group(), m.start() + 1) for m in re.finditer(r"\S+", line)]


def parse_line(line: str, filename: str = "<input>", line_number: int = 1) -> Statement:
    """
    Classify one source line.

    Args:
        line: The source line, without its line terminator
        filename: Source filename for error locations
        line_number: 1-based line number for error locations

    Returns:
        The statement for this line

    Raises:
        OperandError: If a branch or arithmetic macro is missing operands
    """
    location = SourceLocation(filename, line_number, 1)

    if line == "":
        return Blank(line, location)
    if line.startswith(COMMENT_SIGIL):
        return Comment(line, location)
    if line.startswith(LABEL_DEF_SIGIL):
        return LabelDef(line, location, name=line[len(LABEL_DEF_SIGIL):])
    if line.startswith(LABEL_REF_SIGIL):
        return LabelRef(line, location, name=line[len(LABEL_REF_SIGIL):])

    words = _word_columns(line)
    if not words or words[0][1] != 1 or words[0][0] not in MACROS:
        return Raw(line, location)

    opcode = words[0][0]
    cls, fields = MACROS[opcode]

    if cls is Goto:
        return Goto(line, location, target=line[len(opcode):].strip())

    operands = [word for word, _ in words[1:]]
    if len(operands) < len(fields):
        raise OperandError(
            line,
            expected=f"{len(fields)} operand(s) for '{opcode}'",
            location=location,
            source_line=line,
        )

    # Words past the last operand are ignored
    return cls(line, location, **dict(zip(fields, operands)))


def parse_lines(lines: list[str], filename: str = "<input>") -> list[Statement]:
    """
    Classify every line of a source text.

    Args:
        lines: Source lines
        filename: Source filename for error locations

    Returns:
        One statement per input line, in order
    """
    return [
        parse_line(line, filename, number)
        for number, line in enumerate(lines, start=1)
    ]


def operand_location(statement: Statement, token: str) -> SourceLocation:
    """
    Locate an operand token within its statement for error reporting.

    The opcode itself is skipped so an operand spelled like the opcode is
    not mistaken for it.
    """
    loc = statement.location
    for word, column in _word_columns(statement.text)[1:]:
        if word == token:
            return SourceLocation(loc.filename, loc.line, column)
    return loc
