"""
Macro Assembler
===============

This package turns macro-assembly source into a flat listing of base
instructions for a single-accumulator machine.

Main Components
---------------
- **Assembler**: Orchestrates the pipeline and keeps the results of a run
- **parser**: Classifies each source line into a statement type
- **expander**: Lowers macro instructions into base instructions
- **labels**: Builds the label table and substitutes label references
- **listing**: Turns label definitions into comments, drops blank lines

Assembly Process
----------------
1. **Expansion**: each line is expanded on its own; non-macro lines pass
   through unchanged, macros may leave an empty separator line behind
2. **Label map**: one pass over the expanded text assigns instruction
   indices and collects ``@label`` positions
3. **Substitution**: ``$label`` lines become ``<index> # $label``
4. **Comments**: ``@label`` lines become ``#label``
5. **Cleanup**: empty lines are removed

Example Usage
-------------
>>> from macroasm.assembler import assemble
>>> print(assemble("add reg1 3"))
reg1_to_reg1
3
reg0_to_reg2
add

Source Syntax
-------------
- ``# text``: comment
- ``@name``: label definition
- ``goto <op>``: unconditional jump
- ``jneq <reg> <n> $name`` / ``jeq <reg> <n> $name``: conditional branch
- ``add <a> <b>`` / ``sub <a> <b>``: arithmetic on registers, ``in`` or literals
- anything else: base instruction text, copied verbatim
"""

from macroasm.assembler.assembler import Assembler, assemble, assemble_file, split_lines
from macroasm.assembler.parser import (
    Statement,
    Blank,
    Comment,
    LabelDef,
    LabelRef,
    Raw,
    Goto,
    Branch,
    Jneq,
    Jeq,
    Arithmetic,
    Add,
    Sub,
    parse_line,
    parse_lines,
)
from macroasm.assembler.expander import (
    assert_label_ref,
    assert_num,
    assert_reg,
    expand_line,
    expand_lines,
    load_operand,
)
from macroasm.assembler.labels import (
    build_label_table,
    compute_positions,
    find_unresolved,
    occupies_slot,
    resolve_references,
)
from macroasm.assembler.listing import labels_to_comments, remove_blank_lines

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    "split_lines",
    # Parser
    "Statement",
    "Blank",
    "Comment",
    "LabelDef",
    "LabelRef",
    "Raw",
    "Goto",
    "Branch",
    "Jneq",
    "Jeq",
    "Arithmetic",
    "Add",
    "Sub",
    "parse_line",
    "parse_lines",
    # Expander
    "assert_label_ref",
    "assert_num",
    "assert_reg",
    "expand_line",
    "expand_lines",
    "load_operand",
    # Labels
    "build_label_table",
    "compute_positions",
    "find_unresolved",
    "occupies_slot",
    "resolve_references",
    # Listing
    "labels_to_comments",
    "remove_blank_lines",
]
