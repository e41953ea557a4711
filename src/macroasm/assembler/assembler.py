"""
Macro Assembler - Main Interface
================================

This module provides the main Assembler class, which is the primary interface
for assembling macro source. It runs the five pipeline stages in order:

1. Expand macros into base instructions
2. Build the label table from the expanded text
3. Substitute label references with instruction indices
4. Turn label definitions into comments
5. Remove blank lines

Example Usage
-------------
>>> from macroasm.assembler import Assembler
>>> asm = Assembler()
>>> print(asm.assemble_string('''@start
... add reg1 1
... jneq reg1 5 $start
... '''))
#start
reg1_to_reg1
1
reg0_to_reg2
add
reg1_to_reg1
5
reg0_to_reg2
sub
0 # $start
jnz

Command-Line Usage
------------------
    $ macroasm loop.masm
    $ macroasm loop.masm -o loop.lst -s loop.sym
"""

import logging
from pathlib import Path

from macroasm.assembler.expander import expand_lines
from macroasm.assembler.labels import build_label_table, resolve_references
from macroasm.assembler.listing import labels_to_comments, remove_blank_lines
from macroasm.errors import SourceReadError


logger = logging.getLogger(__name__)


def split_lines(source: str) -> list[str]:
    """
    Split source text into lines.

    Lines end at '\\n'; a '\\r' before it is dropped. A final terminator does
    not start an extra empty line.
    """
    if source == "":
        return []
    lines = source.split("\n")
    if source.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class Assembler:
    """
    Main macro assembler class.

    Each call to assemble_string() or assemble_file() is independent; the
    results of the most recent run are available through the getters.

    Attributes:
        strict: If True, unresolved references and duplicate labels are
                errors instead of being passed through / overwritten
    """

    def __init__(self, strict: bool = False):
        """
        Initialize the assembler.

        Args:
            strict: Reject unresolved label references and duplicate labels
        """
        self._strict = strict
        self._expanded: list[str] = []
        self._symbols: dict[str, int] = {}
        self._listing: list[str] = []

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> str:
        """
        Assemble source code from a string.

        Args:
            source: Macro assembly source
            filename: Virtual filename for error messages

        Returns:
            The final listing, lines joined with '\\n'

        Raises:
            OperandError: If a macro operand fails validation
            UndefinedSymbolError: In strict mode, on an unresolved reference
            DuplicateSymbolError: In strict mode, on a redefined label
        """
        self._expanded = []
        self._symbols = {}
        self._listing = []

        lines = split_lines(source)
        logger.debug(f"Assembling {filename}: {len(lines)} source line(s)")

        expanded = expand_lines(lines, filename)
        symbols = build_label_table(expanded, strict=self._strict)
        resolved = resolve_references(expanded, symbols, strict=self._strict)
        listing = remove_blank_lines(labels_to_comments(resolved))

        self._expanded = expanded
        self._symbols = symbols
        self._listing = listing

        logger.debug(f"Generated {len(listing)} listing line(s)")
        return "\n".join(listing)

    def assemble_file(self, filepath: str | Path) -> str:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to the source file

        Returns:
            The final listing

        Raises:
            SourceReadError: If the file cannot be read
            OperandError: If a macro operand fails validation
        """
        filepath = Path(filepath)

        try:
            source = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(str(filepath), e) from e

        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def is_strict(self) -> bool:
        """Return True if strict label checking is enabled."""
        return self._strict

    def get_expanded(self) -> list[str]:
        """
        Get the macro-expanded lines of the last run.

        Returns:
            Expanded lines, including blank separators
        """
        return list(self._expanded)

    def get_symbols(self) -> dict[str, int]:
        """
        Get the label table of the last run.

        Returns:
            Dictionary mapping label names to instruction indices
        """
        return dict(self._symbols)

    def get_listing(self) -> list[str]:
        """Get the final listing lines of the last run."""
        return list(self._listing)

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write the final listing to a file, newline-terminated.

        Args:
            filepath: Output file path
        """
        text = "\n".join(self._listing)
        Path(filepath).write_text(text + "\n" if text else "", encoding="utf-8")
        logger.debug(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write the label table, ordered by index then name.

        Args:
            filepath: Output file path
        """
        lines = ["# label = instruction index"]
        for name, index in sorted(self._symbols.items(), key=lambda item: (item[1], item[0])):
            lines.append(f"{name} = {index}")
        Path(filepath).write_text("\n".join(lines) + "\n", encoding="utf-8")
        logger.debug(f"Wrote {len(self._symbols)} symbol(s) to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>", strict: bool = False) -> str:
    """
    Convenience function to assemble source code.

    Args:
        source: Macro assembly source
        filename: Virtual filename for errors
        strict: Enable strict label checking

    Returns:
        The final listing
    """
    return Assembler(strict=strict).assemble_string(source, filename)


def assemble_file(filepath: str | Path, strict: bool = False) -> str:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file
        strict: Enable strict label checking

    Returns:
        The final listing
    """
    return Assembler(strict=strict).assemble_file(filepath)
