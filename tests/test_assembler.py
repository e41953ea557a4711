# =============================================================================
# test_assembler.py - Full Assembler Integration Tests
# =============================================================================
# End-to-end tests for the complete pipeline, from macro source to listing.
#
# Test coverage includes:
#   - Reference programs (single add, zero branch, counting loop)
#   - Label resolution matching final listing positions
#   - Fatal operand errors with no partial output
#   - File input and I/O failures
#   - Strict label checking
#   - Listing and symbol file output
# =============================================================================

import pytest

from macroasm import Assembler, assemble, assemble_file
from macroasm.assembler import split_lines
from macroasm.errors import (
    DuplicateSymbolError,
    OperandError,
    SourceReadError,
    UndefinedSymbolError,
)


LOOP_SOURCE = """@start
add reg1 1
jneq reg1 5 $start
"""

LOOP_LISTING = [
    "#start",
    "reg1_to_reg1",
    "1",
    "reg0_to_reg2",
    "add",
    "reg1_to_reg1",
    "5",
    "reg0_to_reg2",
    "sub",
    "0 # $start",
    "jnz",
]


def real_index_of_labels(listing: list[str]) -> dict[str, int]:
    """
    Compute, from a final listing, the index of the instruction that follows
    each '#name' anchor, counting only non-comment lines.
    """
    positions = {}
    index = 0
    for line in listing:
        if line.startswith("#"):
            positions.setdefault(line[1:], index)
        else:
            index += 1
    return positions


# =============================================================================
# Reference Program Tests
# =============================================================================

class TestReferencePrograms:
    """Test the reference programs end to end."""

    def test_single_add(self):
        """add with a register and a literal gives four instructions."""
        assert assemble("add reg1 3\n") == "reg1_to_reg1\n3\nreg0_to_reg2\nadd"

    def test_zero_branch_expansion(self):
        """jneq against zero expands to three lines plus a separator."""
        asm = Assembler()
        asm.assemble_string("jneq reg4 0 $loop\n")
        assert asm.get_expanded() == ["reg4_to_reg3", "$loop", "jnz", ""]
        # $loop is never defined, so the reference is left as-is
        assert asm.get_listing() == ["reg4_to_reg3", "$loop", "jnz"]

    def test_counting_loop(self):
        asm = Assembler()
        listing = asm.assemble_string(LOOP_SOURCE)
        assert listing == "\n".join(LOOP_LISTING)
        assert asm.get_symbols() == {"start": 0}

    def test_fatal_operand_error(self):
        asm = Assembler()
        with pytest.raises(OperandError) as exc_info:
            asm.assemble_string("add reg1 xyz\n")
        assert exc_info.value.message == "parse error on xyz"
        assert asm.get_listing() == []


# =============================================================================
# Pass-Through Tests
# =============================================================================

class TestPassThrough:
    """Test lines that are neither expanded fully nor rejected."""

    def test_bare_goto_after_literal(self):
        """A bare goto jumps to a hand-written literal target."""
        asm = Assembler()
        assert asm.assemble_string("5\ngoto\n") == "5\ngoto"
        assert asm.get_expanded() == ["5", "", "goto"]

    def test_trailing_words_after_branch(self):
        listing = assemble("jneq reg4 3 $l extra\n@l\n")
        assert listing == "reg4_to_reg1\n3\nreg0_to_reg2\nsub\n6 # $l\njnz\n#l"

    def test_indented_macro_unchanged(self):
        assert assemble("  add reg1 xyz\n") == "  add reg1 xyz"


# =============================================================================
# Label Resolution Tests
# =============================================================================

class TestLabelResolution:
    """Test that label indices match final listing positions."""

    def test_forward_reference(self):
        source = "jeq reg4 0 $skip\nadd reg1 1\n@skip\nsub reg1 in\n"
        asm = Assembler()
        asm.assemble_string(source)
        assert asm.get_listing() == [
            "reg4_to_reg3",
            "7 # $skip",
            "jz",
            "reg1_to_reg1",
            "1",
            "reg0_to_reg2",
            "add",
            "#skip",
            "reg1_to_reg1",
            "in_to_reg2",
            "sub",
        ]

    def test_label_at_end_of_program(self):
        assert assemble("goto $end\n@end\n") == "2 # $end\ngoto\n#end"

    def test_comments_and_blank_lines_do_not_count(self):
        source = "# header\n\n@top\n\ngoto $top\n"
        assert assemble(source) == "# header\n#top\n0 # $top\ngoto"

    def test_indices_match_listing_positions(self):
        source = """# two loops
@outer
add reg4 in
@inner
sub reg5 1
jneq reg5 0 $inner
jeq reg4 10 $done
goto $outer
@done
halt
"""
        asm = Assembler()
        asm.assemble_string(source)
        symbols = asm.get_symbols()
        positions = real_index_of_labels(asm.get_listing())
        assert symbols == {name: positions[name] for name in symbols}
        assert set(symbols) == {"outer", "inner", "done"}

    def test_raw_reference_lines_are_resolved(self):
        """Hand-written $name lines resolve like expanded ones."""
        assert assemble("@a\n$a\njnz\n") == "#a\n0 # $a\njnz"

    def test_duplicate_label_last_wins(self):
        listing = assemble("@a\nx\n@a\ny\ngoto $a\n")
        assert "1 # $a" in listing.split("\n")


# =============================================================================
# Strict Mode Tests
# =============================================================================

class TestStrictMode:
    """Test opt-in rejection of unresolved and duplicate labels."""

    def test_default_is_lenient(self):
        assert not Assembler().is_strict()
        assert assemble("goto $nowhere") == "$nowhere\ngoto"

    def test_undefined_label(self):
        with pytest.raises(UndefinedSymbolError):
            assemble("goto $nowhere", strict=True)

    def test_duplicate_label(self):
        with pytest.raises(DuplicateSymbolError):
            Assembler(strict=True).assemble_string("@a\nx\n@a\n")

    def test_clean_program_passes(self):
        assert assemble(LOOP_SOURCE, strict=True) == "\n".join(LOOP_LISTING)


# =============================================================================
# Source Text Tests
# =============================================================================

class TestSourceText:
    """Test splitting of source text into lines."""

    def test_empty_source(self):
        assert split_lines("") == []
        assert assemble("") == ""

    def test_trailing_newline(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self):
        assert split_lines("a\nb") == ["a", "b"]

    def test_crlf(self):
        assert split_lines("add reg1 3\r\n@x\r\n") == ["add reg1 3", "@x"]
        assert assemble("add reg1 3\r\n") == "reg1_to_reg1\n3\nreg0_to_reg2\nadd"

    def test_interior_blank_lines_kept(self):
        assert split_lines("a\n\nb\n") == ["a", "", "b"]


# =============================================================================
# File I/O Tests
# =============================================================================

class TestFileIO:
    """Test assembling from and writing to files."""

    def test_assemble_from_file(self, tmp_path):
        source_file = tmp_path / "loop.masm"
        source_file.write_text(LOOP_SOURCE)
        assert assemble_file(source_file) == "\n".join(LOOP_LISTING)

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "missing.masm"
        with pytest.raises(SourceReadError) as exc_info:
            assemble_file(missing)
        assert isinstance(exc_info.value.reason, FileNotFoundError)
        assert str(exc_info.value) == str(exc_info.value.reason)

    def test_directory_is_not_readable(self, tmp_path):
        with pytest.raises(SourceReadError):
            Assembler().assemble_file(tmp_path)

    def test_error_names_source_file(self, tmp_path):
        source_file = tmp_path / "bad.masm"
        source_file.write_text("# ok\nsub reg1 1.5\n")
        with pytest.raises(OperandError) as exc_info:
            assemble_file(source_file)
        assert exc_info.value.location.filename == str(source_file)
        assert exc_info.value.location.line == 2

    def test_write_listing(self, tmp_path):
        asm = Assembler()
        asm.assemble_string(LOOP_SOURCE)
        out = tmp_path / "loop.lst"
        asm.write_listing(out)
        assert out.read_text() == "\n".join(LOOP_LISTING) + "\n"

    def test_write_symbols(self, tmp_path):
        asm = Assembler()
        asm.assemble_string("@b\nx\n@a\n@c\ny\n")
        out = tmp_path / "prog.sym"
        asm.write_symbols(out)
        assert out.read_text() == "# label = instruction index\nb = 0\na = 1\nc = 1\n"
