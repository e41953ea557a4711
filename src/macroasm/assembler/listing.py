"""
Listing Cleanup
===============

The final two pipeline stages. Label definitions become comments so they
remain visible as anchors without occupying a slot, then every empty line
is dropped to produce the compact listing.
"""

from macroasm.assembler.parser import COMMENT_SIGIL, LABEL_DEF_SIGIL


def labels_to_comments(lines: list[str]) -> list[str]:
    """
    Turn every ``@name`` line into ``#name``.

    Args:
        lines: Lines after reference substitution

    Returns:
        The rewritten lines
    """
    return [
        COMMENT_SIGIL + line[len(LABEL_DEF_SIGIL):] if line.startswith(LABEL_DEF_SIGIL) else line
        for line in lines
    ]


def remove_blank_lines(lines: list[str]) -> list[str]:
    """Drop every empty line. Applying this twice is the same as once."""
    return [line for line in lines if line != ""]
