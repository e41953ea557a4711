"""
macroasm - Macro Assembler Command-Line Interface
=================================================

This module implements the command-line interface for the macro assembler.

Usage Examples
--------------
Print the listing:
    $ macroasm loop.masm

Write listing and symbol table to files:
    $ macroasm loop.masm -o loop.lst -s loop.sym

Reject unresolved or duplicate labels:
    $ macroasm --strict loop.masm

Verbose mode (debug log on stderr):
    $ macroasm -v loop.masm
"""

import logging
from pathlib import Path
from typing import Optional

import click

from macroasm import __version__
from macroasm.assembler import Assembler
from macroasm.cli.errors import handle_cli_exception


USAGE_HINT = "Usage: macroasm <source-file>"


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the listing to FILE instead of standard output",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the label table to FILE",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat unresolved label references and duplicate labels as errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug log on stderr)",
)
@click.version_option(version=__version__, prog_name="macroasm")
def main(
    input_file: Optional[Path],
    output: Optional[Path],
    symbols: Optional[Path],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Assemble macro source into a flat base-instruction listing.

    INPUT_FILE is the macro assembly source to assemble. The listing is
    printed on standard output.

    \b
    Examples:
        macroasm loop.masm               # Print the listing
        macroasm loop.masm -o loop.lst   # Write it to a file
        macroasm loop.masm -s loop.sym   # Also write the label table
    """
    if input_file is None:
        click.echo(USAGE_HINT)
        return

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    asm = Assembler(strict=strict)

    try:
        listing = asm.assemble_file(input_file)

        if output:
            asm.write_listing(output)
            if verbose:
                click.echo(f"Wrote {len(asm.get_listing())} lines to {output}", err=True)
        else:
            click.echo(listing)

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote {len(asm.get_symbols())} labels to {symbols}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
