"""
CLI Error Handling
==================

Maps exceptions raised by the assembler onto printed text and exit codes.
This is the only place that decides process status.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Operand validation or strict label error
    INVALID_ARGS = 2     # Output file cannot be written
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    - SourceReadError: the OS message on stdout, normal exit
    - OperandError: ``parse error on <token>`` on stdout, exit 1
    - other AssemblerError: the formatted error on stdout, exit 1
    - OSError (writing outputs): message on stderr, exit 2
    - anything else: internal error on stderr, exit 3

    Args:
        error: The exception that was raised
        verbose: If True, print locations, hints and tracebacks on stderr

    Raises:
        SystemExit: Always
    """
    from macroasm.errors import AssemblerError, OperandError, SourceReadError

    if isinstance(error, SourceReadError):
        # Unreadable input is reported, not treated as a failed run
        click.echo(str(error))
        sys.exit(ExitCode.SUCCESS)

    elif isinstance(error, OperandError):
        click.echo(error.message)
        if verbose:
            click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, AssemblerError):
        click.echo(str(error))
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, OSError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
