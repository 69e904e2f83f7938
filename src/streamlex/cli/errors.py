"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the CLI.

Copyright (c) 2026 streamlex Contributors
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    LEX_ERROR = 1        # Malformed input or unreadable source
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception on stderr and exit with the matching code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from streamlex.errors import LexerError, StreamLexError

    if isinstance(error, LexerError):
        # Already formatted as "file:line: error: ..."
        click.echo(str(error), err=True)
        sys.exit(ExitCode.LEX_ERROR)

    elif isinstance(error, StreamLexError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.LEX_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
