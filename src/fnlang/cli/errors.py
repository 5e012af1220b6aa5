"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes across CLI tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn, Optional

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    FRONTEND_ERROR = 1   # Lexical or parse error in the input
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    source: Optional[str] = None,
) -> NoReturn:
    """
    Unified exception handler for CLI tools.

    Front-end errors are rendered with source context when the source
    text is available. Internal errors print a traceback in verbose mode.

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from fnlang.errors import FnLangError
    from fnlang.frontend.diagnostics import render_diagnostic
    from fnlang.frontend.errors import FrontendError

    if isinstance(error, FrontendError):
        click.echo(render_diagnostic(error, source), err=True)
        sys.exit(ExitCode.FRONTEND_ERROR)

    elif isinstance(error, FnLangError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.FRONTEND_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
