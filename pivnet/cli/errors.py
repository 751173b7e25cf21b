"""
CLI Error Handling.

Runs a command's coroutine and turns any PivnetError into a red message on
stderr and exit code 1. Usage errors keep Click's exit code 2.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from pivnet.core.exceptions import PivnetError
from pivnet.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

EXIT_ERROR = 1

T = TypeVar("T")


def _error_console() -> Console:
    return Console(stderr=True)


def print_error(error: PivnetError) -> None:
    """Print an error for the user without logging it."""
    _error_console().print(f"[red]Error: {escape(error.message)}[/red]")


def report_error(error: PivnetError) -> None:
    """Log an error and print it for the user."""
    log_with_source(logger, "cli", "debug", "Command failed", code=error.code, error=error.message)
    print_error(error)


def run_command(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a command coroutine to completion.

    Raises:
        typer.Exit: With code 1 if the command raised a PivnetError
    """
    try:
        return asyncio.run(coro)
    except PivnetError as e:
        report_error(e)
        raise typer.Exit(EXIT_ERROR) from e
