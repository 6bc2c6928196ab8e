"""Shared CLI output helpers for xtask.

Command lines are echoed to stdout with plain ``print`` so they can be
copied and re-run; everything aimed at the person running the tool
(errors, drift reports) goes to a Rich console on stderr.
"""

from typing import NoReturn

import typer
from rich.console import Console

err_console = Console(stderr=True)


def error_exit(msg: str, *, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    err_console.print(f"[red bold]error:[/red bold] {msg}", highlight=False, soft_wrap=True)
    raise typer.Exit(code=code)


def warn(msg: str) -> None:
    """Print a yellow warning line to stderr."""
    err_console.print(f"[yellow bold]warning:[/yellow bold] {msg}", highlight=False, soft_wrap=True)
