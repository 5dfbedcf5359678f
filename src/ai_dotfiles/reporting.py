"""User-facing progress output."""

from __future__ import annotations

from typing import Callable

from rich.console import Console

Log = Callable[[str], None]

_console = Console(highlight=False)


def echo(message: str) -> None:
    """Print a progress line; rich markup such as ``[green]`` is honoured."""
    _console.print(message)


def set_quiet(quiet: bool) -> None:
    """Silence (or restore) progress output; prompts are unaffected."""
    _console.quiet = quiet


def resolve_log(log: Log | None) -> Log:
    return log or echo
