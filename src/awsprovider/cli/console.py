"""Shared Rich consoles for CLI output."""

import json
import os
from functools import wraps

from rich.console import Console
from rich.markup import escape
from rich.table import Table

_console = Console(soft_wrap=True)
_error_console = Console(stderr=True, soft_wrap=True)


def _should_print() -> bool:
    """Check if console output is enabled."""
    return os.environ.get("AWSPROVIDER_CONSOLE_ENABLED", "true").lower() == "true"


def _console_output(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        if _should_print():
            return func(*args, **kwargs)

    return wrapper


def get_console() -> Console:
    return _console


@_console_output
def print_success(message: str):
    _console.print(f"[green]{escape(message)}[/green]")


@_console_output
def print_error(message: str):
    """Print error message to stderr."""
    _error_console.print(f"[red]{escape(message)}[/red]", highlight=False)


@_console_output
def print_warning(message: str):
    _console.print(f"[yellow]{escape(message)}[/yellow]")


@_console_output
def print_section(title: str, width: int = 60):
    """Print section header."""
    _console.print(f"\n[cyan]{title}[/cyan]")
    _console.print(f"[cyan]{'-' * width}[/cyan]")


@_console_output
def print_table(title: str, columns: list[str], rows: list[list[str]]):
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    _console.print(table)


def print_diagnostics(diags) -> None:
    for diag in diags:
        if diag.is_error:
            print_error(str(diag))
        else:
            print_warning(str(diag))


def print_json(data: dict):
    """Print JSON data (always outputs, ignores AWSPROVIDER_CONSOLE_ENABLED)."""
    print(json.dumps(data, indent=2, sort_keys=True))
