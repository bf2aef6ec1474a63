"""CLI output helpers for hustle."""

from __future__ import annotations

from dataclasses import asdict

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import ConfigStore
from ..errors import ArityError, HustleError, SubcommandError, UnrecognizedVerbError
from ..run_config import RunConfig
from ..runner import INTERRUPTED

console = Console()


def config_table(config: RunConfig) -> Table:
    table = Table(title="Options", show_header=False)
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    for key, value in asdict(config).items():
        table.add_row(key, repr(value))
    return table


def report_unrecognized(
    error: UnrecognizedVerbError,
    config: RunConfig,
    store: ConfigStore | None = None,
) -> None:
    """Explain an unknown verb: default run syntax, persisted config and options."""
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    if error.run_syntax:
        console.print("\nDefault run syntax:")
        console.print(f"  {escape(error.run_syntax)}", highlight=False)
    if store is not None and store.exists():
        console.print("\nConfig:")
        for key, value in store.load().items():
            console.print(f"  {escape(key)}={escape(value)}", highlight=False)
    console.print()
    console.print(config_table(config))


def report_error(error: HustleError) -> None:
    if isinstance(error, ArityError):
        console.print("[red]Error: wrong number of arguments[/red]")
        console.print(f"Syntax: {escape(error.syntax)}", highlight=False)
    elif isinstance(error, SubcommandError) and error.returncode == INTERRUPTED:
        console.print("[dim]Interrupted[/dim]")
    elif isinstance(error, SubcommandError):
        command = escape(str(error.command))
        console.print(f"[red]Error: {command} exited with status {error.returncode}[/red]")
    else:
        console.print(f"[red]Error: {escape(str(error))}[/red]")
