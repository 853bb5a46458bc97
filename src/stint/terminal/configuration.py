# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from stint import configuration
from stint.repository.configuration import CONFIGURATION_REPO
from stint.terminal.custom_typer import AlphabeticalAliasedTyperGroup
from stint.terminal.parse import validate_log_level

app = typer.Typer(cls=AlphabeticalAliasedTyperGroup, no_args_is_help=True)


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("config_path", str(configuration.APP_CONFIG_PATH))
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("entries_file", str(configuration.DATA_ENTRIES_PATH))
    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("log_ascending", _enabled(config["log_ascending"]))
    table.add_row("lock_entries_file", _enabled(config["lock_entries_file"]))
    table.add_row("log_level", config["log_level"])

    console.print(table)


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory holding entries.yaml (takes effect on the next run)",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path", help="Go back to the platform data directory"
        ),
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above reports",
        ),
    ] = None,
    log_ascending: Annotated[
        Optional[bool],
        typer.Option(
            "--log-ascending/--no-log-ascending",
            help="List the log oldest first by default",
        ),
    ] = None,
    lock_entries_file: Annotated[
        Optional[bool],
        typer.Option(
            "--lock-entries-file/--no-lock-entries-file",
            help="Hold an advisory lock on the entries file while running",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        ),
    ] = None,
) -> None:
    """Update configuration settings."""
    console = Console()

    if data_path is not None and remove_data_path:
        console.print(
            "[red]Error: --data-path and --remove-data-path cannot be combined[/red]"
        )
        raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        log_ascending=log_ascending,
        lock_entries_file=lock_entries_file,
        log_level=log_level,
    )
    CONFIGURATION_REPO.flush()

    console.print("[green]Configuration updated[/green]")
