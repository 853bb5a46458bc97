# SPDX-License-Identifier: MIT

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from typing import Annotated, Optional

import typer

from stint.logger import set_log_level
from stint.terminal import configuration
from stint.terminal.custom_typer import AliasedTyperGroup
from stint.terminal.entry import clear, log, start, status, stop
from stint.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="stint - Personal time tracking in the CLI",
    no_args_is_help=True,
)
app.command(name="start")(start)
app.command(name="stop")(stop)
app.command(name="status, st")(status)
app.command(name="log, l")(log)
app.command(name="clear, reset")(clear)
app.add_typer(configuration.app, name="config, c", help="View or change settings")


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        typer.echo(f"stint {package_version('stint')}")
    except PackageNotFoundError:
        typer.echo("stint (not installed)")
    raise typer.Exit()


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log start, stop and clear notices to stderr",
        ),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = None,
) -> None:
    """
    stint - Personal time tracking in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        set_log_level("INFO")


def run() -> None:
    app()
