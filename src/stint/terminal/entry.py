# SPDX-License-Identifier: MIT

from contextlib import contextmanager
from typing import Annotated, Iterator, Optional

import typer
from rich.console import Console

from stint.repository.configuration import CONFIGURATION_REPO
from stint.repository.entry_list import (
    ENTRY_LIST_REPO,
    EntryListFileError,
    EntryListFormatError,
)
from stint.service.entry import EntryListInconsistencyError
from stint.terminal.parse import parse_optional_text, parse_tags
from stint.view.view.views import entry as entry_report

NO_RUNNING_ENTRY_MESSAGE = "No entry is running"

ProjectArgument = Annotated[
    Optional[str], typer.Argument(help="Optional project for this entry")
]
DescriptionArgument = Annotated[
    Optional[str], typer.Argument(help="Optional description for this entry")
]
TagsOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--tags",
        "-t",
        help="comma separated tags, e.g. -t urgent,client (repeatable)",
    ),
]


@contextmanager
def entry_list_errors() -> Iterator[None]:
    """Turn entry list failures into an error message and a non-zero exit."""
    console = Console(stderr=True)
    try:
        yield
    except EntryListFormatError as e:
        console.print(
            f"[red]Error: entries file {e.path} is unreadable: {e.reason}[/red]"
        )
        raise typer.Exit(1)
    except EntryListFileError as e:
        console.print(
            f"[red]Error: could not read or write entries file {e.path}: {e.reason}[/red]"
        )
        raise typer.Exit(1)
    except EntryListInconsistencyError as e:
        console.print(f"[red]Error: entries file is inconsistent: {e}[/red]")
        raise typer.Exit(2)


def start(
    project: ProjectArgument = None,
    description: DescriptionArgument = None,
    tags: TagsOption = None,
) -> None:
    """
    Start a new time entry. A running entry is stopped first.
    """
    with entry_list_errors():
        entry, stopped = ENTRY_LIST_REPO.start_entry(
            parse_optional_text(project),
            parse_optional_text(description),
            parse_tags(tags),
        )
        ENTRY_LIST_REPO.flush()

    if stopped is not None:
        entry_report.entry_notice_view("Stopped", stopped)
    entry_report.single_entry_view("started", entry)


def stop(
    project: ProjectArgument = None,
    description: DescriptionArgument = None,
    tags: TagsOption = None,
) -> None:
    """
    Stop the current time entry. A project, description or tags given here
    replace the ones set when the entry was started.
    """
    with entry_list_errors():
        entry = ENTRY_LIST_REPO.stop_current_entry(
            parse_optional_text(project),
            parse_optional_text(description),
            parse_tags(tags),
        )
        ENTRY_LIST_REPO.flush()

    if entry is None:
        entry_report.no_entry_view(NO_RUNNING_ENTRY_MESSAGE)
        return
    entry_report.single_entry_view("stopped", entry)


def clear() -> None:
    """
    Stop the current time entry and discard it.
    """
    with entry_list_errors():
        entry = ENTRY_LIST_REPO.clear_current_entry()
        ENTRY_LIST_REPO.flush()

    if entry is None:
        entry_report.no_entry_view(NO_RUNNING_ENTRY_MESSAGE)
        return
    entry_report.single_entry_view("cleared", entry)


def status() -> None:
    """
    Show the running entry, if any.
    """
    with entry_list_errors():
        entry = ENTRY_LIST_REPO.get_current_entry()

    if entry is None:
        entry_report.no_entry_view(NO_RUNNING_ENTRY_MESSAGE)
        return
    entry_report.single_entry_view("status", entry)


def log(
    ascending: Annotated[
        Optional[bool],
        typer.Option(
            "--ascending/--descending",
            "-a/-d",
            help="oldest first; the default is newest first",
            show_default=False,
        ),
    ] = None,
) -> None:
    """
    List all entries, grouped by day.
    """
    if ascending is None:
        ascending = CONFIGURATION_REPO.get_config()["log_ascending"]

    with entry_list_errors():
        entries = ENTRY_LIST_REPO.get_entries_in_order(ascending=ascending)

    entry_report.entries_view("log", entries)
