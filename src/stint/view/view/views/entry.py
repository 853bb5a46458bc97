# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.table import Table

from stint.model.entry import Entry
from stint.service.entry import group_entries_by_day
from stint.time import (
    date_to_display_str,
    datetime_to_display_local_datetime_str,
    datetime_to_display_local_datetime_str_optional,
    datetime_to_display_local_time_str,
    datetime_to_display_local_time_str_optional,
    now_utc,
)
from stint.view.view.util import (
    entry_state,
    format_entry,
    format_tags,
    render_entry_duration,
)
from stint.view.view.views.header import header

RUNNING_ENTRY_COLOR = "green"


def single_entry_view(
    report_name: str, entry: Entry, now: Optional[pendulum.DateTime] = None
) -> None:
    header(report_name)

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", entry["id"])
    entry_table.add_row("project", escape(entry["project"] or ""))
    entry_table.add_row("description", escape(entry["description"] or ""))
    entry_table.add_row("tags", escape(format_tags(entry["tags"])))
    entry_table.add_row("state", entry_state(entry))
    entry_table.add_row(
        "start", datetime_to_display_local_datetime_str(entry["start_time"])
    )
    entry_table.add_row(
        "end", datetime_to_display_local_datetime_str_optional(entry["end_time"]) or ""
    )
    entry_table.add_row("duration", render_entry_duration(entry, now))

    console = Console()
    console.print(entry_table)


def entries_view(
    report_name: str,
    entries: list[Entry],
    columns: list[str] = [
        "project",
        "description",
        "tags",
        "start",
        "end",
        "duration",
    ],
    now: Optional[pendulum.DateTime] = None,
) -> None:
    """
    Print entries in the order given, one table per local day.

    Running entries are highlighted and measured up to `now`.
    """
    header(report_name)

    console = Console()
    if len(entries) == 0:
        console.print(Padding("No entries", (1, 1)))
        return

    if now is None:
        now = now_utc()

    for day, day_entries in group_entries_by_day(entries):
        day_table = Table(
            title=date_to_display_str(day),
            title_justify="left",
            box=box.SIMPLE,
        )
        for column in columns:
            day_table.add_column(column)

        for entry in day_entries:
            row = []
            for column in columns:
                column_value = ""
                if column == "id":
                    column_value = entry["id"]
                elif column == "project":
                    column_value = escape(entry["project"] or "")
                elif column == "description":
                    column_value = escape(entry["description"] or "")
                elif column == "tags":
                    column_value = escape(format_tags(entry["tags"]))
                elif column == "start":
                    column_value = datetime_to_display_local_time_str(
                        entry["start_time"]
                    )
                elif column == "end":
                    column_value = (
                        datetime_to_display_local_time_str_optional(entry["end_time"])
                        or ""
                    )
                elif column == "duration":
                    column_value = render_entry_duration(entry, now)

                if entry["end_time"] is None:
                    column_value = (
                        f"[{RUNNING_ENTRY_COLOR}]{column_value}[/{RUNNING_ENTRY_COLOR}]"
                    )

                row.append(column_value)
            day_table.add_row(*row)

        console.print(day_table)


def no_entry_view(message: str) -> None:
    console = Console()
    console.print(Padding(message, (1, 1)))


def entry_notice_view(message: str, entry: Entry) -> None:
    """One-line notice about an entry, e.g. one stopped as a side effect."""
    console = Console()
    console.print(Padding(f"{message} {escape(format_entry(entry))}", (1, 1)))
