# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from stint.model.entry import Entry
from stint.service.entry import entry_duration, is_running
from stint.time import duration_to_str


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_entry(entry: Entry) -> str:
    """One-line form of an entry: `project: description [tag, tag]`."""
    return (
        f"{entry['project'] or ''}: {entry['description'] or ''} "
        f"[{format_tags(entry['tags'])}]"
    )


def render_entry_duration(
    entry: Entry, now: Optional[pendulum.DateTime] = None
) -> str:
    return duration_to_str(entry_duration(entry, now))


def entry_state(entry: Entry) -> str:
    return "running" if is_running(entry) else "stopped"
