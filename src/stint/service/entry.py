# SPDX-License-Identifier: MIT

import logging
from itertools import groupby
from typing import Optional

import pendulum

from stint.model.entry import Entry
from stint.model.entry_list import EntryList
from stint.template.entry import get_entry_template
from stint.time import datetime_to_local_date, now_utc

logger = logging.getLogger(__name__)


class EntryListInconsistencyError(RuntimeError):
    """Raised when the current entry id does not resolve to a stored entry."""

    pass


def is_running(entry: Entry) -> bool:
    return entry["end_time"] is None


def is_same_entry(entry: Entry, other: Entry) -> bool:
    """Entries are the same entry when their ids match, whatever else changed."""
    return entry["id"] == other["id"]


def entry_sort_key(entry: Entry) -> pendulum.DateTime:
    return entry["start_time"]


def entry_duration(
    entry: Entry, now: Optional[pendulum.DateTime] = None
) -> pendulum.Duration:
    """
    Elapsed time of an entry.

    Closed entries measure start to end; running entries measure start to
    `now` (defaults to the current moment).
    """
    end = entry["end_time"]
    if end is None:
        end = now if now is not None else now_utc()
    return end - entry["start_time"]


def stop_entry(entry: Entry) -> bool:
    """
    Close an entry by setting its end_time to now.

    An entry that is already closed keeps its original end_time. Returns
    whether this call closed the entry.
    """
    if entry["end_time"] is not None:
        logger.warning("entry %s was already stopped; keeping its end time", entry["id"])
        return False
    entry["end_time"] = now_utc()
    return True


def get_current_entry(entry_list: EntryList) -> Optional[Entry]:
    current_id = entry_list["current_entry"]
    if current_id is None:
        return None
    entry = entry_list["entries"].get(current_id)
    if entry is None:
        raise EntryListInconsistencyError(
            f"current entry {current_id} is missing from the entry list"
        )
    return entry


def start_entry(
    entry_list: EntryList,
    project: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> Entry:
    """
    Start a new entry and make it the current one.

    A running entry is stopped first, without any field overrides, and stays
    in the list.
    """
    previous = get_current_entry(entry_list)
    if previous is not None:
        logger.info("stopping entry %s before starting a new one", previous["id"])
        stop_current_entry(entry_list)

    entry = get_entry_template(project, description, tags)
    entry_list["entries"][entry["id"]] = entry
    entry_list["current_entry"] = entry["id"]

    logger.info(
        "started entry %s (project=%r, description=%r, tags=%r)",
        entry["id"],
        entry["project"],
        entry["description"],
        entry["tags"],
    )
    return entry


def stop_current_entry(
    entry_list: EntryList,
    project: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> Optional[Entry]:
    """
    Stop the current entry, if any.

    project and description overwrite the entry's values when they are not
    None. tags replace the entry's tags only when non-empty; an empty list
    leaves them unchanged. Returns the stopped entry, or None when idle.
    """
    entry = get_current_entry(entry_list)
    if entry is None:
        return None

    stop_entry(entry)
    entry_list["current_entry"] = None

    if project is not None:
        entry["project"] = project
    if description is not None:
        entry["description"] = description
    if tags:
        entry["tags"] = list(tags)

    logger.info("stopped entry %s", entry["id"])
    return entry


def clear_current_entry(entry_list: EntryList) -> Optional[Entry]:
    """Discard the current entry entirely. Returns it, or None when idle."""
    entry = get_current_entry(entry_list)
    if entry is None:
        return None

    del entry_list["entries"][entry["id"]]
    entry_list["current_entry"] = None

    logger.info("cleared entry %s", entry["id"])
    return entry


def get_entries_in_order(entry_list: EntryList, ascending: bool = True) -> list[Entry]:
    entries = sorted(entry_list["entries"].values(), key=entry_sort_key)
    if not ascending:
        entries.reverse()
    return entries


def group_entries_by_day(
    entries: list[Entry],
) -> list[tuple[pendulum.Date, list[Entry]]]:
    """Group already ordered entries by the local date they started on."""
    return [
        (day, list(day_entries))
        for day, day_entries in groupby(
            entries, key=lambda entry: datetime_to_local_date(entry["start_time"])
        )
    ]
