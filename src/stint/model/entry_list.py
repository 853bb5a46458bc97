# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from stint.model.entity_id import EntityId
from stint.model.entry import Entry


class EntryList(TypedDict):
    """
    Every recorded entry plus the id of the one that is still running.

    When current_entry is set it must be a key of entries, and that entry
    must have no end_time. No other entry may be open.
    """

    entries: dict[EntityId, Entry]
    current_entry: Optional[EntityId]
