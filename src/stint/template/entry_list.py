# SPDX-License-Identifier: MIT

from stint.model.entry_list import EntryList


def get_entry_list_template() -> EntryList:
    return {
        "entries": {},
        "current_entry": None,
    }
