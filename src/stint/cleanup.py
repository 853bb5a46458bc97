# SPDX-License-Identifier: MIT

import atexit

from rich.console import Console

from stint.repository.configuration import CONFIGURATION_REPO
from stint.repository.entry_list import ENTRY_LIST_REPO, EntryListFileError
from stint.repository.lock import release_entries_lock


def flush_and_sync() -> None:
    try:
        CONFIGURATION_REPO.flush()
        ENTRY_LIST_REPO.flush()
    except (EntryListFileError, OSError) as e:
        # The exit code is already decided by now, so report and move on
        Console(stderr=True).print(f"[red]Error: failed to save changes: {e}[/red]")
    finally:
        release_entries_lock()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
