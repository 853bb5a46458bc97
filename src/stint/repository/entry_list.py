# SPDX-License-Identifier: MIT

import os
import tempfile
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from stint import configuration, time
from stint.model.entity_id import EntityId
from stint.model.entry import Entry
from stint.model.entry_list import EntryList
from stint.service import entry as entry_service
from stint.template.entry_list import get_entry_list_template

FORMAT_VERSION = 1


class EntryListFileError(Exception):
    """Raised when the entries file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class EntryListFormatError(Exception):
    """Raised when the entries file exists but does not hold a valid entry list."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class EntryListRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._entry_list: Optional[EntryList] = None
        self.is_dirty = False

    @property
    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return configuration.DATA_ENTRIES_PATH

    @property
    def entry_list(self) -> EntryList:
        if self._entry_list is None:
            self._entry_list = self.load()
        return self._entry_list

    def load(self) -> EntryList:
        try:
            raw_text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return get_entry_list_template()
        except OSError as e:
            raise EntryListFileError(self.path, str(e)) from e

        try:
            raw_entry_list = load(raw_text, Loader=Loader)
        except YAMLError as e:
            raise EntryListFormatError(self.path, f"invalid YAML: {e}") from e

        if raw_entry_list is None:
            return get_entry_list_template()
        return self.__convert_entry_list_for_deserialization(raw_entry_list)

    def save(self, entry_list: EntryList) -> None:
        serializable_entry_list = self.__convert_entry_list_for_serialization(
            entry_list
        )
        text = dump(serializable_entry_list, Dumper=Dumper, sort_keys=False)

        # Write beside the target and swap it in, so a failed write leaves the
        # previous file untouched.
        temp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as temp_file:
                temp_name = temp_file.name
                temp_file.write(text)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_name, self.path)
        except OSError as e:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise EntryListFileError(self.path, str(e)) from e

    def flush(self) -> bool:
        if self._entry_list is not None and self.is_dirty:
            # A failed save is reported once by the caller, not retried
            self.is_dirty = False
            self.save(self._entry_list)
            return True
        return False

    def __convert_entry_list_for_serialization(
        self, entry_list: EntryList
    ) -> dict[str, Any]:
        entries: dict[str, Any] = {}
        for entry_id, entry in entry_list["entries"].items():
            entries[entry_id] = {
                "id": entry["id"],
                "project": entry["project"],
                "description": entry["description"],
                "tags": list(entry["tags"]),
                "start_time": time.datetime_to_iso_str(entry["start_time"]),
                "end_time": time.datetime_to_iso_str_optional(entry["end_time"]),
            }
        return {
            "format_version": FORMAT_VERSION,
            "current_entry": entry_list["current_entry"],
            "entries": entries,
        }

    def __convert_entry_list_for_deserialization(self, raw: Any) -> EntryList:
        if not isinstance(raw, dict):
            raise EntryListFormatError(self.path, "top level is not a mapping")

        format_version = raw.get("format_version")
        if format_version != FORMAT_VERSION:
            raise EntryListFormatError(
                self.path,
                f"unsupported format_version {format_version!r} "
                f"(expected {FORMAT_VERSION})",
            )

        for key in ("current_entry", "entries"):
            if key not in raw:
                raise EntryListFormatError(self.path, f"missing key: {key}")

        current_entry = raw["current_entry"]
        if current_entry is not None and not isinstance(current_entry, str):
            raise EntryListFormatError(self.path, "current_entry is not a string")

        raw_entries = raw["entries"]
        if not isinstance(raw_entries, dict):
            raise EntryListFormatError(self.path, "entries is not a mapping")

        entries: dict[EntityId, Entry] = {}
        for entry_id, raw_entry in raw_entries.items():
            entry = self.__convert_entry_for_deserialization(raw_entry)
            if entry["id"] != entry_id:
                raise EntryListFormatError(
                    self.path, f"entry stored under {entry_id!r} has id {entry['id']!r}"
                )
            entries[entry_id] = entry

        # At most one entry is open, and it is the current one
        open_ids = [
            entry_id
            for entry_id, entry in entries.items()
            if entry["end_time"] is None
        ]
        if len(open_ids) > 1:
            raise EntryListFormatError(
                self.path, f"more than one open entry: {', '.join(open_ids)}"
            )
        if open_ids and open_ids[0] != current_entry:
            raise EntryListFormatError(
                self.path, f"open entry {open_ids[0]} is not the current entry"
            )
        if current_entry in entries and current_entry not in open_ids:
            raise EntryListFormatError(
                self.path, f"current entry {current_entry} is already stopped"
            )

        return {"entries": entries, "current_entry": current_entry}

    def __convert_entry_for_deserialization(self, raw_entry: Any) -> Entry:
        if not isinstance(raw_entry, dict):
            raise EntryListFormatError(self.path, "entry is not a mapping")

        missing = {
            "id",
            "project",
            "description",
            "tags",
            "start_time",
            "end_time",
        } - raw_entry.keys()
        if missing:
            raise EntryListFormatError(
                self.path, f"entry is missing fields: {', '.join(sorted(missing))}"
            )

        entry_id = raw_entry["id"]
        if not isinstance(entry_id, str):
            raise EntryListFormatError(self.path, "entry id is not a string")
        for field in ("project", "description"):
            if raw_entry[field] is not None and not isinstance(raw_entry[field], str):
                raise EntryListFormatError(
                    self.path, f"entry {entry_id} {field} is not a string"
                )
        tags = raw_entry["tags"]
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise EntryListFormatError(
                self.path, f"entry {entry_id} tags is not a list of strings"
            )

        try:
            start_time = time.datetime_from_str(raw_entry["start_time"])
            end_time = time.datetime_from_str_optional(raw_entry["end_time"])
        except (TypeError, ValueError) as e:
            raise EntryListFormatError(
                self.path, f"entry {entry_id} has an invalid timestamp: {e}"
            ) from e

        return {
            "id": entry_id,
            "project": raw_entry["project"],
            "description": raw_entry["description"],
            "tags": tags,
            "start_time": start_time,
            "end_time": end_time,
        }

    def start_entry(
        self,
        project: Optional[str],
        description: Optional[str],
        tags: list[str],
    ) -> tuple[Entry, Optional[Entry]]:
        """
        Start a new entry.

        Returns the new entry together with the entry that was implicitly
        stopped to make room for it, if there was one.
        """
        previous = entry_service.get_current_entry(self.entry_list)
        self.is_dirty = True
        entry = entry_service.start_entry(self.entry_list, project, description, tags)
        return deepcopy(entry), deepcopy(previous)

    def stop_current_entry(
        self,
        project: Optional[str],
        description: Optional[str],
        tags: list[str],
    ) -> Optional[Entry]:
        entry = entry_service.stop_current_entry(
            self.entry_list, project, description, tags
        )
        if entry is not None:
            self.is_dirty = True
        return deepcopy(entry)

    def clear_current_entry(self) -> Optional[Entry]:
        entry = entry_service.clear_current_entry(self.entry_list)
        if entry is not None:
            self.is_dirty = True
        return deepcopy(entry)

    def get_current_entry(self) -> Optional[Entry]:
        return deepcopy(entry_service.get_current_entry(self.entry_list))

    def get_entries_in_order(self, ascending: bool = True) -> list[Entry]:
        return deepcopy(
            entry_service.get_entries_in_order(self.entry_list, ascending=ascending)
        )

    def get_entry_list(self) -> EntryList:
        return deepcopy(self.entry_list)


ENTRY_LIST_REPO = EntryListRepository()
