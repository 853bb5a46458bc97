# SPDX-License-Identifier: MIT

from typing import Optional

from stint.model.entity_id import generate_entity_id
from stint.model.entry import Entry
from stint.time import now_utc


def get_entry_template(
    project: Optional[str] = None,
    description: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> Entry:
    return {
        "id": generate_entity_id(),
        "project": project,
        "description": description,
        "tags": list(tags) if tags is not None else [],
        "start_time": now_utc(),
        "end_time": None,
    }
