# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from stint.model.entity_id import EntityId


class Entry(TypedDict):
    id: EntityId  # Assigned once at creation, never reused
    project: Optional[str]
    description: Optional[str]
    tags: list[str]  # Insertion order kept, duplicates allowed
    start_time: pendulum.DateTime  # Immutable after creation
    end_time: Optional[pendulum.DateTime]  # None while the entry is running
