"""ID helpers for project/section/conversation IDs.

Provides:
- ``new_id(prefix)``: returns a time-sortable ID string with the given prefix
  (e.g., ``project_0001695400000-3f2a...``). Not a true ULID but stable and sortable.
- ``is_valid_id(value)``: whether a string is safe to use as a document key.
"""

from __future__ import annotations

import re
import time
import uuid

_ID_RX = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def new_id(prefix: str) -> str:
    """Generate a time-sortable unique ID with the given prefix.

    Format: ``{prefix}_{millis}-{uuid16}``
    """
    millis = int(time.time() * 1000)
    rand = uuid.uuid4().hex[:16]
    return f"{prefix}_{millis:013d}-{rand}"


def is_valid_id(value: object) -> bool:
    # IDs double as file names in the document store
    return isinstance(value, str) and bool(_ID_RX.match(value))
