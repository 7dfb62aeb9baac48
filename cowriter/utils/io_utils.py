"""IO utilities for safe JSON and file operations.

Provides:
- ``ensure_dir(path)``: create directories if missing (no error if exists).
- ``read_json(path, default=None)``: read JSON file; return default on missing.
- ``write_json(path, data)``: atomic write of JSON to file.
- ``remove_file(path)``: delete a file; return False if it was already gone.
- ``list_json(dir_path)``: sorted paths of the JSON documents in a directory.
"""

from __future__ import annotations

import json
import os
import tempfile
from typing import Any, List, Optional


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def read_json(path: str, default: Optional[Any] = None) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return default


def write_json(path: str, data: Any) -> None:
    ensure_dir(os.path.dirname(path) or ".")
    fd, tmp = tempfile.mkstemp(prefix=".tmp_", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)


def remove_file(path: str) -> bool:
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    return True


def list_json(dir_path: str) -> List[str]:
    if not os.path.isdir(dir_path):
        return []
    return sorted(
        os.path.join(dir_path, name)
        for name in os.listdir(dir_path)
        if name.endswith(".json") and not name.startswith(".tmp_")
    )
