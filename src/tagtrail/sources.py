"""Navigation sources: where snapshots of the editor's tag stack come from.

The file source reads a JSON document the editor writes whenever its tag
stack or cursor changes::

    {
      "file": "/path/to/current_file.ex",
      "line": 12,
      "tagstack": {
        "curidx": 2,
        "items": [
          {"tagname": "handle_call/3", "from": {"file": "lib/server.ex", "line": 40}}
        ]
      }
    }

``curidx`` is 1-based, as the editor reports it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from .models import Location, NavigationEvent, StackSnapshot

logger = logging.getLogger(__name__)


class NavigationSourceError(Exception):
    """Raised when the host's navigation stack cannot be read."""


@runtime_checkable
class NavigationSource(Protocol):
    """Pull-based access to the host editor's navigation state."""

    def poll_navigation_stack(self) -> StackSnapshot: ...
    def current_file_path(self) -> str | None: ...
    def current_cursor_line(self) -> int: ...
    def directory_listing(self, path: str) -> list[str]: ...
    def reset_navigation_stack(self) -> None: ...


def parse_snapshot(data: Any) -> StackSnapshot:
    """Build a snapshot from the ``tagstack`` part of a document."""
    if not isinstance(data, dict):
        raise NavigationSourceError("tag stack is not an object")

    raw_items = data.get("items", [])
    if not isinstance(raw_items, list):
        raise NavigationSourceError("tag stack items is not a list")

    try:
        current_index = int(data.get("curidx", 1))
    except (TypeError, ValueError) as e:
        raise NavigationSourceError(f"invalid curidx: {e}") from e

    items = tuple(_parse_item(raw) for raw in raw_items)
    return StackSnapshot(items=items, current_index=current_index)


def _parse_item(raw: Any) -> NavigationEvent:
    if not isinstance(raw, dict):
        raise NavigationSourceError("tag stack item is not an object")
    return NavigationEvent(
        tag_token=str(raw.get("tagname") or ""),
        origin=_parse_location(raw.get("from")),
    )


def _parse_location(raw: Any) -> Location | None:
    if not isinstance(raw, dict):
        return None
    file_id = raw.get("file")
    if not file_id:
        return None
    try:
        line = int(raw.get("line", 0))
    except (TypeError, ValueError):
        line = 0
    return Location(file_id=str(file_id), line=line)


class SnapshotFileSource:
    """Navigation source backed by a JSON snapshot file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise NavigationSourceError(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise NavigationSourceError(f"{self.path} is not a JSON object")
        return data

    def poll_navigation_stack(self) -> StackSnapshot:
        """Read the editor's tag stack."""
        return parse_snapshot(self._read().get("tagstack", {}))

    def current_file_path(self) -> str | None:
        """Get the editor's current file, or None if unknown."""
        try:
            data = self._read()
        except NavigationSourceError:
            return None
        file_id = data.get("file")
        return str(file_id) if file_id else None

    def current_cursor_line(self) -> int:
        """Get the editor's cursor line, 0 if unknown."""
        try:
            return int(self._read().get("line", 0))
        except (NavigationSourceError, TypeError, ValueError):
            return 0

    def directory_listing(self, path: str) -> list[str]:
        """List entry names in a directory, empty if it cannot be read."""
        try:
            return sorted(entry.name for entry in Path(path).iterdir())
        except OSError:
            return []

    def reset_navigation_stack(self) -> None:
        """Empty the tag stack in the snapshot file with an atomic write."""
        try:
            data = self._read()
        except NavigationSourceError:
            data = {}
        data["tagstack"] = {"curidx": 1, "items": []}

        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        temp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(temp_path, self.path)
        logger.debug("Reset tag stack in %s", self.path)
