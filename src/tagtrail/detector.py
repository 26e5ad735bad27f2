"""Cheap change detection for polled navigation snapshots."""

import logging

from .models import StackSnapshot

logger = logging.getLogger(__name__)


class ChangeDetector:
    """Decides whether the host's navigation stack changed since last poll.

    Only the index, the item count and the first and last tag tokens are
    compared, so each poll costs the same regardless of stack depth.
    """

    def __init__(self) -> None:
        self._last: StackSnapshot | None = None

    def poll(self, snapshot: StackSnapshot | None) -> bool:
        """Return True if ``snapshot`` differs from the previous one.

        A ``None`` snapshot means the host could not be read; that is
        reported as unchanged and the cache is kept.
        """
        if snapshot is None:
            return False

        previous = self._last
        self._last = snapshot

        if previous is None:
            return True

        changed = not _looks_same(previous, snapshot)
        if changed:
            logger.debug(
                "Navigation stack changed: index %d -> %d, items %d -> %d",
                previous.current_index,
                snapshot.current_index,
                len(previous.items),
                len(snapshot.items),
            )
        return changed

    def reset(self) -> None:
        """Forget the cached snapshot."""
        self._last = None


def _looks_same(a: StackSnapshot, b: StackSnapshot) -> bool:
    if a.current_index != b.current_index or len(a.items) != len(b.items):
        return False
    if not a.items:
        return True
    if a.items[0].tag_token != b.items[0].tag_token:
        return False
    return a.items[-1].tag_token == b.items[-1].tag_token
