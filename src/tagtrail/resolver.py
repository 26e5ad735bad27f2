"""Branch-vs-backtrack resolution for persisted display history."""

import logging
from enum import Enum
from typing import Sequence

from .models import NavigationEvent, NavigationStack

logger = logging.getLogger(__name__)


class Resolution(Enum):
    """What an update did to a stack's display history."""

    NONE = "none"
    EXTEND = "extend"
    BACKTRACK = "backtrack"
    BRANCH = "branch"


class BranchResolver:
    """Merges a raw navigation stack into a stack's display history.

    Going deeper extends the history. Moving back up along the recorded
    path keeps deeper entries visible; moving back up and then jumping
    somewhere else replaces the history with the new path.
    """

    def update(
        self,
        stack: NavigationStack,
        items: Sequence[NavigationEvent],
        index: int,
    ) -> Resolution:
        """Apply ``items`` at 0-based position ``index`` to ``stack``."""
        items = list(items)
        index = min(index, len(items))
        display = stack.display_items
        resolution = Resolution.NONE

        if index > stack.max_depth:
            for pos in range(stack.max_depth, min(index, len(items))):
                if pos < len(display):
                    display[pos] = items[pos]
                else:
                    display.append(items[pos])
            stack.max_depth = index
            resolution = Resolution.EXTEND
        # <= so a different jump at the deepest recorded level also branches.
        elif index <= len(display):
            if _diverges(items, display, index):
                stack.display_items = display = items[:index]
                stack.max_depth = index
                resolution = Resolution.BRANCH
            elif index < len(display):
                resolution = Resolution.BACKTRACK

        # Keep the live path fully populated.
        for pos in range(len(display), min(index, len(items))):
            display.append(items[pos])

        stack.items = items
        stack.current_index = index

        if resolution is not Resolution.NONE:
            logger.debug(
                "%s: %s at depth %d (max %d)",
                stack.id,
                resolution.value,
                index,
                stack.max_depth,
            )
        return resolution


def _diverges(
    items: Sequence[NavigationEvent],
    display: Sequence[NavigationEvent],
    index: int,
) -> bool:
    """Check whether the first ``index`` positions differ by tag."""
    for pos in range(index):
        have_item = pos < len(items)
        have_display = pos < len(display)
        if have_item and have_display:
            if items[pos].tag_token != display[pos].tag_token:
                return True
        elif have_item or have_display:
            return True
    return False
