"""Management of named navigation stacks."""

import logging
import os

from .formatter import describe_location, module_name_from_path
from .models import Location, NavigationStack, StackCollection, StackSnapshot
from .resolver import BranchResolver, Resolution
from .sources import NavigationSource

logger = logging.getLogger(__name__)


class StackManager:
    """Owns the stack collection and feeds snapshots into it.

    A new stack is started when a file is opened with no active stack, or
    when the user returns to the root of the active stack and then jumps
    somewhere other than the first recorded jump.
    """

    def __init__(
        self,
        source: NavigationSource,
        collection: StackCollection | None = None,
        resolver: BranchResolver | None = None,
    ) -> None:
        self.source = source
        self.collection = collection if collection is not None else StackCollection()
        self.resolver = resolver if resolver is not None else BranchResolver()
        self._next_id = 1

    @property
    def active(self) -> NavigationStack | None:
        return self.collection.active

    def create_stack(self, root_location: Location) -> str | None:
        """Create a stack rooted at ``root_location`` and make it active.

        Returns the new stack id, or None if the root file is not there.
        """
        root_path = root_location.file_id
        if not root_path or not self._root_exists(root_path):
            logger.debug("Not creating stack, root unavailable: %r", root_path)
            return None

        stack_id = f"stack_{self._next_id}"
        self._next_id += 1

        stack = NavigationStack(
            id=stack_id,
            display_name=module_name_from_path(root_path),
            root_location=root_location,
        )
        self.collection.add(stack)
        logger.info("Created %s rooted at %s", stack_id, root_path)
        return stack_id

    def _root_exists(self, path: str) -> bool:
        parent, name = os.path.split(path)
        return name in self.source.directory_listing(parent or ".")

    def _current_location(self) -> Location:
        return Location(
            file_id=self.source.current_file_path() or "",
            line=self.source.current_cursor_line(),
        )

    def new_stack(self) -> str | None:
        """Create a stack rooted at the editor's current position."""
        return self.create_stack(self._current_location())

    def open_file(self) -> str | None:
        """Start a stack for the current file if none is active."""
        if self.collection.active is not None:
            return None
        return self.new_stack()

    def switch_next(self) -> None:
        """Make the next stack active, wrapping around."""
        self._rotate(1)

    def switch_prev(self) -> None:
        """Make the previous stack active, wrapping around."""
        self._rotate(-1)

    def _rotate(self, step: int) -> None:
        order = self.collection.order
        if len(order) <= 1:
            return
        try:
            current = order.index(self.collection.active_id)
        except ValueError:
            current = 0
        self.collection.active_id = order[(current + step) % len(order)]
        self.collection.touch()

    def clear(self, active_only: bool = True) -> None:
        """Reset history in place and empty the editor's tag stack.

        Stacks keep their id, name and position; only their history is
        dropped.
        """
        if active_only:
            stacks = [self.active] if self.active is not None else []
        else:
            stacks = list(self.collection)

        for stack in stacks:
            stack.reset()
            logger.info("Cleared %s", stack.id)
        self.collection.touch()

        try:
            self.source.reset_navigation_stack()
        except OSError as e:
            logger.warning("Failed to reset editor tag stack: %s", e)

    def has_history(self) -> bool:
        """Check if any stack has recorded jumps."""
        return any(stack.display_items for stack in self.collection)

    def ingest(self, snapshot: StackSnapshot) -> Resolution | None:
        """Merge a changed snapshot into the active stack."""
        stack = self.active
        if stack is None:
            self.new_stack()
            return None

        items = list(snapshot.items)
        index = snapshot.normalized_index()

        if index == 0 or not items:
            # Raw items are kept so the next jump can be compared with them.
            stack.at_root = True
            stack.current_index = 0
            self.collection.touch()
            return None

        if stack.at_root:
            if _starts_new_path(stack, items):
                stack_id = self.new_stack()
                if stack_id is not None:
                    logger.info("New root-level path, started %s", stack_id)
                # The new stack picks up the path on the next pass.
                return None
            stack.at_root = False

        resolution = self.resolver.update(stack, items, index)
        self.collection.touch()
        return resolution

    def describe(self, path_mode: str = "relative") -> str:
        """Dump the active stack's internal state."""
        stack = self.active
        if stack is None:
            return "No active stack"

        lines = [
            f"=== {stack.display_name} ({stack.id}) ===",
            f"Root: {describe_location(stack.root_location, path_mode)}",
            f"Current index: {stack.current_index}",
            f"Max depth: {stack.max_depth}",
            f"Editor items: {len(stack.items)}",
            f"Display items: {len(stack.display_items)}",
        ]
        for position, item in enumerate(stack.display_items, start=1):
            marker = " ← [current]" if position == stack.current_index else ""
            where = describe_location(item.origin, path_mode)
            lines.append(f"  {position}. {item.tag_token or 'unknown'} ({where}){marker}")
        return "\n".join(lines)


def _starts_new_path(stack: NavigationStack, items: list) -> bool:
    """Check whether the first jump differs from the one recorded before."""
    if not stack.items or not items:
        return False
    previous = stack.items[0]
    current = items[0]
    if previous.tag_token != current.tag_token:
        return True
    previous_file = previous.origin.file_id if previous.origin else None
    current_file = current.origin.file_id if current.origin else None
    return previous_file != current_file
