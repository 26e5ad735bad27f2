"""Data model for navigation history: events, snapshots and stacks."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Location:
    """A position in a file."""

    file_id: str
    line: int = 0


@dataclass(frozen=True)
class NavigationEvent:
    """One recorded jump to a symbol."""

    tag_token: str
    origin: Location | None = None


@dataclass(frozen=True)
class StackSnapshot:
    """Immutable copy of the host's navigation stack.

    ``current_index`` is the host's 1-based value.
    """

    items: tuple[NavigationEvent, ...] = ()
    current_index: int = 1

    def normalized_index(self) -> int:
        """Return the 0-based position, clamped to the number of items."""
        return min(max(0, self.current_index - 1), len(self.items))

    def is_empty(self) -> bool:
        return len(self.items) == 0


@dataclass
class NavigationStack:
    """A named navigation history rooted at a file."""

    id: str
    display_name: str
    root_location: Location
    items: list[NavigationEvent] = field(default_factory=list)
    display_items: list[NavigationEvent] = field(default_factory=list)
    current_index: int = 0
    max_depth: int = 0
    at_root: bool = True

    def reset(self) -> None:
        """Forget all history while keeping identity and root."""
        self.items = []
        self.display_items = []
        self.current_index = 0
        self.max_depth = 0
        self.at_root = True


class StackCollection:
    """Ordered collection of navigation stacks with one active stack."""

    def __init__(self) -> None:
        self.stacks: dict[str, NavigationStack] = {}
        self.order: list[str] = []
        self.active_id: str | None = None
        self.version = 0

    def add(self, stack: NavigationStack) -> None:
        """Append a stack and make it active."""
        self.stacks[stack.id] = stack
        self.order.append(stack.id)
        self.active_id = stack.id
        self.touch()

    def touch(self) -> None:
        """Mark the collection as changed."""
        self.version += 1

    @property
    def active(self) -> NavigationStack | None:
        if self.active_id is None:
            return None
        return self.stacks.get(self.active_id)

    def is_empty(self) -> bool:
        return len(self.order) == 0

    def __iter__(self):
        return (self.stacks[stack_id] for stack_id in self.order)

    def __len__(self) -> int:
        return len(self.order)
