"""Navigation history engine: detection, stacks, rendering and scheduling."""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

from .config import Config
from .detector import ChangeDetector
from .formatter import DisplayFormatter, Rendered
from .models import StackCollection, StackSnapshot
from .scheduler import Debouncer, TimerStarter
from .sources import NavigationSource, NavigationSourceError
from .stacks import StackManager

logger = logging.getLogger(__name__)

MAX_DEBOUNCE_MS = 1000


@dataclass
class LoggedEvent:
    """A trigger event recorded while debugging."""

    event: str
    relative_ms: int
    timestamp: float


class EventLog:
    """Ring buffer of recent trigger events, recorded only when enabled."""

    def __init__(self, max_entries: int = 50, clock: Callable[[], float] = time.monotonic) -> None:
        self.enabled = False
        self._entries: deque[LoggedEvent] = deque(maxlen=max_entries)
        self._clock = clock
        self._last_time: float | None = None

    def enable(self) -> None:
        self.enabled = True
        self.clear()

    def disable(self) -> None:
        self.enabled = False

    def clear(self) -> None:
        self._entries.clear()
        self._last_time = None

    def record(self, event: str) -> None:
        if not self.enabled:
            return
        now = self._clock() * 1000
        relative = 0 if self._last_time is None else int(now - self._last_time)
        self._entries.append(LoggedEvent(event, relative, now))
        self._last_time = now

    def entries(self) -> list[LoggedEvent]:
        return list(self._entries)

    def format(self, limit: int = 20) -> str:
        """Format the most recent events, numbered from the oldest kept."""
        if not self._entries:
            return "No events logged"
        entries = self.entries()
        start = max(0, len(entries) - limit)
        lines = [f"Recent events (last {limit}):"]
        for number, entry in enumerate(entries[start:], start=start + 1):
            lines.append(f"{number}. [+{entry.relative_ms}ms] {entry.event}")
        return "\n".join(lines)


class NavigationHistory:
    """Tracks the editor's tag stack and renders its branch-aware history.

    Trigger events go through :meth:`notify`; the snapshot is only read once
    the debounce window has elapsed, because the editor updates its tag
    stack after the triggering event fires.
    """

    def __init__(
        self,
        source: NavigationSource,
        config: Config,
        start_timer: TimerStarter | None = None,
        on_update: Callable[[], None] | None = None,
    ) -> None:
        self.source = source
        self.config = config
        self.on_update = on_update
        self.collection = StackCollection()
        self.detector = ChangeDetector()
        self.manager = StackManager(source, self.collection)
        self.formatter = DisplayFormatter()
        self.events = EventLog()
        self.debouncer = Debouncer(
            self.process,
            delay=config.timing.debounce_ms / 1000,
            fast_delay=config.timing.fast_debounce_ms / 1000,
            start_timer=start_timer,
        )

    def notify(self, event: str, fast: bool = False) -> None:
        """Record a trigger event and schedule a processing pass.

        ``fast`` selects the shorter window used after explicit jumps.
        """
        self.events.record(event)
        self.debouncer.trigger(fast=fast)

    def _read_snapshot(self) -> StackSnapshot | None:
        try:
            return self.source.poll_navigation_stack()
        except NavigationSourceError as e:
            logger.warning("Could not read navigation stack: %s", e)
            return None

    def process(self) -> bool:
        """Poll the editor and merge any change. Returns True on change."""
        snapshot = self._read_snapshot()
        if not self.detector.poll(snapshot):
            return False

        active_id = self.collection.active_id
        self.manager.ingest(snapshot)
        if active_id is None or self.collection.active_id != active_id:
            # A new or not yet created stack is populated on the next pass.
            self.detector.reset()
        self.formatter.invalidate()
        self._updated()
        return True

    def _updated(self) -> None:
        if self.on_update is not None:
            self.on_update()

    def render(self) -> Rendered:
        """Render all stacks; cached until the next change."""
        return self.formatter.render(self.collection, self.config.display)

    def has_history(self) -> bool:
        return self.manager.has_history()

    def open_file(self) -> None:
        """Handle a file being opened in the editor."""
        if self.manager.open_file() is not None:
            self._updated()

    def new_stack(self) -> None:
        if self.manager.new_stack() is not None:
            self._updated()

    def switch_next(self) -> None:
        self.manager.switch_next()
        self._updated()

    def switch_prev(self) -> None:
        self.manager.switch_prev()
        self._updated()

    def clear(self, active_only: bool = True) -> None:
        """Clear history, dropping any update still waiting to run."""
        self.debouncer.cancel()
        self.manager.clear(active_only=active_only)
        self.detector.reset()
        self.formatter.invalidate()
        self._updated()

    def set_debounce_ms(self, ms: int) -> None:
        """Set the default debounce window (0 to 1000 ms)."""
        if not 0 <= ms <= MAX_DEBOUNCE_MS:
            raise ValueError(f"debounce must be between 0 and {MAX_DEBOUNCE_MS}ms, got {ms}")
        self.config.timing.debounce_ms = ms
        self.debouncer.set_delay(ms / 1000)

    def describe(self) -> str:
        """Describe the active stack's internal state."""
        return self.manager.describe(self.config.display.path_display_mode)
