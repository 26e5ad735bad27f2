"""Trailing-edge debouncing of navigation trigger events."""

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

# Starts a timer that calls the function after a delay in seconds and
# returns a callable that stops it.
TimerStarter = Callable[[float, Callable[[], None]], Callable[[], None]]


def thread_timer(delay: float, callback: Callable[[], None]) -> Callable[[], None]:
    """Start a daemon ``threading.Timer``."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer.cancel


class DebounceTask:
    """One pending debounce window."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._stop: Callable[[], None] | None = None
        self.cancelled = False
        self.done = False

    def start(self, delay: float, start_timer: TimerStarter) -> None:
        self._stop = start_timer(delay, self._fire)

    def _fire(self) -> None:
        # A timer may still fire after cancel() lost the race with it.
        if self.cancelled or self.done:
            return
        self.done = True
        self._callback()

    def cancel(self) -> None:
        """Stop the task. Safe to call more than once."""
        if self.cancelled or self.done:
            return
        self.cancelled = True
        if self._stop is not None:
            self._stop()
            self._stop = None


class Debouncer:
    """Coalesces bursts of triggers into one call after a quiet period."""

    def __init__(
        self,
        callback: Callable[[], None],
        delay: float = 0.05,
        fast_delay: float = 0.01,
        start_timer: TimerStarter | None = None,
    ) -> None:
        self.callback = callback
        self.delay = delay
        self.fast_delay = fast_delay
        self._start_timer = start_timer or thread_timer
        self._lock = threading.Lock()
        self._task: DebounceTask | None = None

    @property
    def pending(self) -> bool:
        task = self._task
        return task is not None and not task.cancelled and not task.done

    def trigger(self, fast: bool = False) -> None:
        """Restart the quiet period; the callback runs when it elapses."""
        delay = self.fast_delay if fast else self.delay
        with self._lock:
            if self._task is not None:
                self._task.cancel()
            task = DebounceTask(lambda: self._run(task))
            self._task = task
        task.start(delay, self._start_timer)
        logger.debug("Scheduled update in %.0fms", delay * 1000)

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        with self._lock:
            if self._task is not None:
                self._task.cancel()
                self._task = None

    def set_delay(self, delay: float) -> None:
        """Change the default quiet period, in seconds."""
        self.delay = delay

    def _run(self, task: DebounceTask) -> None:
        with self._lock:
            if self._task is task:
                self._task = None
        self.callback()
