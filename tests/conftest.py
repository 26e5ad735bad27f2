"""Shared fixtures for tagtrail tests."""

import os

import pytest

from tagtrail.models import Location, NavigationEvent, StackSnapshot
from tagtrail.sources import NavigationSourceError


def event(tag, origin="lib/server.ex", line=1):
    """Build a navigation event jumped to from ``origin``."""
    return NavigationEvent(tag, Location(origin, line) if origin else None)


def snapshot(*tags, index=None, origin="lib/server.ex"):
    """Build a host snapshot; ``index`` is 0-based like the engine's view."""
    items = tuple(event(tag, origin) for tag in tags)
    if index is None:
        index = len(items)
    return StackSnapshot(items=items, current_index=index + 1)


class FakeSource:
    """In-memory navigation source standing in for the editor."""

    def __init__(self, current_file="lib/user_controller.ex", files=None):
        self.current_file = current_file
        self.cursor_line = 1
        self.snapshot = StackSnapshot()
        self.files = set(files) if files is not None else {current_file}
        self.fail = False
        self.resets = 0

    def poll_navigation_stack(self):
        if self.fail:
            raise NavigationSourceError("editor unavailable")
        return self.snapshot

    def current_file_path(self):
        return self.current_file

    def current_cursor_line(self):
        return self.cursor_line

    def directory_listing(self, path):
        return sorted(
            os.path.basename(f) for f in self.files
            if (os.path.dirname(f) or ".") == path
        )

    def reset_navigation_stack(self):
        self.resets += 1
        self.snapshot = StackSnapshot()


class ManualTimers:
    """Timer starter driven by a manual clock."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def start(self, delay, callback):
        entry = {"due": self.now + delay, "callback": callback, "active": True}
        self.timers.append(entry)

        def cancel():
            entry["active"] = False

        return cancel

    @property
    def active(self):
        return [t for t in self.timers if t["active"]]

    def advance(self, seconds):
        """Move the clock forward, firing due timers in order."""
        self.now += seconds
        for entry in sorted(self.timers, key=lambda t: t["due"]):
            if entry["active"] and entry["due"] <= self.now:
                entry["active"] = False
                entry["callback"]()


@pytest.fixture
def source():
    return FakeSource(files={"lib/user_controller.ex", "lib/server.ex"})


@pytest.fixture
def timers():
    return ManualTimers()


@pytest.fixture
def sample_config(tmp_path):
    """Create a Config with data kept under tmp_path."""
    from tagtrail.config import Config

    return Config(
        snapshot_path=tmp_path / "data" / "tagstack.json",
        data_directory=tmp_path / "data",
    )
