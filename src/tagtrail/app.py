"""Main Textual application for tagtrail."""

from typing import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Static

from .actions import StackActionsMixin
from .config import Config
from .engine import NavigationHistory
from .formatter import describe_location
from .sources import SnapshotFileSource
from .watcher import SnapshotWatcher
from .widgets import StackPanel


class TagTrailApp(StackActionsMixin, App):
    """tagtrail - branch-aware tag stack viewer."""

    TITLE = "tagtrail"
    SUB_TITLE = "Tag Stack History"

    CSS = """
    #main-container {
        width: 100%;
        height: 1fr;
    }

    #waiting {
        width: 1fr;
        height: 1fr;
        padding: 1 2;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "new_stack", "New"),
        Binding("right_square_bracket", "next_stack", "Next"),
        Binding("left_square_bracket", "prev_stack", "Prev"),
        Binding("c", "clear_stack", "Clear"),
        Binding("p", "toggle_panel", "Panel"),
        Binding("s", "show_state", "State", show=False),
        Binding("d", "toggle_debug", "Debug", show=False),
        Binding("e", "show_events", "Events", show=False),
        Binding("?", "help", "Help"),
    ]

    def __init__(self, config: Config) -> None:
        super().__init__()
        self.config = config
        self.history = NavigationHistory(
            SnapshotFileSource(config.snapshot_path),
            config,
            start_timer=self._start_timer,
            on_update=self._refresh_panel,
        )
        self._watcher: SnapshotWatcher | None = None
        self._panel_visible = not config.panel.auto_show

    def compose(self) -> ComposeResult:
        with Horizontal(id="main-container"):
            yield Static(
                f"Waiting for tag jumps in {self.config.snapshot_path}",
                id="waiting",
            )
            yield StackPanel(id="stack-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Start watching the editor once the panel exists."""
        panel = self.query_one("#stack-panel", StackPanel)
        panel.styles.width = self.config.panel.width
        panel.styles.dock = self.config.panel.position

        self.history.open_file()

        self._watcher = SnapshotWatcher(self.config.snapshot_path, self._on_snapshot_change)
        self._watcher.start()

        if self.config.poll_interval > 0:
            self.set_interval(self.config.poll_interval, self._ambient_poll)

        self._refresh_panel()

    async def on_unmount(self) -> None:
        """Clean up when app closes."""
        self.history.debouncer.cancel()
        if self._watcher:
            self._watcher.stop()

    def _start_timer(self, delay: float, callback: Callable[[], None]) -> Callable[[], None]:
        """Run debounced work on the event loop rather than a thread."""
        timer = self.set_timer(delay, callback)
        return timer.stop

    def _on_snapshot_change(self) -> None:
        """Handle snapshot writes (called from watcher thread)."""
        self.call_from_thread(self._handle_snapshot_change)

    def _handle_snapshot_change(self) -> None:
        self.history.open_file()
        self.history.notify("snapshot", fast=True)

    def _ambient_poll(self) -> None:
        self.history.notify("poll")

    def _refresh_panel(self) -> None:
        """Redraw the panel, showing it once there is history to see."""
        if (
            not self._panel_visible
            and self.config.panel.auto_show
            and self.history.has_history()
        ):
            self._panel_visible = True

        panel = self.query_one("#stack-panel", StackPanel)
        panel.display = self._panel_visible
        if not self._panel_visible:
            return

        active = self.history.collection.active
        location = None
        if active is not None:
            location = describe_location(
                active.root_location, self.config.display.path_display_mode
            )
        panel.show(self.history.render(), location)


def run_app(config: Config) -> None:
    """Run the tagtrail application."""
    app = TagTrailApp(config)
    app.run()
