"""Stack action handlers for TagTrailApp."""

from __future__ import annotations


class StackActionsMixin:
    """Mixin providing stack commands (new, switch, clear, debug views)."""

    def action_new_stack(self) -> None:
        """Start a new stack rooted at the editor's current position."""
        before = len(self.history.collection)
        self.history.new_stack()
        if len(self.history.collection) == before:
            self.notify("Current file is not available", severity="warning")

    def action_next_stack(self) -> None:
        """Switch to the next stack."""
        self.history.switch_next()

    def action_prev_stack(self) -> None:
        """Switch to the previous stack."""
        self.history.switch_prev()

    def action_clear_stack(self) -> None:
        """Clear the active stack's history and the editor's tag stack."""
        self.history.clear()
        self.notify("Tag stack cleared")

    def action_toggle_panel(self) -> None:
        """Show or hide the stack panel."""
        self._panel_visible = not self._panel_visible
        self._refresh_panel()

    def action_show_state(self) -> None:
        """Show the active stack's internal state."""
        self.notify(self.history.describe(), timeout=10)

    def action_toggle_debug(self) -> None:
        """Turn trigger event logging on or off."""
        events = self.history.events
        if events.enabled:
            events.disable()
            self.notify("Event debugging disabled")
        else:
            events.enable()
            self.notify("Event debugging enabled")

    def action_show_events(self) -> None:
        """Show the most recent trigger events."""
        self.notify(self.history.events.format(), timeout=10)

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "n=New stack, ]=Next, [=Prev, c=Clear, p=Panel, s=State, d=Debug, e=Events, q=Quit",
            timeout=5,
        )
