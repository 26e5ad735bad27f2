"""Panel widget showing rendered navigation stacks."""

from rich.text import Text

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Static

from ..formatter import GROUP_ACTIVE, GROUP_CURRENT, Rendered

HIGHLIGHT_STYLES = {
    GROUP_ACTIVE: "bold bright_green",
    GROUP_CURRENT: "bold bright_yellow",
}


def build_text(rendered: Rendered) -> Text:
    """Turn rendered lines and highlight spans into styled text."""
    text = Text()
    offsets: list[int] = []
    for line in rendered.lines:
        offsets.append(len(text))
        text.append(line)
        text.append("\n")

    for hl in rendered.highlights:
        if hl.line >= len(offsets):
            continue
        style = HIGHLIGHT_STYLES.get(hl.group, hl.group)
        start = offsets[hl.line]
        text.stylize(style, start + hl.col_start, start + hl.col_end)
    return text


class StackPanel(Vertical):
    """Widget displaying the tag stack history."""

    DEFAULT_CSS = """
    StackPanel {
        width: 40;
        height: 1fr;
        border: round $accent;
    }

    StackPanel > #stack-header {
        background: $primary-background;
        color: $accent;
        text-style: bold;
        padding: 0 1;
        height: 1;
    }

    StackPanel > #stack-scroll {
        height: 1fr;
    }

    StackPanel #stack-body {
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("TAG STACK", id="stack-header")
        with VerticalScroll(id="stack-scroll"):
            yield Static("", id="stack-body")

    def show(self, rendered: Rendered, location: str | None = None) -> None:
        """Display rendered stacks; ``location`` describes the active root."""
        self.query_one("#stack-body", Static).update(build_text(rendered))
        header = "TAG STACK"
        if location:
            header = f"TAG STACK - {location}"
        self.query_one("#stack-header", Static).update(header)
