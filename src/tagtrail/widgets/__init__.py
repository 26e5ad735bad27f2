"""tagtrail widgets."""

from .stack_panel import StackPanel, build_text

__all__ = [
    "StackPanel",
    "build_text",
]
