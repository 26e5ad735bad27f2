"""Action handler mixins for TagTrailApp."""

from .stack_actions import StackActionsMixin

__all__ = [
    "StackActionsMixin",
]
