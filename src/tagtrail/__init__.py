"""tagtrail: branch-aware history of editor tag jumps."""

from .engine import NavigationHistory
from .models import Location, NavigationEvent, NavigationStack, StackCollection, StackSnapshot

__all__ = [
    "Location",
    "NavigationEvent",
    "NavigationHistory",
    "NavigationStack",
    "StackCollection",
    "StackSnapshot",
]
