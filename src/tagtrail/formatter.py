"""Render navigation stacks as panel lines with highlight spans."""

import os
import re
from dataclasses import replace
from pathlib import PurePath
from typing import NamedTuple

from .config import DisplayConfig
from .models import Location, NavigationEvent, NavigationStack, StackCollection

HEADER = "📁 Tag Stacks:"
CONNECTOR = "  ↓"
CURRENT_MARKER = " ← [current]"
TRUNCATED = "  ... (truncated)"

GROUP_ACTIVE = "active"
GROUP_CURRENT = "current"

# Already qualified: Module.function or Module.function/arity
QUALIFIED_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9.]*\.[A-Za-z0-9_]+/?\d*$")
ARITY_PATTERN = re.compile(r"^([A-Za-z0-9_]+)/(\d+)$")
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
MODULE_PATH_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9.]*$")
SNAKE_PATTERN = re.compile(r"_([A-Za-z0-9])")
TRAILING_ARITY_PATTERN = re.compile(r"/\d+$")


class Highlight(NamedTuple):
    """A highlighted span on one rendered line."""

    group: str
    line: int
    col_start: int
    col_end: int


class Rendered(NamedTuple):
    """Rendered panel content."""

    lines: tuple[str, ...]
    highlights: tuple[Highlight, ...]


def module_name_from_path(path: str | None) -> str:
    """Infer a module name from a file path.

    ``lib/user_controller.ex`` becomes ``UserController``.
    """
    if not path:
        return "Unknown"
    name = PurePath(path).name
    stem, _, ext = name.rpartition(".")
    if not stem:
        stem = ext
    if not stem:
        return "Unknown"
    module = SNAKE_PATTERN.sub(lambda m: m.group(1).upper(), stem)
    return module[:1].upper() + module[1:]


def format_symbol(
    tag: str,
    origin: Location | None,
    config: DisplayConfig | None = None,
) -> str:
    """Build a display name for a tag jumped to from ``origin``."""
    name = _qualify(tag, origin)
    if config is not None:
        if not config.show_arity:
            name = TRAILING_ARITY_PATTERN.sub("", name)
        if not config.show_module_path:
            base, slash, arity = name.partition("/")
            name = base.rsplit(".", 1)[-1] + slash + arity
    return name


def _qualify(tag: str, origin: Location | None) -> str:
    if not tag:
        return "Unknown"

    if QUALIFIED_PATTERN.match(tag):
        return tag

    if origin is None or not origin.file_id:
        return tag

    module = module_name_from_path(origin.file_id)

    match = ARITY_PATTERN.match(tag)
    if match:
        return f"{module}.{match.group(1)}/{match.group(2)}"

    if IDENTIFIER_PATTERN.match(tag):
        return f"{module}.{tag}"

    if MODULE_PATH_PATTERN.match(tag):
        return tag

    return f"{module}.{tag}"


def describe_location(
    location: Location | None,
    mode: str = "relative",
    base: str | None = None,
) -> str:
    """Describe a location as a relative, absolute or bare file name."""
    if location is None or not location.file_id:
        return "(unknown)"

    path = location.file_id
    if mode == "filename":
        text = os.path.basename(path)
    elif mode == "absolute":
        text = os.path.abspath(path)
    else:
        start = base or os.getcwd()
        absolute = os.path.abspath(path)
        try:
            rel = os.path.relpath(absolute, start)
        except ValueError:
            rel = absolute
        text = absolute if rel.startswith("..") else rel

    if location.line:
        return f"{text}:{location.line}"
    return text


class DisplayFormatter:
    """Formats a stack collection, caching output until the collection changes."""

    def __init__(self) -> None:
        self._cache_key: tuple[int, DisplayConfig] | None = None
        self._cached: Rendered | None = None

    def invalidate(self) -> None:
        """Drop the cached rendering."""
        self._cache_key = None
        self._cached = None

    def render(
        self, collection: StackCollection, config: DisplayConfig
    ) -> Rendered:
        """Return the panel lines and highlights for ``collection``."""
        key = (collection.version, config)
        if self._cached is not None and self._cache_key == key:
            return self._cached

        rendered = self._build(collection, config)
        self._cache_key = (collection.version, replace(config))
        self._cached = rendered
        return rendered

    def _build(
        self, collection: StackCollection, config: DisplayConfig
    ) -> Rendered:
        lines: list[str] = [HEADER]
        highlights: list[Highlight] = []

        if collection.is_empty():
            lines.append("  (no stacks)")
            return Rendered(tuple(lines), ())

        multiple = len(collection) > 1
        if multiple:
            lines.append(f"  ({len(collection)} stacks)")

        for stack in collection:
            is_active = stack.id == collection.active_id
            self._render_stack(stack, is_active, config, lines, highlights)
            if multiple:
                lines.append("")

        return Rendered(tuple(lines), tuple(highlights))

    def _render_stack(
        self,
        stack: NavigationStack,
        is_active: bool,
        config: DisplayConfig,
        lines: list[str],
        highlights: list[Highlight],
    ) -> None:
        header = f"{'▶' if is_active else ' '} {stack.display_name}"
        if is_active:
            highlights.append(Highlight(GROUP_ACTIVE, len(lines), 0, len(header)))
        lines.append(header)

        root = f"  {module_name_from_path(stack.root_location.file_id)} (root)"
        if is_active and stack.current_index == 0:
            root += CURRENT_MARKER
            highlights.append(Highlight(GROUP_CURRENT, len(lines), 0, len(root)))
        lines.append(root)

        for position, item in enumerate(stack.display_items, start=1):
            if position > config.max_depth:
                lines.append(TRUNCATED)
                break

            lines.append(CONNECTOR)
            line = "  " + _item_name(item, config)
            if is_active and position == stack.current_index:
                line += CURRENT_MARKER
                highlights.append(
                    Highlight(GROUP_CURRENT, len(lines), 0, len(line))
                )
            lines.append(line)


def _item_name(item: NavigationEvent, config: DisplayConfig) -> str:
    return format_symbol(item.tag_token, item.origin, config)
