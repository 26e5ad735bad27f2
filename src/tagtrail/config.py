"""Configuration loading and defaults for tagtrail."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

PathDisplayMode = Literal["relative", "absolute", "filename"]
PATH_DISPLAY_MODES = ("relative", "absolute", "filename")


def get_config_dir() -> Path:
    """Get the tagtrail config directory (XDG-style)."""
    return Path.home() / ".config" / "tagtrail"


def get_config_path() -> Path:
    """Get the config file path."""
    return get_config_dir() / "config.toml"


def get_default_data_dir() -> Path:
    """Get the default data directory for the snapshot and log files."""
    return Path.home() / ".local" / "share" / "tagtrail"


@dataclass
class DisplayConfig:
    """How stacks are rendered in the panel."""

    max_depth: int = 20
    path_display_mode: PathDisplayMode = "relative"
    show_arity: bool = True
    show_module_path: bool = True


@dataclass
class TimingConfig:
    """Debounce windows, in milliseconds."""

    debounce_ms: int = 50
    fast_debounce_ms: int = 10


@dataclass
class PanelConfig:
    """Panel placement and visibility."""

    width: int = 40
    position: Literal["left", "right"] = "right"
    auto_show: bool = True


@dataclass
class Config:
    """Application configuration."""

    snapshot_path: Path = field(
        default_factory=lambda: get_default_data_dir() / "tagstack.json"
    )
    poll_interval: float = 1.0
    log_level: str = "WARNING"
    display: DisplayConfig = field(default_factory=DisplayConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    panel: PanelConfig = field(default_factory=PanelConfig)
    data_directory: Path = field(default_factory=lambda: get_default_data_dir())

    def get_log_path(self) -> Path:
        """Get the log file path inside the data directory."""
        return self.data_directory / "tagtrail.log"

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file or create defaults."""
        config_path = get_config_path()

        config_dir = get_config_dir()
        config_dir.mkdir(parents=True, exist_ok=True)

        if not config_path.exists():
            default_config = cls()
            default_config.data_directory.mkdir(parents=True, exist_ok=True)
            default_config.save()
            return default_config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        data_dir = data.get("data_directory", str(get_default_data_dir()))
        data_directory = Path(data_dir).expanduser()

        snapshot = data.get("snapshot_path", str(data_directory / "tagstack.json"))
        snapshot_path = Path(snapshot).expanduser()

        display_data = data.get("display", {})
        mode = display_data.get("path_display_mode", "relative")
        if mode not in PATH_DISPLAY_MODES:
            mode = "relative"
        display = DisplayConfig(
            max_depth=int(display_data.get("max_depth", 20)),
            path_display_mode=mode,
            show_arity=display_data.get("show_arity", True),
            show_module_path=display_data.get("show_module_path", True),
        )

        timing_data = data.get("timing", {})
        timing = TimingConfig(
            debounce_ms=int(timing_data.get("debounce_ms", 50)),
            fast_debounce_ms=int(timing_data.get("fast_debounce_ms", 10)),
        )

        panel_data = data.get("panel", {})
        panel = PanelConfig(
            width=int(panel_data.get("width", 40)),
            position=panel_data.get("position", "right"),
            auto_show=panel_data.get("auto_show", True),
        )

        config = cls(
            snapshot_path=snapshot_path,
            poll_interval=float(data.get("poll_interval", 1.0)),
            log_level=data.get("log_level", "WARNING"),
            display=display,
            timing=timing,
            panel=panel,
            data_directory=data_directory,
        )

        config.data_directory.mkdir(parents=True, exist_ok=True)

        return config

    def save(self) -> None:
        """Save configuration to file."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        # Build TOML content manually (tomllib is read-only)
        lines = [
            '# tagtrail Configuration',
            '',
            '# JSON file the editor writes its tag stack to',
            f'snapshot_path = "{self.snapshot_path}"',
            '',
            '# Seconds between ambient polls of the snapshot (0 disables)',
            f'poll_interval = {self.poll_interval}',
            '',
            '# Log level for the log file in data_directory',
            f'log_level = "{self.log_level}"',
            '',
            '# Directory for the log file',
            '# Default: ~/.local/share/tagtrail',
            f'data_directory = "{self.data_directory}"',
            '',
            '[display]',
            f'max_depth = {self.display.max_depth}',
            f'path_display_mode = "{self.display.path_display_mode}"  # relative, absolute or filename',
            f'show_arity = {str(self.display.show_arity).lower()}',
            f'show_module_path = {str(self.display.show_module_path).lower()}',
            '',
            '# Debounce windows in milliseconds',
            '[timing]',
            f'debounce_ms = {self.timing.debounce_ms}',
            f'fast_debounce_ms = {self.timing.fast_debounce_ms}  # after a tag jump',
            '',
            '[panel]',
            f'width = {self.panel.width}',
            f'position = "{self.panel.position}"  # left or right',
            f'auto_show = {str(self.panel.auto_show).lower()}',
        ]

        config_path.write_text("\n".join(lines) + "\n")
