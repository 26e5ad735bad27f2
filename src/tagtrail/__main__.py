"""Entry point for tagtrail."""

import logging
import sys

from .app import run_app
from .config import Config


def setup_logging(config: Config) -> None:
    """Send log records to a file; the terminal belongs to the app."""
    config.data_directory.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=config.get_log_path(),
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> int:
    """Main entry point for tagtrail."""
    try:
        config = Config.load()
        setup_logging(config)
        run_app(config)
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
