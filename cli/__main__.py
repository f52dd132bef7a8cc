"""
CLI Main Entry Point

Run this module to print a lookup path:
    python -m cli collections.OrderedDict --grep pop
"""
import logging
import sys

from mropath.utils.settings import DEFAULT_LOG_LEVEL, load_env, load_settings
from cli.main import main


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def run() -> int:
    load_env()
    try:
        level_name = load_settings().log_level
    except ValueError:
        # main() reports the invalid configuration once logging is set up
        level_name = DEFAULT_LOG_LEVEL
    configure_logging(logging.getLevelName(level_name))
    return main()


if __name__ == '__main__':
    sys.exit(run())
