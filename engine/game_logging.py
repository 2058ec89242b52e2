"""Logging configuration for the 2048 engine."""

import logging
import sys


FORMATS = {
    "simple": "%(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
}


def setup_logging(level: str = "WARNING", format_style: str = "simple") -> None:
    """
    Set up logging for a terminal session.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_style: "simple" or "detailed"
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    log_format = FORMATS.get(format_style, FORMATS["simple"])

    # stderr keeps log lines out of the rendered board on stdout
    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module under the shared "game2048" namespace.

    Args:
        name: Module name (typically __name__ from the calling module)
    """
    return logging.getLogger(f"game2048.{name}")
