"""Logging setup for scripts driving the sampler."""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, format_string: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure basic logging to stdout and return the package logger."""
    logging.basicConfig(
        level=level,
        format=format_string,
        stream=sys.stdout,
    )
    return logging.getLogger("hrtrace")
