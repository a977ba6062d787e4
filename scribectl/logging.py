"""Logging configuration for the scribectl package."""
import logging
import sys

from .config import Config

# Libraries that log every request at DEBUG/INFO
NOISY_LOGGERS = ("urllib3", "kubernetes")


def setup_logging(loglevel: int = 0) -> None:
    """
    Configure logging for a CLI invocation.

    Args:
        loglevel: Verbosity in the style of kubectl's -v flag; 2 and above
            enables debug output.
    """
    if loglevel >= 2:
        level = logging.DEBUG
    else:
        level = getattr(logging, Config.LOG_LEVEL, logging.INFO)

    logging.basicConfig(
        level=level,
        format=Config.LOG_FORMAT,
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)

    # Disable debug logging for noisy libraries
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if loglevel >= 6 else logging.WARNING)

    if level == logging.DEBUG:
        logging.debug("Debug mode enabled")
