"""Logging helpers shared by every launchboard module."""

import logging
import sys

ROOT_LOGGER_NAME = "launchboard"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger. Handlers live on the package root logger only."""
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Install a single stderr handler on the package root logger.

    Safe to call more than once; an existing handler is reused and only the
    level is updated.

    Args:
        verbose: DEBUG when True, INFO otherwise

    Returns:
        The configured root logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.INFO
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    for handler in root.handlers:
        handler.setLevel(level)
    root.setLevel(level)
    return root
