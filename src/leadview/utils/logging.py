"""Logging helpers shared by every leadview module."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the leadview hierarchy."""
    return logging.getLogger(name)


def configure_logging(verbose: bool = False) -> None:
    """
    Configure the root handler for CLI runs.

    Args:
        verbose: Emit DEBUG records when True, WARNING and above otherwise.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    root.setLevel(level)
