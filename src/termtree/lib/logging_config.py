"""Logging setup for termtree.

Library modules obtain loggers through ``get_logger(__name__)`` and never
configure handlers themselves. The CLI calls ``setup_logging`` once per
invocation to attach a stderr handler to the package logger.
"""

import logging
import sys

PACKAGE_LOGGER = "termtree"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the package logger for command line use.

    Args:
        verbose: Emit DEBUG records
        quiet: Only emit ERROR records (wins over verbose)

    Returns:
        The configured package logger
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Replace handlers installed by a previous call
    for handler in list(logger.handlers):
        if getattr(handler, "_termtree_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._termtree_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
