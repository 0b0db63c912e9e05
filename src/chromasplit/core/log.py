"""
Logging setup.

Modules obtain loggers with ``logging.getLogger(__name__)``. The CLI calls
``setup_logging`` once so progress and errors reach stderr.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER = "chromasplit"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Show chromasplit records at info level, or debug when verbose.

    A root handler is installed only if none exists, so an embedding
    application keeps its own configuration.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(format=LOG_FORMAT)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


__all__ = ["LOG_FORMAT", "setup_logging"]
