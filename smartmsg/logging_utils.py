"""Logging helpers for smartmsg.

Library modules log through ``logging.getLogger(__name__)``; the CLI
configures the root logger once from the ``-v`` count.
"""

import logging


def verbosity_to_level(verbosity: int) -> int:
    """Map a -v count to a logging level."""
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int) -> None:
    """
    Configure the root logger based on a verbosity count.

    verbosity == 0 -> WARNING
    verbosity == 1 -> INFO
    verbosity >= 2 -> DEBUG
    """
    logging.basicConfig(
        level=verbosity_to_level(verbosity),
        format="%(levelname)s %(name)s: %(message)s",
    )
