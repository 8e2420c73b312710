from __future__ import annotations

import logging
import sys

LOGGER_NAME = "pynetcat"
_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def init_logging(verbose: bool) -> logging.Logger:
    """Configure the pynetcat logger on stderr; silent unless ``verbose``.

    stdout is reserved for received data.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if not verbose:
        logger.setLevel(logging.CRITICAL + 1)
        logger.addHandler(logging.NullHandler())
        return logger

    logger.setLevel(logging.DEBUG)
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.DEBUG)
    ch.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(ch)
    return logger
