import logging
import sys

from .constants import LOGGER_NAME, LOG_LEVEL


def setup_logger(name: str = LOGGER_NAME, level: str = LOG_LEVEL) -> logging.Logger:
    # Reuse Uvicorn's error logger handlers so bus output lands next to the API's
    base_logger = logging.getLogger("uvicorn.error")
    logger = logging.getLogger(name)
    if base_logger.handlers and not logger.handlers:
        for h in base_logger.handlers:
            logger.addHandler(h)
    logger.propagate = False
    if logger.handlers:
        return logger  # avoid duplicate handlers

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(module: str) -> logging.Logger:
    """Child logger of the package logger, e.g. ``messagebus.models``."""
    setup_logger()
    return logging.getLogger(f"{LOGGER_NAME}.{module}")
