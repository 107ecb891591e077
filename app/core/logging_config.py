# app/core/logging_config.py
import logging
import sys

from app.core.config import get_settings

LOGGER_NAME = "device_tracker"


def setup_logging() -> logging.Logger:
    """
    Sets up the application logger with a single stdout handler.
    Safe to call more than once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger
    logger.setLevel(get_settings().LOG_LEVEL.upper())

    console_handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


logger = setup_logging()
