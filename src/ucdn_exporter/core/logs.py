"""Logging helpers built on the standard library logging module."""

import logging
import sys

ROOT_LOGGER = "ucdn_exporter"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger, nested under the package logger when name is outside it.

    Args:
        name: Usually the calling module's __name__.

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def log_exception(message: str, **attributes: str | int | float | bool) -> None:
    """Log the exception currently being handled at ERROR level.

    Args:
        message: The log message
        **attributes: Additional structured fields, passed as record extras
    """
    get_logger(ROOT_LOGGER).error(message, exc_info=True, extra=attributes)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Install a single stdout handler on the package logger.

    Calling this more than once replaces the previous handler.

    Args:
        level: Level name (e.g., "DEBUG", "INFO").

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger
