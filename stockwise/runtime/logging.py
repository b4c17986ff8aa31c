"""Logging setup for every stockwise module.

All stockwise loggers hang off one ``stockwise`` logger that writes to stderr,
so CLI output on stdout (reports, spoken replies) stays clean. The level comes
from ``STOCKWISE_LOG_LEVEL`` (DEBUG, INFO, WARNING, ERROR; default INFO) and
can be changed later with ``set_log_level``; DEBUG adds line numbers.

    from stockwise.runtime.logging import get_logger
    logger = get_logger(__name__)
    logger.debug("Trigger table has %d phrases", count)
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

LOGGER_NAMESPACE = "stockwise"
LOG_LEVEL_ENV = "STOCKWISE_LOG_LEVEL"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


def _formatter(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level == logging.DEBUG else LOG_FORMAT)


def level_from_env() -> int:
    """Level named by ``STOCKWISE_LOG_LEVEL``; unknown names fall back to INFO."""
    return _LEVELS.get(os.environ.get(LOG_LEVEL_ENV, "").strip().upper(), DEFAULT_LOG_LEVEL)


def configure_logging(level: int | None = None) -> None:
    """Attach the stderr handler to the ``stockwise`` logger, once per process."""
    global _logging_configured

    if _logging_configured:
        return

    if level is None:
        level = level_from_env()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(level))

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(level)
    package_logger.addHandler(handler)
    package_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name.

    Module names already inside the package (``stockwise.finance.calculator``)
    are used as-is; anything else is nested under the ``stockwise`` namespace.
    """
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the package log level; DEBUG switches handlers to the line-number format."""
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setFormatter(_formatter(level))
