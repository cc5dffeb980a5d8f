"""Centralized logging utilities."""

import logging
import sys
from typing import Optional, TextIO
from pathlib import Path

from xtemp.domain.exceptions import ConfigurationError

ROOT_LOGGER = "xtemp"
DIAGNOSTIC_FORMAT = "xtemp: %(message)s"
VERBOSE_FORMAT = "[%(asctime)s] [%(name)s] [%(levelname)s] %(message)s"


def setup_logger(
    name: str = ROOT_LOGGER,
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Console output goes to stderr unless ``stream`` is given, since stdout
    carries the output of the commands being run.

    Args:
        name: Logger name
        level: Logging level
        log_file: Optional file to write logs to
        format_string: Custom format string
        stream: Console stream (defaults to stderr)

    Returns:
        Configured logger instance

    Raises:
        ConfigurationError: If the log file cannot be opened; the console
            handler is already installed by then
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if format_string is None:
        format_string = VERBOSE_FORMAT if level <= logging.DEBUG else DIAGNOSTIC_FORMAT

    formatter = logging.Formatter(format_string, datefmt='%H:%M:%S')

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            raise ConfigurationError(f"cannot open log file {log_file}: {e.strerror or e}") from e
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(file_handler)
        # the file always gets the full debug trail
        logger.setLevel(logging.DEBUG)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``xtemp`` hierarchy.

    Module loggers carry no handlers of their own; records propagate to the
    root logger configured by ``setup_logger``.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class LoggerAdapter:
    """Adapter to make standard logger compatible with ILogger protocol."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        self._logger.warning(message, extra=kwargs)

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        self._logger.error(message, extra=kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        self._logger.exception(message, extra=kwargs)
