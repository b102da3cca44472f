"""Structured logging for the trie package (level, time, module, etc.)."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from ascii_trie.config import TrieConfig

PACKAGE_LOGGER_NAME = "ascii_trie"
LOG_FORMAT = (
    "level=%(levelname)s | time=%(asctime)s | module=%(module)s | "
    "funcName=%(funcName)s | lineno=%(lineno)d | message=%(message)s"
)
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Configure the package logger.

    Handlers installed by a previous call are removed first, so this can
    be called again to change the destination or the level.

    Args:
        level (int): The minimum level of the records to keep.
        log_file (Optional[Path]): Path of a rotating log file. When None,
        records are written to stderr.

    Returns:
        logging.Logger: The configured package logger.

    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)

    for old_handler in package_logger.handlers[:]:
        package_logger.removeHandler(old_handler)
        old_handler.close()

    handler: logging.Handler
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    package_logger.addHandler(handler)
    return package_logger


def setup_logging_from_config(config: TrieConfig) -> logging.Logger:
    """Configure the package logger from a loaded configuration."""
    return setup_logging(config.log_level, config.log_file)


def log_operation(
    operation: str,
    key: str,
    execution_time_ms: float,
) -> None:
    """Log the details of a trie operation.

    Args:
        operation (str): The name of the operation, e.g. "put".
        key (str): The key or prefix the operation was applied to.
        execution_time_ms (float): The execution time in milliseconds.

    """
    logging.getLogger(PACKAGE_LOGGER_NAME).info(
        "Operation: %s, Key: '%s', Execution Time: %.2f ms",
        operation,
        key,
        execution_time_ms,
    )
