"""
Logging configuration for the document merger.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "doc_merger"

CONSOLE_FORMAT = "%(message)s"
VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the package logger.

    Sets up:
    - Console handler (stdout), INFO or DEBUG when verbose
    - File handler (if log_file is given), always DEBUG

    Args:
        log_file: Optional path of a log file
        verbose: Enable DEBUG output on the console

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        VERBOSE_FORMAT if verbose else CONSOLE_FORMAT, datefmt=DATE_FORMAT
    ))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(VERBOSE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.debug("Logging initialized (verbose=%s, log_file=%s)", verbose, log_file)
    return logger


def get_logger() -> logging.Logger:
    """Get the package-level logger."""
    return logging.getLogger(ROOT_LOGGER_NAME)


def get_module_logger(name: str) -> logging.Logger:
    """Get a child logger for a module (typically __name__)."""
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def get_merger_logger() -> logging.Logger:
    """Logger for the export pipeline."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.merger")


def get_docx_logger() -> logging.Logger:
    """Logger for document modification."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.docx")


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Mask a credential for logging, keeping only the last few characters."""
    if not value:
        return "<unset>"
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
