# File: phaserconf/utils.py
# Location: phaserconf/phaserconf/utils.py

"""
Utility functions module.

Provides helpers to create the package logger, attach and detach the
optional log file, and emit report lines.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Configure stderr logging and return the package logger.

    Parameters
    ----------
    log_level : str
        One of DEBUG, INFO, WARN or ERROR.

    Returns
    -------
    logging.Logger
        The "phaserconf" logger, to be passed to validators and reporters.
    """
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
    )
    logger = logging.getLogger("phaserconf")
    logger.setLevel(LOG_LEVELS[log_level])
    return logger


def add_log_file(
    logger: logging.Logger, log_file: str, log_level: str = "INFO"
) -> logging.FileHandler:
    """
    Duplicate all subsequent log records into a file.

    The file is opened in append mode and created if needed.

    Parameters
    ----------
    logger : logging.Logger
        Logger to attach the handler to.
    log_file : str
        Path of the log file.
    log_level : str
        Minimum level written to the file.

    Returns
    -------
    logging.FileHandler
        The attached handler.

    Raises
    ------
    ConfigurationError
        If the log file cannot be created.
    """
    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Impossible to create log file [{log_file}]", "log", {"reason": str(e)}
        ) from e

    fh.setLevel(LOG_LEVELS[log_level])
    fh.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(fh)
    logger.debug(f"Logging to file enabled: {log_file}")
    return fh


def close_logging(logger: logging.Logger, handler: Optional[logging.Handler] = None) -> None:
    """Flush and detach a handler previously added with add_log_file."""
    if handler is None:
        return
    handler.flush()
    logger.removeHandler(handler)
    handler.close()


def log_lines(logger: logging.Logger, lines: Iterable[str]) -> None:
    """Log each report line at INFO level."""
    for line in lines:
        logger.info(line)
