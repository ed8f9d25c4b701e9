"""
Logging setup for demos and scripts.

Library modules only create module loggers; nothing is configured on
import. Call setup_logging() once from a script entry point.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "carriersim"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    name: str = PACKAGE_LOGGER,
) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to a package logger.

    Calling it again replaces the handlers instead of stacking them.

    Args:
        level: Logging level, as a number or a name such as "DEBUG"
        log_file: Optional path to also write the log to (overwritten)
        name: Logger namespace to configure

    Returns:
        The configured logger
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown logging level: {level}")
        level = resolved

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging configured for %r at %s", name, logging.getLevelName(level))
    return logger
