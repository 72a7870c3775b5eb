"""Logging configuration for the inventory backend.

Sets up a named logger with a console handler and, when a log directory is
configured, a date-named file handler.
"""

import logging
from datetime import date
from pathlib import Path

from core.config import Settings

LOGGER_NAME = "inventory"


def setup_logging(config: Settings) -> logging.Logger:
    """Set up application logging.

    Args:
        config: Settings carrying ``log_level`` and ``log_dir``.

    Returns:
        The configured root application logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # Clear any existing handlers (uvicorn reload calls this again)
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_formatter = logging.Formatter("%(levelname)s - %(name)s - %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / f"inventory-{date.today().isoformat()}.log")
        file_handler.setLevel(config.log_level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Get the application logger, or a child of it for ``name``."""
    if not name:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
