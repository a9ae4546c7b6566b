"""
Logging Configuration
Sets up the package logger for axialtilt.

Library modules only ever call ``logging.getLogger(__name__)``; nothing is
emitted until an application calls :func:`setup_logging` (or configures
logging itself).
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'axialtilt' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG to see degenerate-axis fallbacks)
        log_file: Optional path to save logs to a file.

    Returns:
        The configured 'axialtilt' logger.
    """
    logger = logging.getLogger("axialtilt")
    logger.setLevel(level)

    # Avoid duplicate records when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")
    return logger
