"""
Logging configuration for the stormreport package.
"""

import logging
from pathlib import Path

from .paths import logs_dir

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def configure_logging(level=logging.INFO, log_dir=None) -> logging.Logger:
    """
    Set up the 'stormreport' logger with a file and a console handler.

    Safe to call more than once: existing handlers are replaced.
    """
    log_dir = Path(log_dir) if log_dir else logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("stormreport")
    logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on reload
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    # File handler - all logs go to file
    file_handler = logging.FileHandler(log_dir / "stormreport.log", encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    # Prevent propagation to root logger (avoids duplicate logs)
    logger.propagate = False

    return logger
