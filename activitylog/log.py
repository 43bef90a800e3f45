"""Logging setup."""
import logging
import os
from typing import Optional

from .config import DEBUG_MODE, DEBUG_LOG_PATH

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(debug: Optional[bool] = None, log_path: str = DEBUG_LOG_PATH) -> logging.Logger:
    """
    Configure the package logger.

    Console output is always enabled. In debug mode the level drops to DEBUG
    and records are also appended to the debug log file.
    """
    if debug is None:
        debug = DEBUG_MODE

    logger = logging.getLogger("activitylog")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if not logger.handlers:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console)

        if debug:
            os.makedirs(os.path.dirname(log_path), exist_ok=True)
            file_handler = logging.FileHandler(log_path, mode="a")
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger
