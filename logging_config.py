"""
Logging Configuration
Sets up the root logger for pagegrid.
"""
import logging
import os
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the root logger.

    curses owns the terminal while the browser runs, so records only go to
    a file. Without ``log_file`` nothing is emitted.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to append logs to.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Check if handlers already exist to avoid duplicate logs on re-init
    if logger.hasHandlers():
        logger.handlers.clear()

    if not log_file:
        logger.addHandler(logging.NullHandler())
        return

    directory = os.path.dirname(log_file)
    if directory:
        os.makedirs(directory, exist_ok=True)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.info("Logging initialized.")
