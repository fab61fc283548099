"""
Logging for the PKI engine.
Every module gets its logger from setup_logger(__name__); records go to
LOG_DIR/pki.log and the console.
"""

import logging
import sys

from .config import LOG_DIR, LOG_LEVEL, LOG_FORMAT

LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "pki.log"


def setup_logger(name: str) -> logging.Logger:
    """
    Return the module logger, writing to pki.log and stdout.

    The file receives everything down to DEBUG; stdout only INFO and up.
    Calling it again for the same name replaces the handlers.

    Args:
        name: Module name, usually __name__

    Returns:
        The logger for name
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(LOG_FILE)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Scoring debug lines stay in the file
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def log_entries_stats(entries, logger: logging.Logger, name: str = "Entries"):
    """Log entry count, logged minutes and the dates covered."""
    if not entries:
        logger.warning(f"{name}: no entries")
        return

    dates = [e.date for e in entries if e.date is not None]
    total_minutes = sum(e.duration for e in entries)
    if dates:
        logger.info(
            f"{name}: {len(entries)} entries, "
            f"{total_minutes} minutes, "
            f"date range: {min(dates)} to {max(dates)}"
        )
    else:
        logger.info(f"{name}: {len(entries)} entries, {total_minutes} minutes")
