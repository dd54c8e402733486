"""
Logging Configuration
Routes the package log to the console and, with --log-file, to a run log.
"""
import logging
import sys
from typing import Optional

from poissongrid.config import PACKAGE_NAME


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach the console (and optional run log) handlers to the 'poissongrid' logger.

    Module loggers obtained with logging.getLogger(__name__) inherit these handlers,
    so the loader, assembler and solver report through the same stream.

    Args:
        level: Threshold for both handlers, as returned by config.resolve_log_level.
        log_file: Path of the run log written next to the result matrix; truncated
            on every run.
    """
    logger = logging.getLogger(PACKAGE_NAME)
    logger.setLevel(level)

    # main() may run several times in one interpreter
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        run_log = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        run_log.setLevel(level)
        run_log.setFormatter(formatter)
        logger.addHandler(run_log)
        logger.debug(f"Run log: {log_file}")

    logger.debug(f"Log level set to {logging.getLevelName(level)}.")
