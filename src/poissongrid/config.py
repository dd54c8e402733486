"""
Configuration & Global Constants
================================
Central registry for the constants shared by the loader, the solver and the
command-line tool.

Exports:
    PACKAGE_NAME (str): Root logger namespace.
    LOG_LEVEL_ENV (str): Environment variable overriding the default log level.
    COMMENT_CHAR (str): Starts a comment in a properties file.
    MATRIX_PRECISION (int): Significant digits used when writing the result matrix.
"""
import logging
import os
from typing import Optional

PACKAGE_NAME: str = "poissongrid"

LOG_LEVEL_ENV: str = "POISSONGRID_LOG_LEVEL"
DEFAULT_LOG_LEVEL: int = logging.INFO

# Properties file
COMMENT_CHAR: str = "#"
CIRCLE_FIELDS: int = 4  # x_offset, y_offset, radius, voltage

# Result matrix dump
MATRIX_PRECISION: int = 6

# Stencil weights of the 5-point Laplacian
NEIGHBOUR_WEIGHT: float = -1.0
CENTER_WEIGHT: float = 4.0
PINNED_WEIGHT: float = 1.0


def resolve_log_level(name: Optional[str] = None) -> int:
    """
    Turn a level name into a logging level.

    The explicit name wins, then the environment variable, then the default.
    Unknown names raise ValueError.
    """
    if name is None:
        name = os.environ.get(LOG_LEVEL_ENV)
    if not name:
        return DEFAULT_LOG_LEVEL

    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'.")
    return level
