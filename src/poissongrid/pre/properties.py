"""
Properties File Loader
======================
Reads the whitespace separated properties file describing a problem:

    xmin xmax nx
    ymin ymax ny
    up down left right
    x_offset y_offset radius voltage   (zero or more circles)

Line breaks carry no meaning; tokens are consumed in order. Everything after a
'#' on a line is ignored.
"""
from __future__ import annotations

import logging
import math
import os
from typing import Iterator

from poissongrid.config import CIRCLE_FIELDS, COMMENT_CHAR
from poissongrid.exceptions import ConfigurationError
from poissongrid.pre.geometry import BoxBoundary, Circle, Grid, Problem

logger = logging.getLogger(__name__)


def _tokens(text: str) -> list[str]:
    out: list[str] = []
    for line in text.splitlines():
        out.extend(line.split(COMMENT_CHAR, 1)[0].split())
    return out


class _TokenReader:
    """Sequential reader over the tokens of a properties file."""

    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._tokens) - self._pos

    def next_float(self, what: str) -> float:
        if self.remaining <= 0:
            raise ConfigurationError(f"Unexpected end of file while reading {what}.")
        token = self._tokens[self._pos]
        self._pos += 1
        try:
            value = float(token)
        except ValueError:
            raise ConfigurationError(f"Expected a number for {what}, got '{token}'.") from None
        if not math.isfinite(value):
            raise ConfigurationError(f"Expected a finite number for {what}, got '{token}'.")
        return value

    def next_int(self, what: str) -> int:
        value = self.next_float(what)
        if not value.is_integer():
            raise ConfigurationError(f"Expected an integer for {what}, got {value:g}.")
        return int(value)

    def chunks(self, size: int) -> Iterator[list[str]]:
        while self.remaining > 0:
            yield self._tokens[self._pos:self._pos + size]
            self._pos += size


def _read_axis(reader: _TokenReader, axis: str) -> tuple[float, float, int]:
    lo = reader.next_float(f"{axis}min")
    hi = reader.next_float(f"{axis}max")
    n = reader.next_int(f"n{axis}")
    if n < 1:
        raise ConfigurationError(f"Grid size n{axis} must be positive, got {n}.")
    if not hi > lo:
        raise ConfigurationError(f"Extent along {axis} must be ordered, got [{lo:g}, {hi:g}].")
    return lo, hi, n


def parse_problem(text: str) -> Problem:
    """
    Parse the contents of a properties file.

    Args:
        text: File contents.

    Returns:
        The problem definition.

    Raises:
        ConfigurationError: If the contents do not describe a valid problem.
    """
    reader = _TokenReader(_tokens(text))

    xmin, xmax, nx = _read_axis(reader, "x")
    ymin, ymax, ny = _read_axis(reader, "y")
    grid = Grid(nx=nx, ny=ny, xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)

    box = BoxBoundary(
        up=reader.next_float("box boundary 'up'"),
        down=reader.next_float("box boundary 'down'"),
        left=reader.next_float("box boundary 'left'"),
        right=reader.next_float("box boundary 'right'"),
    )

    circles: list[Circle] = []
    for chunk in reader.chunks(CIRCLE_FIELDS):
        k = len(circles)
        if len(chunk) != CIRCLE_FIELDS:
            raise ConfigurationError(
                f"Circle {k} is incomplete: expected {CIRCLE_FIELDS} values, got {len(chunk)}."
            )
        sub = _TokenReader(chunk)
        circle = Circle(
            x_offset=sub.next_float(f"circle {k} x_offset"),
            y_offset=sub.next_float(f"circle {k} y_offset"),
            radius=sub.next_float(f"circle {k} radius"),
            voltage=sub.next_float(f"circle {k} voltage"),
        )
        if circle.radius < 0.0:
            raise ConfigurationError(f"Circle {k} has a negative radius ({circle.radius:g}).")
        if circle.extends_past(grid):
            logger.warning(
                f"Circle {k} extends past the grid box; out-of-grid neighbours use the box potential."
            )
        circles.append(circle)

    return Problem(grid=grid, box=box, circles=tuple(circles))


def load_problem(filepath: str | os.PathLike[str]) -> Problem:
    """
    Load a problem from a properties file on disk.

    Raises:
        ConfigurationError: If the file cannot be read or is malformed.
    """
    logger.info(f"Loading properties from: {filepath}")
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read properties file '{filepath}': {e}") from e

    problem = parse_problem(text)
    logger.info(
        f"Loaded {problem.grid.nx}x{problem.grid.ny} grid with {len(problem.circles)} circle(s)."
    )
    return problem
