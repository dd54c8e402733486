"""
Geometry & Boundary Data Model
==============================
Immutable description of the discretized domain: the rectangular grid, the
potentials held on the four sides of the box and the circular conductors
embedded inside it.

Classes:
    Grid: Grid size, physical extent and derived spacing.
    BoxBoundary: Fixed potentials outside each side of the grid.
    Circle: Circular inclusion held at a fixed potential.
    Problem: Bundle of the three, as produced by the properties loader.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Grid:
    """
    Uniform rectangular grid of nx * ny unknowns.

    Point (i, j) sits at (xmin + i*dx, ymin + j*dy) and is stored at the flat
    index i + j*nx.
    """
    nx: int
    ny: int
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def dx(self) -> float:
        """Cell spacing along x."""
        return (self.xmax - self.xmin) / self.nx

    @property
    def dy(self) -> float:
        """Cell spacing along y."""
        return (self.ymax - self.ymin) / self.ny

    @property
    def size(self) -> int:
        """Number of unknowns."""
        return self.nx * self.ny

    @property
    def shape(self) -> tuple[int, int]:
        """Shape (rows, columns) of the reshaped solution."""
        return self.ny, self.nx

    def index(self, i: int, j: int) -> int:
        """Flat index of grid point (i, j)."""
        return i + j * self.nx

    def coordinates(self, i: int, j: int) -> tuple[float, float]:
        """Physical coordinates of grid point (i, j)."""
        return self.xmin + i * self.dx, self.ymin + j * self.dy

    def axes(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Physical x and y coordinates of the grid columns and rows."""
        x = self.xmin + np.arange(self.nx, dtype=np.float64) * self.dx
        y = self.ymin + np.arange(self.ny, dtype=np.float64) * self.dy
        return x, y


@dataclass(frozen=True)
class BoxBoundary:
    """Dirichlet potentials applied just outside each side of the grid."""
    up: float = 0.0
    down: float = 0.0
    left: float = 0.0
    right: float = 0.0


@dataclass(frozen=True)
class Circle:
    """A circular conductor centred at (x_offset, y_offset)."""
    x_offset: float
    y_offset: float
    radius: float
    voltage: float

    def extends_past(self, grid: Grid) -> bool:
        """True if part of the circle lies outside the grid extent."""
        return (
            self.x_offset - self.radius < grid.xmin
            or self.x_offset + self.radius > grid.xmax
            or self.y_offset - self.radius < grid.ymin
            or self.y_offset + self.radius > grid.ymax
        )


@dataclass(frozen=True)
class Problem:
    """
    Complete boundary-value problem as read from a properties file.

    The order of `circles` matters: overlapping circles resolve to the first one.
    """
    grid: Grid
    box: BoxBoundary = field(default_factory=BoxBoundary)
    circles: tuple[Circle, ...] = ()

    def describe(self) -> str:
        """Multi-line human readable summary, used for console reporting."""
        g = self.grid
        lines = [
            "Grid properties:",
            f"  nx={g.nx} ny={g.ny} x=[{g.xmin:g}, {g.xmax:g}] y=[{g.ymin:g}, {g.ymax:g}]"
            f" dx={g.dx:g} dy={g.dy:g}",
            "Box boundary conditions:",
            f"  up={self.box.up:g} down={self.box.down:g}"
            f" left={self.box.left:g} right={self.box.right:g}",
            "Circular boundary conditions:",
        ]
        if not self.circles:
            lines.append("  (none)")
        for k, c in enumerate(self.circles):
            lines.append(
                f"  [{k}] x={c.x_offset:g} y={c.y_offset:g} r={c.radius:g} V={c.voltage:g}"
            )
        return "\n".join(lines)
