from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np
import numba as nb

if TYPE_CHECKING:
    import numpy.typing as npt

    from poissongrid.pre.geometry import Circle, Grid

OUTSIDE = -1


@nb.njit(cache=True)
def _first_containing_circle(
    x: float,
    y: float,
    cx: npt.NDArray[np.float64],
    cy: npt.NDArray[np.float64],
    r2: npt.NDArray[np.float64],
) -> int:
    """
    Index of the first circle containing (x, y), or -1.

    Args:
        x, y: Physical coordinates of the query point.
        cx, cy: (n, ) arrays of circle centres.
        r2: (n, ) array of squared radii.
    """
    for k in range(cx.shape[0]):
        ddx = x - cx[k]
        ddy = y - cy[k]
        if ddx * ddx + ddy * ddy <= r2[k]:
            return k
    return -1


@nb.njit(cache=True)
def _label_grid(
    nx: int,
    ny: int,
    xmin: float,
    dx: float,
    ymin: float,
    dy: float,
    cx: npt.NDArray[np.float64],
    cy: npt.NDArray[np.float64],
    r2: npt.NDArray[np.float64],
) -> npt.NDArray[np.int64]:
    labels = np.empty((ny, nx), dtype=np.int64)
    for j in range(ny):
        y = ymin + j * dy
        for i in range(nx):
            labels[j, i] = _first_containing_circle(xmin + i * dx, y, cx, cy, r2)
    return labels


class InclusionClassifier:
    """
    Point-in-circle classification of grid points.

    Grid point (i, j) is tested at its physical position (xmin + i*dx, ymin + j*dy)
    against the circles in order; the first match wins. The classifier holds no
    state besides the grid and the circle list.
    """

    def __init__(self, grid: Grid, circles: Sequence[Circle]) -> None:
        """
        Initialize the classifier.

        Args:
            grid: The grid whose points are classified.
            circles: Circular inclusions, in priority order.
        """
        self.grid = grid
        self.circles = tuple(circles)

        self._cx = np.array([c.x_offset for c in self.circles], dtype=np.float64)
        self._cy = np.array([c.y_offset for c in self.circles], dtype=np.float64)
        self._r2 = np.array([c.radius * c.radius for c in self.circles], dtype=np.float64)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(grid={self.grid.nx}x{self.grid.ny}, circles={len(self.circles)})"

    def __bool__(self) -> bool:
        """True if there is at least one circle to test against."""
        return len(self.circles) > 0

    def locate(self, i: int, j: int) -> int:
        """Index of the first circle containing point (i, j), or OUTSIDE."""
        x = self.grid.xmin + i * self.grid.dx
        y = self.grid.ymin + j * self.grid.dy
        return int(_first_containing_circle(x, y, self._cx, self._cy, self._r2))

    def classify(self, i: int, j: int) -> tuple[bool, int | None]:
        """
        Classify grid point (i, j).

        Returns:
            (True, k) if the point lies inside circle k, (False, None) otherwise.
        """
        k = self.locate(i, j)
        if k == OUTSIDE:
            return False, None
        return True, k

    def voltage(self, k: int) -> float:
        """Potential of circle k."""
        return self.circles[k].voltage

    def label_map(self) -> npt.NDArray[np.int64]:
        """
        (ny, nx) array holding, for each grid point, the index of the first circle
        containing it or OUTSIDE.
        """
        g = self.grid
        if g.size == 0:
            return np.full((max(g.ny, 0), max(g.nx, 0)), OUTSIDE, dtype=np.int64)
        return _label_grid(g.nx, g.ny, g.xmin, g.dx, g.ymin, g.dy, self._cx, self._cy, self._r2)
