from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

import numpy as np

from poissongrid.analysis.classifier import InclusionClassifier
from poissongrid.analysis.system import LinearSystem
from poissongrid.config import CENTER_WEIGHT, NEIGHBOUR_WEIGHT, PINNED_WEIGHT
from poissongrid.dev import timer
from poissongrid.exceptions import AssemblyError

if TYPE_CHECKING:
    import numpy.typing as npt

    from poissongrid.pre.geometry import BoxBoundary, Circle, Grid, Problem

logger = logging.getLogger(__name__)


class Assembler:
    """
    5-point finite-difference assembler for the Laplace equation.

    Every grid point either gets a pinned row (it lies inside a circle) or the
    stencil 4*u[i,j] - u[i-1,j] - u[i+1,j] - u[i,j-1] - u[i,j+1] = 0, where each
    neighbour with a known potential (outside the box or inside a circle) is
    moved to the right-hand side.

    The assembler owns its coefficient buffers for the duration of one pass and
    hands them over as a LinearSystem.
    """

    def __init__(
        self,
        grid: Grid,
        box: BoxBoundary,
        circles: Sequence[Circle] = (),
    ) -> None:
        """
        Initialize the assembler.

        Args:
            grid: Grid of unknowns.
            box: Potentials just outside the four sides of the grid.
            circles: Circular inclusions, in priority order.
        """
        self.grid = grid
        self.box = box
        self.classifier = InclusionClassifier(grid, circles)

        self._rows: list[int] = []
        self._cols: list[int] = []
        self._values: list[float] = []
        self._rhs: npt.NDArray[np.float64] = np.zeros(0, dtype=np.float64)

        self.n_pinned = 0
        self.n_box_folds = 0
        self.n_circle_folds = 0

    @classmethod
    def from_problem(cls, problem: Problem) -> Assembler:
        return cls(problem.grid, problem.box, problem.circles)

    def _reset(self) -> None:
        self._rows = []
        self._cols = []
        self._values = []
        self._rhs = np.zeros(self.grid.size, dtype=np.float64)
        self.n_pinned = 0
        self.n_box_folds = 0
        self.n_circle_folds = 0

    def _emit(self, row: int, col: int, weight: float) -> None:
        if not (0 <= col < self.grid.size):
            raise AssemblyError(
                f"Column {col} of row {row} is outside the {self.grid.size} unknowns."
            )
        self._rows.append(row)
        self._cols.append(col)
        self._values.append(weight)

    def resolve(self, center_id: int, ni: int, nj: int, weight: float) -> None:
        """
        Add the contribution of grid location (ni, nj) to the equation of `center_id`.

        The checks run in a fixed order and the first one that applies wins:
        left, right, up and down sides of the box, then the circles, and only then
        is (ni, nj) treated as an unknown.
        """
        nx, ny = self.grid.nx, self.grid.ny
        box = self.box

        if ni == -1:
            self._rhs[center_id] -= weight * box.left
            self.n_box_folds += 1
        elif ni == nx:
            self._rhs[center_id] -= weight * box.right
            self.n_box_folds += 1
        elif nj == -1:
            self._rhs[center_id] -= weight * box.up
            self.n_box_folds += 1
        elif nj == ny:
            self._rhs[center_id] -= weight * box.down
            self.n_box_folds += 1
        else:
            inside, k = self.classifier.classify(ni, nj) if self.classifier else (False, None)
            if inside:
                self._rhs[center_id] -= weight * self.classifier.voltage(k)
                self.n_circle_folds += 1
            else:
                self._emit(center_id, ni + nj * nx, weight)

    def _assemble_point(self, i: int, j: int) -> None:
        center_id = self.grid.index(i, j)

        if self.classifier:
            inside, k = self.classifier.classify(i, j)
            if inside:
                # Potential is fixed: the row is the identity
                self._emit(center_id, center_id, PINNED_WEIGHT)
                self._rhs[center_id] = self.classifier.voltage(k)
                self.n_pinned += 1
                return

        self.resolve(center_id, i - 1, j, NEIGHBOUR_WEIGHT)
        self.resolve(center_id, i + 1, j, NEIGHBOUR_WEIGHT)
        self.resolve(center_id, i, j - 1, NEIGHBOUR_WEIGHT)
        self.resolve(center_id, i, j + 1, NEIGHBOUR_WEIGHT)
        self.resolve(center_id, i, j, CENTER_WEIGHT)

    @timer
    def assemble(self) -> LinearSystem:
        """
        Run one assembly pass over every grid point (j outer, i inner).

        Returns:
            The assembled system; repeated calls give identical results.
        """
        self._reset()
        grid = self.grid

        for j in range(grid.ny):
            for i in range(grid.nx):
                self._assemble_point(i, j)

        system = LinearSystem(
            size=grid.size,
            rows=np.array(self._rows, dtype=np.int64),
            cols=np.array(self._cols, dtype=np.int64),
            values=np.array(self._values, dtype=np.float64),
            rhs=self._rhs,
        )

        # Buffers now belong to the system
        self._rows, self._cols, self._values = [], [], []
        self._rhs = np.zeros(0, dtype=np.float64)

        logger.debug(
            f"Assembled {system.number_of_coefficients} coefficients for {grid.size} unknowns "
            f"({self.n_pinned} pinned, {self.n_box_folds} box folds, {self.n_circle_folds} circle folds)."
        )
        return system


def assemble(grid: Grid, box: BoxBoundary, circles: Sequence[Circle] = ()) -> LinearSystem:
    """Assemble the linear system for a grid, its box potentials and its circles."""
    return Assembler(grid, box, circles).assemble()
