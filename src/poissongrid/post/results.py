"""
Result Output
=============
Turns the flat solution vector back into a 2D potential map and writes it out.

The reshape result[j, i] = x[i + j*nx] is the exact inverse of the flattening
used by the assembler.
"""
from __future__ import annotations

import logging
import os
from dataclasses import asdict
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Optional

import h5py
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle as CirclePatch

from poissongrid.analysis.classifier import InclusionClassifier
from poissongrid.config import MATRIX_PRECISION, PACKAGE_NAME
from poissongrid.exceptions import AssemblyError

if TYPE_CHECKING:
    import numpy.typing as npt

    from poissongrid.pre.geometry import Grid, Problem

logger = logging.getLogger(__name__)

try:
    APP_VERSION = version(PACKAGE_NAME)
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"


def reshape_solution(x: npt.NDArray[np.float64], grid: Grid) -> npt.NDArray[np.float64]:
    """
    Reshape a flat solution vector into a (ny, nx) grid.

    Raises:
        AssemblyError: If the vector length does not match the grid.
    """
    x = np.asarray(x, dtype=np.float64)
    if x.shape != (grid.size,):
        raise AssemblyError(
            f"Solution of shape {x.shape} does not match a {grid.nx}x{grid.ny} grid."
        )
    result = np.empty(grid.shape, dtype=np.float64)
    for j in range(grid.ny):
        result[j, :] = x[j * grid.nx:(j + 1) * grid.nx]
    return result


def format_matrix(result: npt.NDArray[np.float64], precision: int = MATRIX_PRECISION) -> str:
    """
    Format a 2D array as whitespace separated rows.

    Every cell is right-aligned to the width of the widest cell in the whole
    matrix, the layout of Eigen's default matrix stream output.
    """
    cells = [[f"{v:.{precision}g}" for v in row] for row in np.atleast_2d(result)]
    if not cells or not cells[0]:
        return ""
    width = max(len(c) for row in cells for c in row)
    return "\n".join(" ".join(c.rjust(width) for c in row) for row in cells)


def write_matrix(result: npt.NDArray[np.float64], filepath: str | os.PathLike[str]) -> None:
    """Write the potential map as a plain text matrix, one grid row per line."""
    logger.info(f"Writing result matrix to: {filepath}")
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(format_matrix(result))


def save_hdf5(
    result: npt.NDArray[np.float64],
    problem: Problem,
    filepath: str | os.PathLike[str],
) -> None:
    """
    Save the potential map together with the problem definition to an HDF5 file.

    Layout:
        /potential            (ny, nx) dataset
        /grid                 attrs nx, ny, xmin, xmax, ymin, ymax
        /box                  attrs up, down, left, right
        /circles              (n, 4) dataset [x_offset, y_offset, radius, voltage]
    """
    logger.info(f"Saving results to: {filepath}")
    with h5py.File(filepath, "w") as f:
        f.attrs["version"] = APP_VERSION

        f.create_dataset("potential", data=result, compression="gzip")

        grp_grid = f.create_group("grid")
        for key, val in asdict(problem.grid).items():
            grp_grid.attrs[key] = val

        grp_box = f.create_group("box")
        for key, val in asdict(problem.box).items():
            grp_box.attrs[key] = val

        circles = np.array(
            [[c.x_offset, c.y_offset, c.radius, c.voltage] for c in problem.circles],
            dtype=np.float64,
        ).reshape(-1, 4)
        f.create_dataset("circles", data=circles)


def load_hdf5(filepath: str | os.PathLike[str]) -> npt.NDArray[np.float64]:
    """Read the potential map back from a file written by `save_hdf5`."""
    if not h5py.is_hdf5(filepath):
        raise ValueError(f"File '{filepath}' is not a valid HDF5 file.")
    with h5py.File(filepath, "r") as f:
        return np.array(f["potential"])


def plot_potential(
    result: npt.NDArray[np.float64],
    problem: Problem,
    filepath: Optional[str | os.PathLike[str]] = None,
    show: bool = False,
) -> plt.Figure:
    """
    Plot the potential map with the circle outlines and the grid points pinned
    to a circle potential.

    Args:
        result: (ny, nx) potential map.
        problem: The problem that was solved.
        filepath: If given, the figure is saved there.
        show: Open an interactive window.
    """
    grid = problem.grid
    x, y = grid.axes()

    plt.rcParams["figure.constrained_layout.use"] = True
    fig, ax = plt.subplots(figsize=(7, 5))

    mesh = ax.pcolormesh(x, y, result, cmap="jet", shading="nearest")
    fig.colorbar(mesh, ax=ax, label="Potential (V)")

    for c in problem.circles:
        ax.add_patch(CirclePatch((c.x_offset, c.y_offset), c.radius, fill=False, color="black", lw=1.0))

    labels = InclusionClassifier(grid, problem.circles).label_map()
    pinned_j, pinned_i = np.nonzero(labels >= 0)
    if pinned_i.size:
        ax.plot(x[pinned_i], y[pinned_j], "k.", ms=3, label="pinned")

    ax.set_aspect("equal")
    ax.set_xlim(grid.xmin, grid.xmax)
    ax.set_ylim(grid.ymin, grid.ymax)
    ax.set_title(f"Potential on {grid.nx}x{grid.ny} grid")
    ax.set_xlabel("x")
    ax.set_ylabel("y")

    if filepath is not None:
        logger.info(f"Saving plot to: {filepath}")
        fig.savefig(filepath)
    if show:
        plt.show()
    return fig
