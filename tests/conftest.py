import logging

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from poissongrid.config import PACKAGE_NAME
from poissongrid.pre.geometry import BoxBoundary, Circle, Grid, Problem


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    plt.close("all")


@pytest.fixture
def unit_grid_3x3() -> Grid:
    return Grid(nx=3, ny=3, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)


@pytest.fixture
def grounded_box() -> BoxBoundary:
    return BoxBoundary(up=0.0, down=0.0, left=0.0, right=0.0)


@pytest.fixture
def pinned_center_problem(unit_grid_3x3, grounded_box) -> Problem:
    # Point (1, 1) sits at (1/3, 1/3); its neighbours are 1/3 away
    circle = Circle(x_offset=1.0 / 3.0, y_offset=1.0 / 3.0, radius=0.1, voltage=5.0)
    return Problem(grid=unit_grid_3x3, box=grounded_box, circles=(circle,))


@pytest.fixture
def two_circle_problem() -> Problem:
    grid = Grid(nx=8, ny=6, xmin=-1.0, xmax=1.0, ymin=0.0, ymax=3.0)
    box = BoxBoundary(up=1.0, down=-2.0, left=0.5, right=3.0)
    circles = (
        Circle(x_offset=-0.5, y_offset=1.0, radius=0.6, voltage=10.0),
        Circle(x_offset=0.25, y_offset=2.0, radius=0.45, voltage=-4.0),
    )
    return Problem(grid=grid, box=box, circles=circles)


PROPERTIES_TEXT = """\
0 1 3
0 1 3
0 0 0 0
0.3333333333333333 0.3333333333333333 0.1 5
"""


@pytest.fixture
def properties_file(tmp_path):
    path = tmp_path / "properties.txt"
    path.write_text(PROPERTIES_TEXT, encoding="utf-8")
    return path
