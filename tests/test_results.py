import numpy as np
import pytest

from poissongrid.exceptions import AssemblyError
from poissongrid.post.results import (
    format_matrix,
    load_hdf5,
    plot_potential,
    reshape_solution,
    save_hdf5,
    write_matrix,
)
from poissongrid.pre.geometry import Grid, Problem


def test_reshape_inverts_flattening():
    grid = Grid(nx=4, ny=3, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
    x = np.arange(grid.size, dtype=np.float64)
    result = reshape_solution(x, grid)

    assert result.shape == (3, 4)
    for j in range(grid.ny):
        for i in range(grid.nx):
            assert result[j, i] == x[i + j * grid.nx]
    np.testing.assert_array_equal(result.ravel(), x)


def test_reshape_rejects_wrong_length():
    grid = Grid(nx=2, ny=2, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
    with pytest.raises(AssemblyError):
        reshape_solution(np.zeros(5), grid)


def test_format_matrix_aligns_columns():
    text = format_matrix(np.array([[0.5, 10.0], [-1.25, 2.0]]))
    assert text.splitlines() == [
        "  0.5    10",
        "-1.25     2",
    ]


def test_format_matrix_uses_six_significant_digits():
    assert format_matrix(np.array([[1.0 / 3.0]])) == "0.333333"


def test_write_matrix_round_trip(tmp_path):
    result = np.array([[0.0, 1.5, 3.0], [2.0, -4.0, 0.125]])
    path = tmp_path / "out.txt"
    write_matrix(result, path)
    np.testing.assert_allclose(np.loadtxt(path), result)


def test_hdf5_round_trip(tmp_path, pinned_center_problem):
    result = np.arange(9, dtype=np.float64).reshape(3, 3)
    path = tmp_path / "result.h5"
    save_hdf5(result, pinned_center_problem, path)

    np.testing.assert_array_equal(load_hdf5(path), result)

    import h5py
    with h5py.File(path, "r") as f:
        assert f["grid"].attrs["nx"] == 3
        assert f["box"].attrs["up"] == 0.0
        np.testing.assert_allclose(f["circles"][0], [1 / 3, 1 / 3, 0.1, 5.0])


def test_load_hdf5_rejects_other_files(tmp_path):
    path = tmp_path / "not.h5"
    path.write_text("hello")
    with pytest.raises(ValueError):
        load_hdf5(path)


def test_plot_potential_saves_figure(tmp_path, pinned_center_problem):
    path = tmp_path / "potential.png"
    fig = plot_potential(np.zeros((3, 3)), pinned_center_problem, filepath=path)
    assert path.exists()
    assert len(fig.axes[0].patches) == 1


def test_plot_marks_pinned_points(pinned_center_problem):
    fig = plot_potential(np.zeros((3, 3)), pinned_center_problem)
    (line,) = fig.axes[0].lines
    assert line.get_xdata() == pytest.approx([1.0 / 3.0])
    assert line.get_ydata() == pytest.approx([1.0 / 3.0])


def test_plot_without_circles_marks_nothing(unit_grid_3x3, grounded_box):
    problem = Problem(grid=unit_grid_3x3, box=grounded_box, circles=())
    fig = plot_potential(np.zeros((3, 3)), problem)
    assert fig.axes[0].lines == []
    assert len(fig.axes[0].patches) == 0
