import numpy as np

from poissongrid.analysis.classifier import OUTSIDE, InclusionClassifier
from poissongrid.pre.geometry import Circle, Grid


GRID = Grid(nx=5, ny=5, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)


def test_point_inside_circle():
    # (2, 2) sits at (0.4, 0.4)
    classifier = InclusionClassifier(GRID, [Circle(0.4, 0.4, 0.05, 3.0)])
    assert classifier.classify(2, 2) == (True, 0)
    assert classifier.classify(2, 3) == (False, None)
    assert classifier.voltage(0) == 3.0


def test_point_on_circle_edge_is_inside():
    # (2, 1) sits at (0.5, 0.25), exactly 0.5 from the centre
    grid = Grid(nx=4, ny=4, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
    classifier = InclusionClassifier(grid, [Circle(0.5, 0.75, 0.5, 1.0)])
    assert classifier.classify(2, 1) == (True, 0)
    assert classifier.classify(1, 0) == (False, None)


def test_first_match_wins_for_overlapping_circles():
    circles = [
        Circle(0.4, 0.4, 0.3, 1.0),
        Circle(0.4, 0.4, 0.1, 2.0),
    ]
    assert InclusionClassifier(GRID, circles).classify(2, 2) == (True, 0)
    assert InclusionClassifier(GRID, circles[::-1]).classify(2, 2) == (True, 0)
    assert InclusionClassifier(GRID, circles[::-1]).classify(1, 1) == (True, 1)


def test_no_circles():
    classifier = InclusionClassifier(GRID, [])
    assert not classifier
    assert classifier.classify(0, 0) == (False, None)
    assert classifier.locate(4, 4) == OUTSIDE


def test_label_map_matches_classify():
    circles = [
        Circle(0.2, 0.2, 0.25, 1.0),
        Circle(0.8, 0.6, 0.2, 2.0),
        Circle(0.3, 0.3, 0.5, 3.0),
    ]
    classifier = InclusionClassifier(GRID, circles)
    labels = classifier.label_map()

    assert labels.shape == (GRID.ny, GRID.nx)
    for j in range(GRID.ny):
        for i in range(GRID.nx):
            inside, k = classifier.classify(i, j)
            assert labels[j, i] == (k if inside else OUTSIDE)

    assert np.any(labels == 0)
    assert np.any(labels == 1)
    assert np.any(labels == 2)


def test_query_outside_grid_is_geometric():
    classifier = InclusionClassifier(GRID, [Circle(-0.2, 0.0, 0.05, 1.0)])
    assert classifier.classify(-1, 0) == (True, 0)


def test_empty_grid_needs_no_spacing():
    grid = Grid(nx=0, ny=2, xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)
    classifier = InclusionClassifier(grid, [Circle(0.5, 0.5, 0.1, 1.0)])
    assert classifier.label_map().shape == (2, 0)
