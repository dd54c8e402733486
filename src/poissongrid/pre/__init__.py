from poissongrid.pre.geometry import BoxBoundary, Circle, Grid, Problem
from poissongrid.pre.properties import load_problem, parse_problem

__all__ = [
    "BoxBoundary",
    "Circle",
    "Grid",
    "Problem",
    "load_problem",
    "parse_problem",
]
