"""
poissongrid
===========
Finite-difference assembly of the 2D Laplace equation on a rectangular grid
with circular conductors held at fixed potentials.
"""
from poissongrid.analysis import Assembler, InclusionClassifier, LinearSystem, assemble
from poissongrid.exceptions import (
    AssemblyError,
    ConfigurationError,
    PoissonGridError,
    UnsolvableSystemError,
)
from poissongrid.pre import BoxBoundary, Circle, Grid, Problem, load_problem, parse_problem
from poissongrid.solvers import Solver

__all__ = [
    "Assembler",
    "AssemblyError",
    "BoxBoundary",
    "Circle",
    "ConfigurationError",
    "Grid",
    "InclusionClassifier",
    "LinearSystem",
    "PoissonGridError",
    "Problem",
    "Solver",
    "UnsolvableSystemError",
    "assemble",
    "load_problem",
    "parse_problem",
]
