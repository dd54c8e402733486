from poissongrid.solvers.solver import Solver

__all__ = ["Solver"]
