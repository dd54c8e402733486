"""
Command-Line Entry Point
========================
Reads a properties file, assembles and solves the system, and writes the
potential map.

Usage:
    $ poissongrid input_file.txt output_file.txt [--hdf5 results.h5] [--plot potential.png]
"""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from poissongrid.analysis.assembler import Assembler
from poissongrid.config import PACKAGE_NAME, resolve_log_level
from poissongrid.dev import Stopwatch
from poissongrid.exceptions import ConfigurationError, UnsolvableSystemError
from poissongrid.logging_config import setup_logging
from poissongrid.post.results import plot_potential, reshape_solution, save_hdf5, write_matrix
from poissongrid.pre.properties import load_problem
from poissongrid.solvers.solver import Solver

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIGURATION = 1
EXIT_UNSOLVABLE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PACKAGE_NAME,
        description="Solve the 2D Laplace equation on a grid with circular conductors.",
    )
    parser.add_argument("input_file", help="Properties file describing the grid and boundaries.")
    parser.add_argument("output_file", help="Text file receiving the potential matrix.")
    parser.add_argument("--hdf5", metavar="PATH", help="Also save results to an HDF5 file.")
    parser.add_argument("--plot", metavar="PATH", help="Save a colour map of the potential.")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ... (default: INFO).")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = resolve_log_level(args.log_level)
    except ValueError as e:
        parser.error(str(e))
    setup_logging(level=level, log_file=args.log_file)

    logger.info(f"input file: {args.input_file}")
    logger.info(f"output file: {args.output_file}")

    try:
        problem = load_problem(args.input_file)
    except ConfigurationError as e:
        logger.error(f"Invalid properties file: {e}")
        return EXIT_CONFIGURATION

    for line in problem.describe().splitlines():
        logger.info(line)

    grid = problem.grid
    with Stopwatch() as sw:
        system = Assembler.from_problem(problem).assemble()
        logger.info("The problem has been built.")
        try:
            x = Solver().solve(system)
        except UnsolvableSystemError as e:
            logger.error(f"Unsolvable system: {e}")
            return EXIT_UNSOLVABLE
    logger.info(f"For n of {grid.nx}x{grid.ny}, the elapsed time is: {sw.elapsed:.6f} s")

    result = reshape_solution(x, grid)
    write_matrix(result, args.output_file)

    if args.hdf5:
        save_hdf5(result, problem, args.hdf5)
    if args.plot:
        plot_potential(result, problem, filepath=args.plot)

    return EXIT_OK
