from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import scipy as sp
from scipy.sparse.linalg import splu

from poissongrid.dev import timer
from poissongrid.exceptions import UnsolvableSystemError

if TYPE_CHECKING:
    import numpy.typing as npt

    from poissongrid.analysis.system import LinearSystem

logger = logging.getLogger(__name__)


class Solver:
    """
    Direct sparse solver for the assembled symmetric positive definite system.

    The matrix is factorized with SuperLU restricted to symmetric diagonal
    pivoting, which makes the factorization an LDL^T; a non-positive pivot means
    the matrix is not positive definite.
    """

    def __init__(self, symmetry_tolerance: float = 1e-12) -> None:
        """
        Initialize the solver.

        Args:
            symmetry_tolerance: Largest |A - A^T| entry still accepted as symmetric.
        """
        self.symmetry_tolerance = symmetry_tolerance

    def check(self, system: LinearSystem) -> sp.sparse.csr_matrix:
        """
        Verify the structural preconditions of an SPD factorization.

        Returns:
            The coefficient matrix in CSR form.

        Raises:
            UnsolvableSystemError: If the matrix is empty, not symmetric or has a
                non-positive diagonal entry.
        """
        if system.size == 0:
            raise UnsolvableSystemError("The system has no unknowns.")

        if not system.is_symmetric(tol=self.symmetry_tolerance):
            raise UnsolvableSystemError("The assembled matrix is not symmetric.")

        matrix = system.to_csr()
        bad = np.flatnonzero(matrix.diagonal() <= 0.0)
        if bad.size:
            raise UnsolvableSystemError(
                f"The assembled matrix is not positive definite: "
                f"{bad.size} non-positive diagonal entries (first at row {bad[0]})."
            )
        return matrix

    def factorize(self, matrix: sp.sparse.csr_matrix) -> sp.sparse.linalg.SuperLU:
        """
        LDL^T-style factorization of a symmetric matrix.

        Raises:
            UnsolvableSystemError: If the matrix is singular or indefinite.
        """
        try:
            lu = splu(
                matrix.tocsc(),
                permc_spec="MMD_AT_PLUS_A",
                diag_pivot_thresh=0.0,
                options={"SymmetricMode": True},
            )
        except RuntimeError as e:
            raise UnsolvableSystemError(f"The assembled matrix is singular: {e}") from e

        pivots = lu.U.diagonal()
        bad = np.flatnonzero(~(pivots > 0.0))
        if bad.size:
            raise UnsolvableSystemError(
                f"The assembled matrix is not positive definite: "
                f"{bad.size} non-positive pivots in the factorization."
            )
        return lu

    @timer
    def solve(self, system: LinearSystem) -> npt.NDArray[np.float64]:
        """
        Solve A x = b.

        Args:
            system: The assembled system.

        Returns:
            Solution vector of length `system.size`, in flat index order.

        Raises:
            UnsolvableSystemError: If the system cannot be solved.
        """
        matrix = self.check(system)

        logger.debug(f"Solving {system.size} equations with {matrix.nnz} non-zeros.")
        lu = self.factorize(matrix)
        x = np.atleast_1d(np.asarray(lu.solve(np.array(system.rhs, dtype=np.float64)), dtype=np.float64))
        if not np.all(np.isfinite(x)):
            raise UnsolvableSystemError("The solution contains non-finite values.")

        residual = np.linalg.norm(matrix @ x - system.rhs, ord=np.inf)
        logger.debug(f"Residual norm: {residual:.3e}")
        return x
