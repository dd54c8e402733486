from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

import numpy as np
import scipy as sp

if TYPE_CHECKING:
    import numpy.typing as npt


class LinearSystem:
    """
    Assembled linear system A x = b in triplet form.

    The coefficient triplets are kept in emission order. Repeated (row, col) pairs
    are summed when the sparse matrix is built, never here. Arrays are read-only
    once the system has been handed over.
    """
    def __init__(
        self,
        size: int,
        rows: npt.NDArray[np.int64],
        cols: npt.NDArray[np.int64],
        values: npt.NDArray[np.float64],
        rhs: npt.NDArray[np.float64],
    ) -> None:
        """
        Initialize the system.

        Args:
            size: Number of unknowns (nx * ny).
            rows: Row index of each coefficient.
            cols: Column index of each coefficient.
            values: Value of each coefficient.
            rhs: Right-hand side vector of length `size`.
        """
        self.size = size
        self.rows = rows
        self.cols = cols
        self.values = values
        self.rhs = rhs

        for array in (self.rows, self.cols, self.values, self.rhs):
            array.flags.writeable = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size}, nnz={self.number_of_coefficients})"

    @property
    def number_of_coefficients(self) -> int:
        """Number of emitted coefficient triplets."""
        return len(self.values)

    def triplets(self) -> Iterator[tuple[int, int, float]]:
        """Iterate over (row, col, value) in emission order."""
        for r, c, v in zip(self.rows, self.cols, self.values):
            yield int(r), int(c), float(v)

    def row(self, index: int) -> list[tuple[int, float]]:
        """(col, value) pairs emitted for one row, in emission order."""
        mask = self.rows == index
        return [(int(c), float(v)) for c, v in zip(self.cols[mask], self.values[mask])]

    def to_coo(self) -> sp.sparse.coo_matrix:
        """Coefficient matrix in COO form (duplicates not yet summed)."""
        return sp.sparse.coo_matrix(
            (self.values, (self.rows, self.cols)),
            shape=(self.size, self.size),
            dtype=np.float64,
        )

    def to_csr(self) -> sp.sparse.csr_matrix:
        """Coefficient matrix in CSR form, duplicates summed."""
        return self.to_coo().tocsr()

    def is_symmetric(self, tol: float = 0.0) -> bool:
        """True if the assembled matrix equals its transpose within `tol`."""
        a = self.to_csr()
        diff = abs(a - a.T)
        return diff.nnz == 0 or float(diff.max()) <= tol
