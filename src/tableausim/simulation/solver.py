# src/tableausim/simulation/solver.py
import logging
from typing import Optional

import numpy as np

from ..constants import DEFAULT_PIVOT_TOLERANCE
from .exceptions import SingularityKind
from .results import SolveResult
from .tableau import TableauSystem

logger = logging.getLogger(__name__)


class GaussianSolver:
    """
    Solves an augmented tableau by forward elimination with partial pivoting
    followed by back substitution.

    A pivot is considered zero when its magnitude does not exceed
    `pivot_tolerance`. Singularity is returned in the `SolveResult`, not raised.
    """
    def __init__(self, pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE):
        if not pivot_tolerance >= 0.0:
            raise ValueError(f"pivot_tolerance must be non-negative, got {pivot_tolerance}.")
        self.pivot_tolerance = float(pivot_tolerance)

    def solve(self, system: TableauSystem) -> SolveResult:
        """Solves an assembled tableau. The system itself is left untouched."""
        return self.solve_augmented(system.augmented(), system.node_count, system.branch_count)

    def solve_augmented(self, augmented: np.ndarray, node_count: int, branch_count: int) -> SolveResult:
        """
        Solves a `size x (size + 1)` augmented matrix.

        The solver works on its own copy; the caller's array is not modified.
        """
        work = np.array(augmented, dtype=float)
        size = node_count + 2 * branch_count
        if work.shape != (size, size + 1):
            raise ValueError(f"Augmented matrix has shape {work.shape}; expected {(size, size + 1)}.")

        singular_row = self.reduce_to_row_echelon(work)
        if singular_row is not None:
            kind = self.classify_singular_row(work, singular_row)
            logger.warning(f"Singular tableau: zero pivot at row {singular_row} ({kind}).")
            return SolveResult.singular(kind, singular_row, node_count, branch_count)

        solution = self.back_substitute(work)
        logger.info(f"Tableau of size {size} solved.")
        return SolveResult.solved(solution, node_count, branch_count)

    def reduce_to_row_echelon(self, augmented: np.ndarray) -> Optional[int]:
        """
        Reduces `augmented` in place to row-echelon form with unit pivots.

        Returns:
            None on success, otherwise the index of the row where no usable pivot
            was found.
        """
        size = augmented.shape[0]
        for i in range(size):
            candidates = np.abs(augmented[i:, i])
            # argmax returns the first maximum, so ties go to the upper row.
            offset = int(np.argmax(candidates))
            if candidates[offset] <= self.pivot_tolerance:
                return i

            pivot_row = i + offset
            if pivot_row != i:
                augmented[[i, pivot_row]] = augmented[[pivot_row, i]]
                logger.debug(f"Pivot column {i}: swapped rows {i} and {pivot_row}.")

            augmented[i, i:] /= augmented[i, i]

            factors = augmented[i + 1:, i].copy()
            augmented[i + 1:, i:] -= np.outer(factors, augmented[i, i:])
        return None

    def classify_singular_row(self, augmented: np.ndarray, row: int) -> SingularityKind:
        """A non-zero residual RHS on the zero-pivot row means no solution exists."""
        if abs(augmented[row, -1]) > self.pivot_tolerance:
            return SingularityKind.INCONSISTENT
        return SingularityKind.UNDER_DETERMINED

    @staticmethod
    def back_substitute(augmented: np.ndarray) -> np.ndarray:
        """Solves the upper-triangular system left by `reduce_to_row_echelon`."""
        size = augmented.shape[0]
        solution = np.zeros(size, dtype=float)
        for i in range(size - 1, -1, -1):
            acc = augmented[i, size] - augmented[i, i + 1:size] @ solution[i + 1:]
            # Diagonal is 1 after normalization.
            solution[i] = acc / augmented[i, i]
        return solution
