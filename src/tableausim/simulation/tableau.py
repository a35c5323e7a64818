# src/tableausim/simulation/tableau.py
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import scipy.sparse as sp

from ..data_structures import Netlist
from .exceptions import TableauAssemblyError
from .incidence import build_incidence_matrix

logger = logging.getLogger(__name__)


def build_voltage_coefficient_matrix(netlist: Netlist) -> np.ndarray:
    """
    B x B coefficients of the branch voltages in the constitutive equations.
    Both element types relate their own branch voltage with coefficient 1.
    """
    return np.eye(netlist.branch_count, dtype=float)


def build_current_coefficient_matrix(netlist: Netlist) -> np.ndarray:
    """
    B x B coefficients of the branch currents in the constitutive equations:
    0 for a voltage source (V = E) and -R for a resistor (V - R*I = 0).
    """
    diagonal = [-comp.value if comp.is_resistor else 0.0 for comp in netlist]
    return np.diag(np.asarray(diagonal, dtype=float))


def build_source_vector(netlist: Netlist) -> np.ndarray:
    """Right-hand side of the constitutive equations: the source value, or 0."""
    return np.array([comp.value if comp.is_voltage_source else 0.0 for comp in netlist], dtype=float)


@dataclass(frozen=True, eq=False)
class TableauSystem:
    """
    The assembled sparse tableau `T x = rhs`.

    Unknowns are ordered as N node voltages, B branch voltages, then B branch
    currents. Rows follow the same block structure: N KCL rows, B KVL rows and B
    constitutive rows.
    """
    matrix: sp.csr_matrix
    rhs: np.ndarray
    node_count: int
    branch_count: int

    @property
    def size(self) -> int:
        return self.node_count + 2 * self.branch_count

    @property
    def node_voltage_slice(self) -> slice:
        return slice(0, self.node_count)

    @property
    def branch_voltage_slice(self) -> slice:
        return slice(self.node_count, self.node_count + self.branch_count)

    @property
    def branch_current_slice(self) -> slice:
        return slice(self.node_count + self.branch_count, self.size)

    # Row blocks share the column layout.
    kcl_rows = node_voltage_slice
    kvl_rows = branch_voltage_slice
    constitutive_rows = branch_current_slice

    def augmented(self) -> np.ndarray:
        """
        A fresh dense `size x (size + 1)` array with the RHS as its last column.
        Each call returns a new array, so the solver can own and mutate it.
        """
        augmented = np.zeros((self.size, self.size + 1), dtype=float)
        augmented[:, :self.size] = self.matrix.toarray()
        augmented[:, self.size] = self.rhs
        return augmented

    def residual(self, solution: np.ndarray) -> np.ndarray:
        """`T x - rhs` for a candidate solution."""
        return self.matrix @ np.asarray(solution, dtype=float) - self.rhs


class TableauAssembler:
    """
    Stamps the incidence matrix and the element coefficient matrices of a netlist
    into one square sparse tableau, plus the independent-source RHS.

    Layout, with A the N x B incidence matrix:

        | 0     0    A   | | e |   | 0 |
        | -A^T  1    0   | | v | = | 0 |
        | 0     Mv   Mi  | | i |   | s |
    """
    def __init__(self, netlist: Netlist, incidence: Optional[np.ndarray] = None):
        if not isinstance(netlist, Netlist):
            raise TypeError("TableauAssembler requires a Netlist object.")
        self.netlist = netlist
        self.node_count = netlist.node_count
        self.branch_count = netlist.branch_count
        self.incidence = build_incidence_matrix(netlist) if incidence is None else np.asarray(incidence, dtype=float)

        expected_shape = (self.node_count, self.branch_count)
        if self.incidence.shape != expected_shape:
            raise TableauAssemblyError(
                details=f"Incidence matrix has shape {self.incidence.shape}; expected {expected_shape}."
            )

    @property
    def size(self) -> int:
        return self.node_count + 2 * self.branch_count

    def assemble(self) -> TableauSystem:
        """Builds the tableau from scratch. Nothing is carried over between calls."""
        n, b, size = self.node_count, self.branch_count, self.size
        rows: List[int] = []
        cols: List[int] = []
        data: List[float] = []

        def stamp(block: np.ndarray, row_offset: int, col_offset: int, scale: float = 1.0):
            nz_rows, nz_cols = np.nonzero(block)
            rows.extend((nz_rows + row_offset).tolist())
            cols.extend((nz_cols + col_offset).tolist())
            data.extend((scale * block[nz_rows, nz_cols]).tolist())

        # KCL: A i = 0
        stamp(self.incidence, 0, n + b)
        # KVL: -A^T e + v = 0
        stamp(self.incidence.T, n, 0, scale=-1.0)
        stamp(np.eye(b), n, n)
        # Element equations: Mv v + Mi i = s
        stamp(build_voltage_coefficient_matrix(self.netlist), n + b, n)
        stamp(build_current_coefficient_matrix(self.netlist), n + b, n + b)

        rhs = np.zeros(size, dtype=float)
        rhs[n + b:] = build_source_vector(self.netlist)

        matrix = sp.coo_matrix(
            (np.asarray(data, dtype=float), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
            shape=(size, size),
        ).tocsr()
        logger.debug(f"Tableau assembled: size {size} ({n} nodes, {b} branches), {matrix.nnz} non-zeros.")
        return TableauSystem(matrix=matrix, rhs=rhs, node_count=n, branch_count=b)
