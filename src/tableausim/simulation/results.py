# src/tableausim/simulation/results.py
"""
Result contracts of the tableau solve.

`SolveResult` is what the Gaussian solver hands back: either a solution vector
or a singularity report, never both. `OperatingPoint` is the read-only view
over a successful solution that maps vector indices to named circuit
quantities. It refuses to be built from a singular result.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import numpy as np

from ..constants import GROUND_NODE
from ..data_structures import Netlist, node_to_row
from ..units import Quantity
from .exceptions import SingularityKind, SingularSystemError
from .incidence import build_incidence_matrix

logger = logging.getLogger(__name__)


class SolveStatus(Enum):
    SOLVED = "solved"
    SINGULAR = "singular"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class SingularityReport:
    """Where elimination stopped and how the zero-pivot row was classified."""
    kind: SingularityKind
    row: int

    def to_error(self) -> SingularSystemError:
        return SingularSystemError(kind=self.kind, row=self.row)


@dataclass(frozen=True, eq=False)
class SolveResult:
    """
    The outcome of one solve of a tableau.

    Attributes:
        status: SOLVED or SINGULAR.
        solution: The read-only unknown vector (length N + 2B), or None when singular.
        singularity: The singularity report, or None when solved.
        node_count: N, the number of non-ground nodes.
        branch_count: B, the number of branches.
    """
    status: SolveStatus
    node_count: int
    branch_count: int
    solution: Optional[np.ndarray] = None
    singularity: Optional[SingularityReport] = None

    @classmethod
    def solved(cls, solution: np.ndarray, node_count: int, branch_count: int) -> "SolveResult":
        solution = np.array(solution, dtype=float)
        solution.setflags(write=False)
        return cls(status=SolveStatus.SOLVED, node_count=node_count, branch_count=branch_count,
                   solution=solution)

    @classmethod
    def singular(cls, kind: SingularityKind, row: int, node_count: int, branch_count: int) -> "SolveResult":
        return cls(status=SolveStatus.SINGULAR, node_count=node_count, branch_count=branch_count,
                   singularity=SingularityReport(kind=kind, row=row))

    @property
    def is_singular(self) -> bool:
        return self.status is SolveStatus.SINGULAR

    @property
    def size(self) -> int:
        return self.node_count + 2 * self.branch_count

    def raise_if_singular(self):
        if self.singularity is not None:
            raise self.singularity.to_error()


class OperatingPoint:
    """
    Named access to a solved tableau.

    Index contract over the solution vector x:
      x[0:N]        node voltages, x[k - 1] is the voltage of node k
      x[N:N+B]      branch voltages, x[N + b] belongs to branch b
      x[N+B:N+2B]   branch currents, x[N + B + b] belongs to branch b
    Branch indices are 0-based netlist positions. Ground is fixed at 0 V.
    """
    def __init__(self, result: SolveResult, netlist: Netlist):
        result.raise_if_singular()
        if result.node_count != netlist.node_count or result.branch_count != netlist.branch_count:
            raise ValueError(
                f"Result dimensions (N={result.node_count}, B={result.branch_count}) do not match the "
                f"netlist (N={netlist.node_count}, B={netlist.branch_count})."
            )
        self.result = result
        self.netlist = netlist
        self._x: np.ndarray = result.solution
        self._n = result.node_count
        self._b = result.branch_count

    @classmethod
    def from_result(cls, result: SolveResult, netlist: Netlist) -> "OperatingPoint":
        return cls(result, netlist)

    @property
    def solution(self) -> np.ndarray:
        return self._x

    @property
    def node_voltages(self) -> np.ndarray:
        """Voltages of nodes 1..N (ground excluded)."""
        return self._x[:self._n]

    @property
    def branch_voltages(self) -> np.ndarray:
        return self._x[self._n:self._n + self._b]

    @property
    def branch_currents(self) -> np.ndarray:
        return self._x[self._n + self._b:]

    def node_voltage(self, node: int) -> float:
        """Voltage of circuit node `node` (0 = ground, always 0 V)."""
        if node == GROUND_NODE:
            return 0.0
        if not 0 < node <= self._n:
            raise IndexError(f"Node {node} is outside the range 0..{self._n}.")
        return float(self._x[node_to_row(node)])

    def branch_voltage(self, branch: int) -> float:
        return float(self.branch_voltages[self._check_branch(branch)])

    def branch_current(self, branch: int) -> float:
        return float(self.branch_currents[self._check_branch(branch)])

    def branch_power(self, branch: int) -> float:
        """Power absorbed by a branch (V * I, watts); negative for a delivering source."""
        return self.branch_voltage(branch) * self.branch_current(branch)

    def _check_branch(self, branch: int) -> int:
        if not 0 <= branch < self._b:
            raise IndexError(f"Branch {branch} is outside the range 0..{self._b - 1}.")
        return branch

    def as_quantities(self) -> Dict[str, Quantity]:
        """The three result groups as pint Quantities (V, V, A)."""
        return {
            'node_voltages': Quantity(np.array(self.node_voltages), 'volt'),
            'branch_voltages': Quantity(np.array(self.branch_voltages), 'volt'),
            'branch_currents': Quantity(np.array(self.branch_currents), 'ampere'),
        }

    # --- Re-substitution checks ---

    def kcl_residual(self) -> float:
        """Max |A i| over all nodes: net current leaving each node."""
        if self._n == 0 or self._b == 0:
            return 0.0
        incidence = build_incidence_matrix(self.netlist)
        return float(np.max(np.abs(incidence @ self.branch_currents)))

    def kvl_residual(self) -> float:
        """Max |v_b - (e_src - e_dst)| over all branches."""
        if self._b == 0:
            return 0.0
        expected = np.array([
            self.node_voltage(comp.source_node) - self.node_voltage(comp.dest_node)
            for comp in self.netlist
        ])
        return float(np.max(np.abs(self.branch_voltages - expected)))

    def ohm_residual(self) -> float:
        """Max |v - R i| over resistor branches."""
        residuals = [
            abs(self.branch_voltages[b] - comp.value * self.branch_currents[b])
            for b, comp in enumerate(self.netlist) if comp.is_resistor
        ]
        return float(max(residuals, default=0.0))
