# src/tableausim/simulation/exceptions.py
"""
Defines the diagnosable exceptions of the tableau pipeline.

`TableauAssemblyError` signals inputs that cannot be stamped into a tableau at all
(a shape mismatch or a node outside the incidence matrix). `SingularSystemError`
is the raised form of a singular solve. The solver itself never raises it: it
reports singularity through `SolveResult`, and the error only appears when a
caller asks a singular result for its solution.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from ..errors import DiagnosableError, format_diagnostic_report


class SingularityKind(Enum):
    """The two ways a tableau can fail to have a unique solution."""
    INCONSISTENT = "inconsistent"
    UNDER_DETERMINED = "under-determined"

    def __str__(self):
        return self.value


@dataclass()
class TableauAssemblyError(DiagnosableError):
    """
    Raised when the netlist or incidence matrix cannot be assembled into a tableau.
    """
    details: str
    component_id: Optional[str] = None

    def __str__(self):
        return f"Tableau assembly failed: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Tableau Assembly Error",
            details=self.details,
            suggestion="Check that every node number lies between 0 and the largest node in the netlist.",
            context={'component': self.component_id}
        )


@dataclass()
class SingularSystemError(DiagnosableError, np.linalg.LinAlgError):
    """
    Raised when a solution is requested from a singular tableau.

    Also a `numpy.linalg.LinAlgError`, so numerical callers can catch it the
    same way they catch numpy's own failures.
    """
    kind: SingularityKind
    row: int

    def __str__(self):
        return f"Singular tableau ({self.kind}) detected at row {self.row}"

    def get_diagnostic_report(self) -> str:
        if self.kind is SingularityKind.INCONSISTENT:
            details = (
                f"Elimination found a zero pivot at row {self.row} with a non-zero right-hand side.\n"
                "The circuit equations contradict each other and have no solution."
            )
            suggestion = "Look for voltage sources of different values in parallel or in a loop."
        else:
            details = (
                f"Elimination found a zero pivot at row {self.row} with a zero right-hand side.\n"
                "The circuit equations admit infinitely many solutions."
            )
            suggestion = (
                "Look for node numbers that no component uses, groups of nodes with no path to\n"
                "ground, or sources whose current is not determined by the rest of the circuit."
            )
        return format_diagnostic_report(
            error_type=f"Singular System ({self.kind})",
            details=details,
            suggestion=suggestion,
            context={'row': self.row}
        )
