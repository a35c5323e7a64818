# src/tableausim/simulation/__init__.py
from .exceptions import (
    SingularityKind,
    SingularSystemError,
    TableauAssemblyError,
)
from .incidence import build_incidence_matrix
from .tableau import (
    TableauAssembler,
    TableauSystem,
    build_current_coefficient_matrix,
    build_source_vector,
    build_voltage_coefficient_matrix,
)
from .solver import GaussianSolver
from .results import OperatingPoint, SingularityReport, SolveResult, SolveStatus
from .session import CircuitSession, SessionState, analyze_netlist

__all__ = [
    # Exceptions
    "SingularityKind",
    "SingularSystemError",
    "TableauAssemblyError",
    # Matrix assembly
    "build_incidence_matrix",
    "build_voltage_coefficient_matrix",
    "build_current_coefficient_matrix",
    "build_source_vector",
    "TableauAssembler",
    "TableauSystem",
    # Solve
    "GaussianSolver",
    "SolveResult",
    "SolveStatus",
    "SingularityReport",
    "OperatingPoint",
    # Session
    "CircuitSession",
    "SessionState",
    "analyze_netlist",
]
