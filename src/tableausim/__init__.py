# src/tableausim/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.debug("TableauSim package initialized.")

from .units import ureg, Quantity
from .data_structures import Component, ComponentKind, Netlist, node_to_row, row_to_node
from .parser import NetlistParser, ParsingError, MalformedNetlistError
from .validation import TopologyValidator, ValidationIssue, ValidationIssueLevel, SemanticValidationError
from .config import SolverConfig, load_solver_config, ConfigParsingError
from .simulation import (
    build_incidence_matrix,
    TableauAssembler,
    TableauSystem,
    GaussianSolver,
    SolveResult,
    SolveStatus,
    SingularityKind,
    SingularityReport,
    SingularSystemError,
    TableauAssemblyError,
    OperatingPoint,
    CircuitSession,
    analyze_netlist,
)
from .errors import TableauSimError, NetlistLoadError, ResultsUnavailableError, DiagnosableError

__all__ = [
    # Units
    "ureg", "Quantity",
    # Netlist model
    "Component", "ComponentKind", "Netlist", "node_to_row", "row_to_node",
    # Parsing & validation
    "NetlistParser", "ParsingError", "MalformedNetlistError",
    "TopologyValidator", "ValidationIssue", "ValidationIssueLevel", "SemanticValidationError",
    # Configuration
    "SolverConfig", "load_solver_config", "ConfigParsingError",
    # Tableau pipeline
    "build_incidence_matrix", "TableauAssembler", "TableauSystem",
    "GaussianSolver", "SolveResult", "SolveStatus", "SingularityKind", "SingularityReport",
    "SingularSystemError", "TableauAssemblyError", "OperatingPoint",
    # Session
    "CircuitSession", "analyze_netlist",
    # Top-Level Errors
    "TableauSimError", "NetlistLoadError", "ResultsUnavailableError", "DiagnosableError",
]
