# src/tableausim/simulation/session.py
"""
Defines `CircuitSession`, the stateful facade the outer layers (CLI, scripts)
talk to.

All derived data of a load (netlist, tableau, solve result, validation
issues) lives in one immutable `SessionState`. Loading a netlist or clearing
the session swaps in a whole new state object, so a failed or singular load
can never leave stale matrices or a stale solution behind.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np

from ..config import SolverConfig
from ..data_structures import Netlist
from ..errors import DiagnosableError, NetlistLoadError, ResultsUnavailableError
from ..parser import NetlistParser
from ..validation import TopologyValidator, SemanticValidationError, ValidationIssue, ValidationIssueLevel
from .results import OperatingPoint, SolveResult
from .solver import GaussianSolver
from .tableau import TableauAssembler, TableauSystem

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SessionState:
    """Everything derived from one netlist load. The default instance is the empty state."""
    netlist: Optional[Netlist] = None
    tableau: Optional[TableauSystem] = None
    result: Optional[SolveResult] = None
    issues: Tuple[ValidationIssue, ...] = field(default_factory=tuple)


def analyze_netlist(netlist: Netlist, config: Optional[SolverConfig] = None) -> SessionState:
    """
    Runs the full pipeline on a netlist: validation, incidence matrix, tableau
    assembly and Gaussian solve.

    Raises:
        SemanticValidationError: if the netlist has structural errors.
        TableauAssemblyError: if the tableau cannot be assembled.
    """
    config = config or SolverConfig()
    issues: List[ValidationIssue] = []
    if config.validate_topology:
        issues = TopologyValidator(netlist).validate()
        for issue in issues:
            if issue.level == ValidationIssueLevel.WARNING:
                logger.warning(str(issue))
        if any(i.is_error for i in issues):
            raise SemanticValidationError(issues)

    tableau = TableauAssembler(netlist).assemble()
    result = GaussianSolver(pivot_tolerance=config.pivot_tolerance).solve(tableau)
    return SessionState(netlist=netlist, tableau=tableau, result=result, issues=tuple(issues))


class CircuitSession:
    """
    Holds the currently loaded netlist and its DC operating point.

    Typical use::

        session = CircuitSession()
        session.load_file("divider.net")
        if not session.is_singular:
            currents = session.branch_currents()
    """
    def __init__(self, config: Optional[SolverConfig] = None):
        self.config: SolverConfig = config or SolverConfig()
        self._parser = NetlistParser()
        self._state = SessionState()

    # --- State inspection ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def netlist(self) -> Optional[Netlist]:
        return self._state.netlist

    @property
    def tableau(self) -> Optional[TableauSystem]:
        return self._state.tableau

    @property
    def result(self) -> Optional[SolveResult]:
        return self._state.result

    @property
    def issues(self) -> Tuple[ValidationIssue, ...]:
        return self._state.issues

    @property
    def is_loaded(self) -> bool:
        return self._state.result is not None

    @property
    def is_singular(self) -> bool:
        return self.is_loaded and self._state.result.is_singular

    # --- Loading ---

    def load_netlist(self, netlist: Netlist) -> SolveResult:
        """
        Replaces the session state with the analysis of `netlist`.

        A singular tableau is a normal outcome, recorded in the returned result.
        Any other failure clears the session and raises `NetlistLoadError`.
        """
        self.clear()
        try:
            self._state = analyze_netlist(netlist, self.config)
        except DiagnosableError as e:
            raise NetlistLoadError(e.get_diagnostic_report()) from e

        if self._state.result.is_singular:
            report = self._state.result.singularity
            logger.warning(f"Loaded netlist is singular ({report.kind}) at row {report.row}; results are unavailable.")
        else:
            logger.info(f"Netlist loaded and solved: {netlist.node_count} node(s), {netlist.branch_count} branch(es).")
        return self._state.result

    def load_file(self, netlist_path: Union[str, Path]) -> SolveResult:
        self.clear()
        try:
            netlist = self._parser.parse_file(netlist_path)
        except DiagnosableError as e:
            raise NetlistLoadError(e.get_diagnostic_report()) from e
        return self.load_netlist(netlist)

    def load_text(self, text: str) -> SolveResult:
        self.clear()
        try:
            netlist = self._parser.parse_text(text)
        except DiagnosableError as e:
            raise NetlistLoadError(e.get_diagnostic_report()) from e
        return self.load_netlist(netlist)

    def solve_again(self) -> SolveResult:
        """Re-solves the current tableau without reloading; the stored result is replaced."""
        if self._state.tableau is None:
            raise ResultsUnavailableError("No netlist is loaded.")
        result = GaussianSolver(pivot_tolerance=self.config.pivot_tolerance).solve(self._state.tableau)
        self._state = SessionState(
            netlist=self._state.netlist, tableau=self._state.tableau, result=result, issues=self._state.issues
        )
        return result

    def clear(self):
        """Discards all derived state and returns to the pre-load state."""
        self._state = SessionState()

    # --- Queries ---

    def operating_point(self) -> OperatingPoint:
        if not self.is_loaded:
            raise ResultsUnavailableError("No netlist is loaded. Load a netlist before querying results.")
        try:
            return OperatingPoint.from_result(self._state.result, self._state.netlist)
        except DiagnosableError as e:
            raise ResultsUnavailableError(e.get_diagnostic_report()) from e

    def branch_currents(self) -> np.ndarray:
        """Currents of branches 1..B, in netlist order."""
        return self.operating_point().branch_currents

    def voltages(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns (node_voltages, branch_voltages). Node voltages include ground as
        element 0, so index k is the voltage of node k.
        """
        op = self.operating_point()
        node_voltages = np.concatenate(([0.0], op.node_voltages))
        return node_voltages, op.branch_voltages

    def describe_singularity(self) -> Optional[str]:
        """The diagnostic report of a singular load, or None."""
        if not self.is_singular:
            return None
        return self._state.result.singularity.to_error().get_diagnostic_report()
