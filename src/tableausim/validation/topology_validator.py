# src/tableausim/validation/topology_validator.py
import logging
import math
from typing import Dict, List

import networkx as nx

from ..constants import GROUND_NODE
from ..data_structures import Netlist
from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import TopologyIssueCode


logger = logging.getLogger(__name__)


class TopologyValidator:
    """
    Inspects the connectivity of a `Netlist` before the tableau is assembled.

    Structural problems that make assembly impossible (negative node numbers,
    non-finite values) are reported as ERROR issues. Everything else is advisory:
    floating nodes, dangling branches or voltage-source loops are reported as
    warnings, and the Gaussian solver remains the authority on whether the
    resulting system is singular.
    """

    def __init__(self, netlist: Netlist):
        if not isinstance(netlist, Netlist):
            raise TypeError("TopologyValidator requires a Netlist object.")
        self.netlist = netlist
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Runs every check and returns all issues found (errors, warnings and info).
        The caller decides whether ERROR-level issues halt the load.
        """
        self.issues = []
        logger.debug(f"Validating topology of {self.netlist.branch_count} branch(es).")

        self._check_structure()
        if any(i.is_error for i in self.issues):
            # A graph over negative or NaN data would only produce noise.
            return self.issues

        graph = self.build_graph(self.netlist)
        self._check_node_connections()
        self._check_ground_paths(graph)
        self._check_voltage_source_loops()
        self._check_informational()

        if self.issues:
            errors = sum(1 for i in self.issues if i.level == ValidationIssueLevel.ERROR)
            warnings = sum(1 for i in self.issues if i.level == ValidationIssueLevel.WARNING)
            infos = sum(1 for i in self.issues if i.level == ValidationIssueLevel.INFO)
            logger.info(f"Validation complete. Found: {errors} errors, {warnings} warnings, {infos} info messages.")
        else:
            logger.debug("Validation complete with no issues found.")
        return self.issues

    @staticmethod
    def build_graph(netlist: Netlist) -> nx.MultiGraph:
        """Builds the node/branch multigraph: one edge per component, keyed by identifier."""
        graph = nx.MultiGraph()
        graph.add_nodes_from(range(netlist.node_count + 1))
        for branch, comp in enumerate(netlist):
            graph.add_edge(comp.source_node, comp.dest_node, key=comp.identifier,
                           branch=branch, kind=comp.kind)
        return graph

    def _add_issue(self, level: ValidationIssueLevel, code_enum: TopologyIssueCode, **kwargs):
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            component_id=kwargs.get('component_id'), details=kwargs
        ))

    def _connections_by_node(self) -> Dict[int, List[str]]:
        """Map from node -> identifiers of the components touching it (self-loops once)."""
        connections: Dict[int, List[str]] = {n: [] for n in range(self.netlist.node_count + 1)}
        for comp in self.netlist:
            for node in set(comp.nodes):
                connections[node].append(comp.identifier)
        return connections

    # --- Checks ---

    def _check_structure(self):
        for comp in self.netlist:
            for node in comp.nodes:
                if node < 0:
                    self._add_issue(ValidationIssueLevel.ERROR, TopologyIssueCode.NODE_INDEX_NEGATIVE,
                                    component_id=comp.identifier, node=node)
            if not math.isfinite(comp.value):
                self._add_issue(ValidationIssueLevel.ERROR, TopologyIssueCode.VALUE_NOT_FINITE,
                                component_id=comp.identifier, value=comp.value)

    def _check_node_connections(self):
        connections = self._connections_by_node()
        for node in range(1, self.netlist.node_count + 1):
            count = len(connections[node])
            if count == 0:
                self._add_issue(ValidationIssueLevel.WARNING, TopologyIssueCode.NET_CONN_001,
                                node=node, node_count=self.netlist.node_count)
            elif count == 1:
                self._add_issue(ValidationIssueLevel.WARNING, TopologyIssueCode.NET_CONN_002,
                                node=node, connected_to_component=connections[node][0])

        if self.netlist.branch_count and not connections[GROUND_NODE]:
            self._add_issue(ValidationIssueLevel.WARNING, TopologyIssueCode.GND_CONN_001)

    def _check_ground_paths(self, graph: nx.MultiGraph):
        for group in nx.connected_components(graph):
            if GROUND_NODE in group:
                continue
            # Isolated nodes are already reported as floating.
            if len(group) == 1 and graph.degree(next(iter(group))) == 0:
                continue
            self._add_issue(ValidationIssueLevel.WARNING, TopologyIssueCode.GND_PATH_001,
                            nodes=sorted(group))

    def _check_voltage_source_loops(self):
        """
        Grows a spanning forest of voltage-source edges; an edge whose ends are
        already joined closes a loop made only of sources.
        """
        forest = nx.Graph()
        for comp in self.netlist.voltage_sources:
            src, dst = comp.nodes
            if src == dst:
                self._add_issue(ValidationIssueLevel.WARNING, TopologyIssueCode.VSRC_LOOP_001,
                                component_ids=[comp.identifier])
                continue
            if src in forest and dst in forest and nx.has_path(forest, src, dst):
                path = nx.shortest_path(forest, src, dst)
                loop_ids = [forest.edges[u, v]['component_id'] for u, v in zip(path, path[1:])]
                self._add_issue(ValidationIssueLevel.WARNING, TopologyIssueCode.VSRC_LOOP_001,
                                component_ids=loop_ids + [comp.identifier])
                continue
            forest.add_edge(src, dst, component_id=comp.identifier)

    def _check_informational(self):
        for comp in self.netlist:
            if comp.source_node == comp.dest_node:
                self._add_issue(ValidationIssueLevel.INFO, TopologyIssueCode.BRANCH_SELF_LOOP,
                                component_id=comp.identifier, node=comp.source_node)
            if comp.is_resistor and comp.value == 0.0:
                self._add_issue(ValidationIssueLevel.INFO, TopologyIssueCode.RES_ZERO,
                                component_id=comp.identifier)
