# tests/test_validation.py
import math

import pytest

from tableausim import (
    Component,
    ComponentKind,
    Netlist,
    SemanticValidationError,
    TopologyValidator,
    ValidationIssueLevel,
)
from tests.conftest import make_netlist


def issue_codes(netlist):
    return [issue.code for issue in TopologyValidator(netlist).validate()]


class TestCleanCircuits:

    def test_divider_has_no_issues(self, scenario_b):
        assert TopologyValidator(scenario_b).validate() == []

    def test_graph_has_one_edge_per_component(self, scenario_b):
        graph = TopologyValidator.build_graph(scenario_b)
        assert graph.number_of_nodes() == 3
        assert graph.number_of_edges() == 3
        assert graph.has_edge(1, 2, key="R1")


class TestConnectivity:

    def test_unreferenced_and_dangling_nodes(self, scenario_c):
        issues = TopologyValidator(scenario_c).validate()
        by_code = {issue.code: issue for issue in issues}
        assert set(by_code) == {"NET_CONN_001", "NET_CONN_002"}
        assert by_code["NET_CONN_001"].details["node"] == 2
        assert by_code["NET_CONN_002"].details["node"] == 3
        assert by_code["NET_CONN_002"].details["connected_to_component"] == "R2"
        assert all(issue.level is ValidationIssueLevel.WARNING for issue in issues)

    def test_island_without_ground_path(self):
        issues = TopologyValidator(make_netlist("V1 1 0 5", "R1 1 0 1", "R2 2 3 1")).validate()
        ground_issues = [i for i in issues if i.code == "GND_PATH_001"]
        assert len(ground_issues) == 1
        assert ground_issues[0].details["nodes"] == [2, 3]

    def test_circuit_without_ground(self):
        codes = issue_codes(make_netlist("V1 1 2 5", "R1 1 2 1"))
        assert "GND_CONN_001" in codes
        assert "GND_PATH_001" in codes


class TestVoltageSourceLoops:

    def test_parallel_sources(self):
        issues = TopologyValidator(make_netlist("V1 1 0 5", "V2 1 0 3", "R1 1 0 1")).validate()
        loops = [i for i in issues if i.code == "VSRC_LOOP_001"]
        assert len(loops) == 1
        assert loops[0].details["component_ids"] == ["V1", "V2"]

    def test_three_source_ring(self):
        netlist = make_netlist("V1 1 2 1", "V2 2 3 1", "V3 3 1 1", "R1 1 0 1")
        loops = [i for i in TopologyValidator(netlist).validate() if i.code == "VSRC_LOOP_001"]
        assert len(loops) == 1
        assert set(loops[0].details["component_ids"]) == {"V1", "V2", "V3"}

    def test_source_with_resistor_in_loop_is_fine(self, scenario_a):
        assert "VSRC_LOOP_001" not in issue_codes(scenario_a)

    def test_self_looped_source(self):
        codes = issue_codes(make_netlist("V1 1 1 5", "R1 1 0 1"))
        assert "VSRC_LOOP_001" in codes
        assert "BRANCH_SELF_LOOP" in codes


class TestInformational:

    def test_zero_resistor(self):
        issues = TopologyValidator(make_netlist("V1 1 0 5", "R1 1 2 0", "R2 2 0 1")).validate()
        assert [(i.code, i.level) for i in issues] == [("RES_ZERO", ValidationIssueLevel.INFO)]


class TestStructuralErrors:

    def test_negative_node_stops_validation(self):
        netlist = Netlist(components=[
            Component("V1", ComponentKind.VOLTAGE_SOURCE, 1, 0, 5.0),
            Component("R1", ComponentKind.RESISTOR, 1, -2, 1.0),
        ])
        issues = TopologyValidator(netlist).validate()
        assert [i.code for i in issues] == ["NODE_INDEX_NEGATIVE"]
        assert issues[0].level is ValidationIssueLevel.ERROR
        assert issues[0].component_id == "R1"

    def test_non_finite_value(self):
        netlist = Netlist(components=[
            Component("R1", ComponentKind.RESISTOR, 1, 0, math.inf),
        ])
        assert issue_codes(netlist) == ["VALUE_NOT_FINITE"]

    def test_validation_error_keeps_only_errors(self):
        netlist = Netlist(components=[
            Component("R1", ComponentKind.RESISTOR, 1, -1, 1.0),
        ])
        error = SemanticValidationError(TopologyValidator(netlist).validate())
        assert len(error.issues) == 1
        report = error.get_diagnostic_report()
        assert "Netlist Validation Error" in report
        assert "Component:      R1" in report

    def test_requires_netlist(self):
        with pytest.raises(TypeError):
            TopologyValidator(None)
