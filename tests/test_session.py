# tests/test_session.py
import logging

import numpy as np
import pytest

from tableausim import (
    CircuitSession,
    Component,
    ComponentKind,
    Netlist,
    NetlistLoadError,
    ResultsUnavailableError,
    SingularityKind,
    SolverConfig,
    analyze_netlist,
)
from tests.conftest import SCENARIO_B, SCENARIO_C


@pytest.fixture
def session():
    return CircuitSession()


class TestLoading:

    def test_load_text_and_query(self, session):
        result = session.load_text("\n".join(SCENARIO_B))
        assert not result.is_singular
        assert session.is_loaded
        assert not session.is_singular
        np.testing.assert_allclose(session.branch_currents(), [-2.0, 2.0, 2.0])

    def test_voltages_include_ground(self, session):
        session.load_text("\n".join(SCENARIO_B))
        node_voltages, branch_voltages = session.voltages()
        np.testing.assert_allclose(node_voltages, [0.0, 10.0, 6.0])
        np.testing.assert_allclose(branch_voltages, [10.0, 4.0, 6.0])

    def test_load_file(self, session, netlist_file):
        session.load_file(netlist_file(*SCENARIO_B))
        assert session.operating_point().node_voltage(2) == pytest.approx(6.0)
        assert session.netlist.source_path is not None

    def test_missing_file_raises_load_error(self, session, tmp_path):
        with pytest.raises(NetlistLoadError) as exc_info:
            session.load_file(tmp_path / "nope.net")
        assert "Netlist File Error" in str(exc_info.value)
        assert not session.is_loaded

    def test_failed_load_discards_previous_results(self, session):
        session.load_text("\n".join(SCENARIO_B))
        with pytest.raises(NetlistLoadError):
            session.load_text("V1 1 0 10\nR1 1 2")
        assert not session.is_loaded
        assert session.tableau is None
        with pytest.raises(ResultsUnavailableError):
            session.branch_currents()

    def test_structural_error_raises_load_error(self, session):
        netlist = Netlist(components=[Component("R1", ComponentKind.RESISTOR, 1, -1, 1.0)])
        with pytest.raises(NetlistLoadError) as exc_info:
            session.load_netlist(netlist)
        assert "NODE_INDEX_NEGATIVE" in str(exc_info.value)

    def test_assembly_error_without_validation(self):
        session = CircuitSession(SolverConfig(validate_topology=False))
        netlist = Netlist(components=[Component("R1", ComponentKind.RESISTOR, 1, -1, 1.0)])
        with pytest.raises(NetlistLoadError) as exc_info:
            session.load_netlist(netlist)
        assert "Tableau Assembly Error" in str(exc_info.value)

    def test_warnings_are_kept_and_logged(self, session, caplog):
        with caplog.at_level(logging.WARNING):
            session.load_text("\n".join(SCENARIO_C))
        assert {issue.code for issue in session.issues} == {"NET_CONN_001", "NET_CONN_002"}
        assert "NET_CONN_001" in caplog.text


class TestSingularLoads:

    def test_singular_load_is_not_an_exception(self, session):
        result = session.load_text("\n".join(SCENARIO_C))
        assert result.is_singular
        assert session.is_loaded
        assert session.is_singular
        assert result.singularity.kind is SingularityKind.UNDER_DETERMINED

    def test_singular_load_serves_no_results(self, session):
        session.load_text("V1 1 0 5\nV2 1 0 3")
        with pytest.raises(ResultsUnavailableError):
            session.branch_currents()
        with pytest.raises(ResultsUnavailableError):
            session.voltages()
        assert "Singular System" in session.describe_singularity()

    def test_reload_after_singular(self, session):
        session.load_text("V1 1 0 5\nV2 1 0 3")
        session.load_text("\n".join(SCENARIO_B))
        assert not session.is_singular
        assert session.describe_singularity() is None


class TestSessionLifecycle:

    def test_queries_before_load(self, session):
        with pytest.raises(ResultsUnavailableError):
            session.operating_point()
        with pytest.raises(ResultsUnavailableError):
            session.solve_again()

    def test_clear(self, session):
        session.load_text("\n".join(SCENARIO_B))
        session.clear()
        assert not session.is_loaded
        assert session.netlist is None
        assert session.issues == ()

    def test_solve_again_is_bit_identical(self, session):
        first = session.load_text("\n".join(SCENARIO_B))
        second = session.solve_again()
        assert np.array_equal(first.solution, second.solution)
        assert session.result is second

    def test_analyze_netlist_without_session(self, scenario_b):
        state = analyze_netlist(scenario_b)
        assert state.netlist is scenario_b
        assert state.tableau.size == 8
        assert not state.result.is_singular
