# tests/test_reporting.py
from tableausim import GaussianSolver, OperatingPoint, SingularityKind, SingularityReport, TableauAssembler
from tableausim.reporting import format_currents, format_singularity, format_voltages


def test_currents_are_numbered_from_one(scenario_a):
    op = OperatingPoint(GaussianSolver().solve(TableauAssembler(scenario_a).assemble()), scenario_a)
    assert format_currents(op) == ["I1 = 5A", "I2 = -5A"]


def test_voltages_start_with_ground(scenario_a):
    op = OperatingPoint(GaussianSolver().solve(TableauAssembler(scenario_a).assemble()), scenario_a)
    assert format_voltages(op) == ["E0 = 0V", "E1 = 5V", "V1 = 5V", "V2 = 5V"]


def test_singularity_messages():
    inconsistent = SingularityReport(kind=SingularityKind.INCONSISTENT, row=3)
    under = SingularityReport(kind=SingularityKind.UNDER_DETERMINED, row=3)
    assert format_singularity(inconsistent) == "Singular Matrix: Inconsistent System"
    assert format_singularity(under) == "Singular Matrix: May have infinitely many solutions."
