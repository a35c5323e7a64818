# src/tableausim/reporting.py
"""Plain-text rendering of operating-point results."""
from typing import List

from .simulation.exceptions import SingularityKind
from .simulation.results import OperatingPoint, SingularityReport


def _fmt(value: float) -> str:
    return f"{value:g}"


def format_currents(op: OperatingPoint) -> List[str]:
    """One line per branch: `I<k> = <value>A`, k counted from 1."""
    return [f"I{b + 1} = {_fmt(current)}A" for b, current in enumerate(op.branch_currents)]


def format_voltages(op: OperatingPoint) -> List[str]:
    """Node voltages `E0..EN` (ground first) followed by branch voltages `V1..VB`."""
    lines = ["E0 = 0V"]
    lines.extend(f"E{k + 1} = {_fmt(v)}V" for k, v in enumerate(op.node_voltages))
    lines.extend(f"V{b + 1} = {_fmt(v)}V" for b, v in enumerate(op.branch_voltages))
    return lines


def format_singularity(report: SingularityReport) -> str:
    if report.kind is SingularityKind.INCONSISTENT:
        return "Singular Matrix: Inconsistent System"
    return "Singular Matrix: May have infinitely many solutions."
