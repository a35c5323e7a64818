# tests/conftest.py
import pytest

from tableausim import NetlistParser, Netlist


def make_netlist(*lines: str) -> Netlist:
    """Parses netlist lines given one component per argument."""
    return NetlistParser().parse_text("\n".join(lines))


# Scenario A: 1 ohm resistor and 5 V source, both between node 1 and ground.
SCENARIO_A = ("R1 1 0 1", "V1 1 0 5")

# Scenario B: 10 V source feeding 2 ohm and 3 ohm in series to ground.
SCENARIO_B = ("V1 1 0 10", "R1 1 2 2", "R2 2 0 3")

# Scenario C: node 2 is never referenced; node 3 only by a dangling resistor.
SCENARIO_C = ("V1 1 0 5", "R1 1 0 1", "R2 1 3 1")

# Two sources sharing node 2 through three unit resistors.
TWO_SOURCE = ("V1 1 0 10", "V2 3 0 5", "R1 1 2 1", "R2 2 3 1", "R3 2 0 1")

RESISTOR_LADDER = (
    "V1 1 0 12",
    "R1 1 2 100",
    "R2 2 0 220",
    "R3 2 3 330",
    "R4 3 0 470",
    "R5 3 4 1000",
    "R6 4 0 1500",
)


@pytest.fixture
def parser():
    return NetlistParser()


@pytest.fixture
def scenario_a() -> Netlist:
    return make_netlist(*SCENARIO_A)


@pytest.fixture
def scenario_b() -> Netlist:
    return make_netlist(*SCENARIO_B)


@pytest.fixture
def scenario_c() -> Netlist:
    return make_netlist(*SCENARIO_C)


@pytest.fixture
def netlist_file(tmp_path):
    """Writes netlist lines to a file and returns its path."""
    def _write(*lines: str, name: str = "circuit.net"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
