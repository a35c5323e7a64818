# src/tableausim/data_structures.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .constants import GROUND_NODE
from .units import Quantity

logger = logging.getLogger(__name__)


class ComponentKind(Enum):
    """The two-terminal element types understood by the tableau formulation."""
    VOLTAGE_SOURCE = "V"
    RESISTOR = "R"

    def __str__(self):
        return self.name

    @classmethod
    def from_identifier(cls, identifier: str) -> ComponentKind:
        """Derives the kind from the first character of a netlist identifier."""
        if not identifier:
            raise ValueError("Component identifier is empty.")
        prefix = identifier[0].upper()
        for kind in cls:
            if kind.value == prefix:
                return kind
        allowed = [k.value for k in cls]
        raise ValueError(
            f"Identifier '{identifier}' does not start with a known component prefix {allowed}."
        )

    @property
    def unit(self) -> str:
        return "volt" if self is ComponentKind.VOLTAGE_SOURCE else "ohm"


def node_to_row(node: int) -> int:
    """
    Translates a one-based circuit node number into its zero-based matrix row.

    This is the only place where the ground offset is applied. The incidence
    builder and the result projector both go through it.
    """
    if node == GROUND_NODE:
        raise ValueError("The ground node has no row in the incidence matrix.")
    return node - 1


def row_to_node(row: int) -> int:
    """Inverse of `node_to_row`."""
    return row + 1


@dataclass(frozen=True)
class Component:
    """
    One netlist entry. The branch index of a component is its position in the
    owning `Netlist` and is not stored here.
    """
    identifier: str
    kind: ComponentKind
    source_node: int
    dest_node: int
    value: float

    @property
    def is_voltage_source(self) -> bool:
        return self.kind is ComponentKind.VOLTAGE_SOURCE

    @property
    def is_resistor(self) -> bool:
        return self.kind is ComponentKind.RESISTOR

    @property
    def nodes(self) -> Tuple[int, int]:
        return (self.source_node, self.dest_node)

    @property
    def quantity(self) -> Quantity:
        """The component value with its physical unit (volts or ohms)."""
        return Quantity(self.value, self.kind.unit)

    def __str__(self) -> str:
        return f"{self.identifier} {self.source_node} {self.dest_node} {self.value:g}"


@dataclass(frozen=True)
class Netlist:
    """
    The in-memory circuit description: an ordered, immutable tuple of components.

    A new `Netlist` is created for every load; it is never mutated in place.
    """
    components: Tuple[Component, ...] = ()
    source_path: Optional[Path] = None
    node_count: int = field(init=False)
    branch_count: int = field(init=False)

    def __post_init__(self):
        components = tuple(self.components)
        object.__setattr__(self, 'components', components)
        object.__setattr__(self, 'branch_count', len(components))
        object.__setattr__(
            self, 'node_count',
            max((max(c.source_node, c.dest_node) for c in components), default=0)
        )

    @property
    def size(self) -> int:
        """Dimension of the square tableau: N node voltages + B branch voltages + B currents."""
        return self.node_count + 2 * self.branch_count

    @property
    def voltage_sources(self) -> Tuple[Component, ...]:
        return tuple(c for c in self.components if c.is_voltage_source)

    @property
    def resistors(self) -> Tuple[Component, ...]:
        return tuple(c for c in self.components if c.is_resistor)

    def __len__(self) -> int:
        return self.branch_count

    def __iter__(self):
        return iter(self.components)

    def __getitem__(self, branch: int) -> Component:
        return self.components[branch]
