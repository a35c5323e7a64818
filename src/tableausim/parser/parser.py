# src/tableausim/parser/parser.py
import logging
import math
from pathlib import Path
from typing import List, Optional, Set, Union

import pint

from ..data_structures import Component, ComponentKind, Netlist
from ..units import ureg, VOLTAGE_DIMENSIONALITY, RESISTANCE_DIMENSIONALITY
from .exceptions import ParsingError, MalformedNetlistError

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("*", "#")
END_DIRECTIVE = ".end"
TOKENS_PER_LINE = 4

_EXPECTED_DIMENSIONALITY = {
    ComponentKind.VOLTAGE_SOURCE: VOLTAGE_DIMENSIONALITY,
    ComponentKind.RESISTOR: RESISTANCE_DIMENSIONALITY,
}


class NetlistParser:
    """
    Reads the line-oriented netlist format into an immutable `Netlist`.

    Each component line is `<identifier> <sourceNode> <destNode> <value>`. Blank
    lines and lines starting with '*' or '#' are skipped, and a '.end' line stops
    reading. Runs of whitespace (including trailing whitespace) are tolerated.
    """

    def parse_file(self, netlist_path: Union[str, Path]) -> Netlist:
        """Parses a netlist file from disk."""
        path = Path(netlist_path)
        logger.info(f"Parsing netlist file: {path}")
        text = self._read_text(path)
        return self.parse_text(text, source_path=path)

    def parse_text(self, text: str, source_path: Optional[Path] = None) -> Netlist:
        """Parses netlist text. Branch indices follow line order."""
        components: List[Component] = []
        seen_ids: Set[str] = set()

        for line_number, raw_line in enumerate(text.splitlines(), start=1):
            stripped = raw_line.strip()
            if not stripped or stripped.startswith(COMMENT_PREFIXES):
                continue
            if stripped.lower().startswith(END_DIRECTIVE):
                logger.debug(f"'.end' directive found at line {line_number}; ignoring the remainder.")
                break

            component = self.parse_line(raw_line, line_number, source_path)
            key = component.identifier.upper()
            if key in seen_ids:
                raise MalformedNetlistError(
                    details=f"Duplicate component identifier '{component.identifier}'.",
                    line_number=line_number, raw_line=raw_line, file_path=source_path,
                )
            seen_ids.add(key)
            components.append(component)

        netlist = Netlist(components=tuple(components), source_path=source_path)
        logger.info(
            f"Parsed {netlist.branch_count} component(s) spanning {netlist.node_count} non-ground node(s)."
        )
        return netlist

    def parse_line(
        self,
        line: str,
        line_number: Optional[int] = None,
        source_path: Optional[Path] = None,
    ) -> Component:
        """Parses a single component line."""
        # str.split() without arguments drops the empty tokens left by repeated
        # or trailing whitespace.
        tokens = line.split()

        def malformed(details: str) -> MalformedNetlistError:
            return MalformedNetlistError(
                details=details, line_number=line_number, raw_line=line, file_path=source_path
            )

        if len(tokens) != TOKENS_PER_LINE:
            raise malformed(
                f"Expected {TOKENS_PER_LINE} tokens (identifier, source node, destination node, value) "
                f"but found {len(tokens)}: {tokens}"
            )

        identifier, source_token, dest_token, value_token = tokens
        try:
            kind = ComponentKind.from_identifier(identifier)
        except ValueError as e:
            raise malformed(str(e)) from e

        source_node = self._parse_node(source_token, "source", malformed)
        dest_node = self._parse_node(dest_token, "destination", malformed)
        value = self._parse_value(value_token, kind, malformed)

        return Component(
            identifier=identifier,
            kind=kind,
            source_node=source_node,
            dest_node=dest_node,
            value=value,
        )

    @staticmethod
    def _parse_node(token: str, role: str, malformed) -> int:
        try:
            node = int(token)
        except ValueError:
            raise malformed(f"The {role} node '{token}' is not an integer.") from None
        if node < 0:
            raise malformed(f"The {role} node {node} is negative; node numbers start at 0 (ground).")
        return node

    @staticmethod
    def _parse_value(token: str, kind: ComponentKind, malformed) -> float:
        try:
            value = float(token)
        except ValueError:
            value = NetlistParser._parse_value_with_units(token, kind, malformed)

        if not math.isfinite(value):
            raise malformed(f"The value '{token}' is not a finite number.")
        return value

    @staticmethod
    def _parse_value_with_units(token: str, kind: ComponentKind, malformed) -> float:
        """Accepts unit-bearing values such as '5V' or '1kohm' and converts to base units."""
        if not token[0].isdigit() and token[0] not in "+-.":
            raise malformed(f"The value '{token}' does not start with a number.")
        try:
            qty = ureg.Quantity(token)
        except (pint.UndefinedUnitError, pint.DimensionalityError) as e:
            raise malformed(f"The value '{token}' is neither a number nor a known quantity: {e}") from e
        except Exception as e:
            raise malformed(f"The value '{token}' could not be parsed: {e}") from e

        if qty.dimensionality != _EXPECTED_DIMENSIONALITY[kind]:
            raise malformed(
                f"The value '{token}' has dimensionality '{qty.dimensionality}', "
                f"which is not compatible with {kind.unit}."
            )
        return float(qty.to(kind.unit).magnitude)

    def _read_text(self, source: Path) -> str:
        if not source.is_file():
            raise ParsingError(details=f"Netlist file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                return f.read()
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except UnicodeDecodeError as e:
            raise ParsingError(details=f"The file is not valid UTF-8 text: {e}", file_path=source) from e
