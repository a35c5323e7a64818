# src/tableausim/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class TopologyIssueCode(Enum):
    """
    Registry of topology validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Structural errors: the netlist cannot be assembled ---
    NODE_INDEX_NEGATIVE = ("NODE_INDEX_NEGATIVE", "Component '{component_id}' references negative node {node}.")
    VALUE_NOT_FINITE = ("VALUE_NOT_FINITE", "Component '{component_id}' has non-finite value {value}.")

    # --- Node connectivity (NET_CONN_...) ---
    NET_CONN_001 = ("NET_CONN_001", "Node {node} lies within 1..{node_count} but no branch connects to it (completely floating).")
    NET_CONN_002 = ("NET_CONN_002", "Node {node} has only a single connection, to component '{connected_to_component}'.")

    # --- Ground reference (GND_...) ---
    GND_CONN_001 = ("GND_CONN_001", "No component is connected to the ground node 0, although components exist in the circuit.")
    GND_PATH_001 = ("GND_PATH_001", "Node(s) {nodes} have no conductive path to ground; their voltages are not referenced.")

    # --- Source topology (VSRC_...) ---
    VSRC_LOOP_001 = ("VSRC_LOOP_001", "Voltage sources {component_ids} form a loop containing no other element.")

    # --- Informational ---
    BRANCH_SELF_LOOP = ("BRANCH_SELF_LOOP", "Component '{component_id}' connects node {node} to itself.")
    RES_ZERO = ("RES_ZERO", "Component '{component_id}' (Resistor) with value 0 ohm will act as an ideal short.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name}: '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
