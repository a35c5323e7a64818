# src/tableausim/units.py
import pint
import logging

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

# --- Canonical dimensionality objects for explicit checks ---
VOLTAGE_DIMENSIONALITY = ureg.parse_expression('volt').dimensionality
RESISTANCE_DIMENSIONALITY = ureg.parse_expression('ohm').dimensionality

__all__ = [
    "ureg", "Quantity",
    "VOLTAGE_DIMENSIONALITY", "RESISTANCE_DIMENSIONALITY",
]
