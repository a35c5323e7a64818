# src/tableausim/constants.py
import logging

logger = logging.getLogger(__name__)

#: Node index of the ground reference. It never receives a row in the incidence
#: matrix and its voltage is fixed at 0 V.
GROUND_NODE: int = 0

#: Pivot magnitudes at or below this value are treated as exactly zero during
#: forward elimination. Also used to classify the residual RHS of a singular row.
DEFAULT_PIVOT_TOLERANCE: float = 1.0e-12
