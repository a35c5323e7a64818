# src/tableausim/simulation/incidence.py
import logging

import numpy as np

from ..constants import GROUND_NODE
from ..data_structures import Netlist, node_to_row
from .exceptions import TableauAssemblyError

logger = logging.getLogger(__name__)


def build_incidence_matrix(netlist: Netlist) -> np.ndarray:
    """
    Builds the reduced node-branch incidence matrix of a netlist.

    Entry (node_to_row(n), b) is +1 when branch b leaves node n (its source node),
    -1 when it enters node n (its destination node), and 0 otherwise. Ground has
    no row. A branch whose two terminals are the same node leaves its column at
    zero, since its contributions cancel.

    Returns:
        An N x B float array, N = netlist.node_count and B = netlist.branch_count.
    """
    n_nodes, n_branches = netlist.node_count, netlist.branch_count
    incidence = np.zeros((n_nodes, n_branches), dtype=float)

    for branch, comp in enumerate(netlist):
        for node, sign in ((comp.source_node, 1.0), (comp.dest_node, -1.0)):
            if node == GROUND_NODE:
                continue
            if not 0 < node <= n_nodes:
                raise TableauAssemblyError(
                    details=f"Branch {branch} references node {node}, outside the range 0..{n_nodes}.",
                    component_id=comp.identifier,
                )
            incidence[node_to_row(node), branch] += sign

    logger.debug(f"Incidence matrix built with shape {incidence.shape}.")
    return incidence
