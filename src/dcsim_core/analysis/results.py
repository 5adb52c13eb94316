# src/dcsim_core/analysis/results.py
"""
Defines the formal, immutable result contract of the topology analysis.
"""
from dataclasses import dataclass
from typing import FrozenSet, Hashable, Tuple

import networkx as nx


@dataclass(frozen=True)
class TopologyAnalysisResults:
    """
    Attributes:
        dc_graph: Node-id graph with an edge for every DC conducting path
            (resistors, inductors, and each voltage-source terminal to ground).
        grounded_nodes: Node ids with a conducting path to node 0, ground included.
        floating_nodes: Node ids without such a path, ascending.
        floating_components: Ids of components touching a floating node, in netlist order.
    """
    dc_graph: nx.Graph
    grounded_nodes: FrozenSet[int]
    floating_nodes: Tuple[int, ...]
    floating_components: Tuple[Hashable, ...]

    @property
    def is_fully_grounded(self) -> bool:
        return not self.floating_nodes
