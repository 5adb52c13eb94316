# src/dcsim_core/analysis/topology.py
import logging
from typing import Optional

import networkx as nx

from ..data_structures import ComponentKind
from ..netlist import GROUND_NODE_ID, Netlist
from .results import TopologyAnalysisResults

logger = logging.getLogger(__name__)


class TopologyAnalyzer:
    """
    Finds the nodes of a netlist that have no DC path to ground.

    Capacitors are open at DC and contribute no edge. A voltage source is stamped
    as a penalty conductance from each of its terminals to the reference, so both
    of its nodes are tied to node 0. A node left without a path to node 0 makes
    the nodal matrix singular.
    """
    def __init__(self, netlist: Netlist):
        self.netlist = netlist
        self._analysis_results: Optional[TopologyAnalysisResults] = None

    def analyze(self) -> TopologyAnalysisResults:
        if self._analysis_results is not None:
            return self._analysis_results

        graph = self._build_dc_graph()
        grounded = frozenset(nx.node_connected_component(graph, GROUND_NODE_ID))
        floating = tuple(sorted(n for n in graph.nodes if n not in grounded))
        floating_set = set(floating)
        floating_components = tuple(
            el.source_component_id for el in self.netlist.elements
            if floating_set.intersection(el.node_ids)
        )

        self._analysis_results = TopologyAnalysisResults(
            dc_graph=graph,
            grounded_nodes=grounded,
            floating_nodes=floating,
            floating_components=floating_components,
        )
        if floating:
            logger.info(f"Topology analysis found {len(floating)} floating node(s): {list(floating)}.")
        else:
            logger.debug("Topology analysis: every node has a DC path to ground.")
        return self._analysis_results

    def _build_dc_graph(self) -> nx.Graph:
        graph = nx.Graph()
        graph.add_nodes_from(range(self.netlist.node_count))
        for el in self.netlist.elements:
            if el.kind in (ComponentKind.RESISTOR, ComponentKind.INDUCTOR):
                graph.add_edge(*el.node_ids)
            elif el.kind is ComponentKind.VOLTAGE_SOURCE:
                for node_id in el.node_ids:
                    graph.add_edge(node_id, GROUND_NODE_ID)
        return graph


def find_floating_nodes(netlist: Netlist) -> TopologyAnalysisResults:
    """Convenience wrapper around `TopologyAnalyzer(netlist).analyze()`."""
    return TopologyAnalyzer(netlist).analyze()
