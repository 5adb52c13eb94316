# src/dcsim_core/netlist/builder.py
"""
Turns placed components and wires into a geometry-free netlist.

Pipeline:
1. Every component terminal (ground included) and every wire endpoint is tagged
   and clustered by proximity.
2. Clusters joined by a wire are merged; a wire is a zero-impedance connection.
3. Every merged group containing a ground terminal becomes node 0.
4. Remaining groups that touch at least one component terminal are numbered
   1, 2, ... in order of first occurrence. Wire-only groups carry no current
   and get no id.
5. Each non-ground component is rewritten as a `NetlistElement` over node ids.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import networkx as nx

from ..constants import DEFAULT_CLUSTER_TOLERANCE
from ..data_structures import ComponentDescriptor, WireSegment
from ..errors import FailureKind
from ..geometry import (
    ClusteringMode,
    PointCluster,
    TaggedPoint,
    TerminalSource,
    TerminalTag,
    cluster_points,
)
from .exceptions import TopologyError
from .model import GROUND_NODE_ID, Netlist, NetlistElement

logger = logging.getLogger(__name__)


class NetlistBuilder:
    """
    Builds one `Netlist` from one set of components and wires.

    The builder holds no state between calls; node ids exist only inside the
    returned netlist.
    """

    def __init__(
        self,
        tolerance: float = DEFAULT_CLUSTER_TOLERANCE,
        mode: ClusteringMode = ClusteringMode.SINGLE_SEED,
    ):
        self.tolerance = tolerance
        self.mode = mode

    def build(
        self,
        components: Sequence[ComponentDescriptor],
        wires: Sequence[WireSegment],
    ) -> Netlist:
        grounds = [c for c in components if c.is_ground]
        analyzable = [c for c in components if not c.is_ground]
        if not grounds:
            raise TopologyError(
                kind=FailureKind.NO_GROUND_FOUND,
                details="No ground reference found. The circuit needs at least one ground component.",
            )
        if not analyzable:
            raise TopologyError(
                kind=FailureKind.EMPTY_CIRCUIT,
                details="The circuit contains no analyzable (non-ground) components.",
            )

        tagged = self._collect_points(components, wires)
        clusters = cluster_points(tagged, tolerance=self.tolerance, mode=self.mode)
        groups = self._merge_wired_clusters(clusters, len(wires))
        tag_to_node, node_terminals = self._assign_node_ids(groups)
        elements = self._rewrite_components(components, tag_to_node)

        node_count = len(node_terminals)
        netlist = Netlist(
            node_count=node_count,
            elements=tuple(elements),
            node_terminals={nid: tuple(labels) for nid, labels in node_terminals.items()},
        )
        logger.info(
            f"Netlist built: {len(elements)} element(s), {node_count} node(s) "
            f"from {len(tagged)} point(s) in {len(clusters)} cluster(s); {len(grounds)} ground component(s)."
        )
        return netlist

    # --- Steps ---

    @staticmethod
    def _collect_points(
        components: Sequence[ComponentDescriptor],
        wires: Sequence[WireSegment],
    ) -> List[TaggedPoint]:
        tagged: List[TaggedPoint] = []
        for comp_idx, comp in enumerate(components):
            for term_idx, point in enumerate(comp.terminals):
                tag = TerminalTag(
                    source=TerminalSource.COMPONENT,
                    owner_index=comp_idx,
                    terminal_index=term_idx,
                    component_id=comp.id,
                    is_ground=comp.is_ground,
                )
                tagged.append(TaggedPoint(point, tag))
        for wire_idx, wire in enumerate(wires):
            for end_idx, point in enumerate((wire.start, wire.end)):
                tag = TerminalTag(source=TerminalSource.WIRE, owner_index=wire_idx, terminal_index=end_idx)
                tagged.append(TaggedPoint(point, tag))
        return tagged

    @staticmethod
    def _merge_wired_clusters(clusters: List[PointCluster], wire_count: int) -> List[List[PointCluster]]:
        """Merges clusters connected by wires; groups are ordered by their first cluster."""
        wire_ends: Dict[int, List[int]] = {i: [] for i in range(wire_count)}
        for cluster in clusters:
            for tag in cluster.tags:
                if tag.source is TerminalSource.WIRE:
                    wire_ends[tag.owner_index].append(cluster.index)

        graph = nx.Graph()
        graph.add_nodes_from(c.index for c in clusters)
        for wire_idx, ends in wire_ends.items():
            if len(ends) == 2 and ends[0] != ends[1]:
                graph.add_edge(ends[0], ends[1])

        merged = [sorted(group) for group in nx.connected_components(graph)]
        merged.sort(key=lambda g: g[0])
        return [[clusters[i] for i in group] for group in merged]

    @staticmethod
    def _assign_node_ids(
        groups: List[List[PointCluster]],
    ) -> Tuple[Dict[TerminalTag, int], Dict[int, List[str]]]:
        tag_to_node: Dict[TerminalTag, int] = {}
        node_terminals: Dict[int, List[str]] = {GROUND_NODE_ID: []}
        next_id = GROUND_NODE_ID + 1

        for group in groups:
            tags = [tag for cluster in group for tag in cluster.tags]
            if any(tag.is_ground for tag in tags):
                node_id = GROUND_NODE_ID
            elif any(tag.is_component_terminal for tag in tags):
                node_id = next_id
                node_terminals[node_id] = []
                next_id += 1
            else:
                logger.debug(f"Skipping wire-only node {[t.label for t in tags]}: no component terminal attached.")
                continue

            for tag in tags:
                tag_to_node[tag] = node_id
                if tag.is_component_terminal:
                    node_terminals[node_id].append(tag.label)
        return tag_to_node, node_terminals

    @staticmethod
    def _rewrite_components(
        components: Sequence[ComponentDescriptor],
        tag_to_node: Dict[TerminalTag, int],
    ) -> List[NetlistElement]:
        elements: List[NetlistElement] = []
        for comp_idx, comp in enumerate(components):
            if comp.is_ground:
                continue
            node_ids = []
            for term_idx in range(len(comp.terminals)):
                tag = TerminalTag(
                    source=TerminalSource.COMPONENT,
                    owner_index=comp_idx,
                    terminal_index=term_idx,
                    component_id=comp.id,
                    is_ground=False,
                )
                node_id = tag_to_node.get(tag)
                if node_id is None:
                    logger.error(
                        f"Invariant violation: terminal {term_idx} of component '{comp.id}' "
                        f"at {comp.terminals[term_idx]} did not resolve to any node."
                    )
                    raise TopologyError(
                        kind=FailureKind.UNRESOLVED_TERMINAL,
                        details=f"Terminal {term_idx} of component '{comp.id}' at {comp.terminals[term_idx]} "
                                f"did not resolve to any node.",
                    )
                node_ids.append(node_id)
            elements.append(NetlistElement(
                source_component_id=comp.id,
                kind=comp.kind,
                node_ids=tuple(node_ids),
                parameters=comp.parameters,
            ))
        return elements


def build_netlist(
    components: Sequence[ComponentDescriptor],
    wires: Sequence[WireSegment],
    tolerance: float = DEFAULT_CLUSTER_TOLERANCE,
    mode: ClusteringMode = ClusteringMode.SINGLE_SEED,
) -> Netlist:
    """
    Builds the netlist for one analysis run.

    Raises:
        TopologyError: No ground component (NO_GROUND_FOUND), no non-ground
            component (EMPTY_CIRCUIT), or a terminal that failed to resolve to a
            node (UNRESOLVED_TERMINAL).
    """
    return NetlistBuilder(tolerance=tolerance, mode=mode).build(components, wires)
