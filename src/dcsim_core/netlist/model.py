# src/dcsim_core/netlist/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Mapping, Tuple

from ..data_structures import ComponentKind

#: Node id of the ground reference (fixed at 0 V).
GROUND_NODE_ID = 0


@dataclass(frozen=True)
class NetlistElement:
    """A non-ground component expressed purely in node ids."""
    source_component_id: Hashable
    kind: ComponentKind
    node_ids: Tuple[int, ...]
    parameters: Mapping[str, float]

    def parameter(self, name: str) -> float:
        return self.parameters[name]


@dataclass(frozen=True)
class Netlist:
    """
    The circuit graph stripped of geometry.

    `node_count` includes the ground node. `node_terminals` maps each node id to
    the component terminal labels ("R1.0", "V1.1", ...) that were merged into it.
    """
    node_count: int
    elements: Tuple[NetlistElement, ...]
    node_terminals: Dict[int, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def unknown_count(self) -> int:
        """Size of the nodal system: every node except ground."""
        return self.node_count - 1

    def elements_on_node(self, node_id: int) -> List[NetlistElement]:
        return [el for el in self.elements if node_id in el.node_ids]

    def describe(self) -> str:
        """Multi-line description of nodes and element connections."""
        lines = ["Circuit Netlist:", "Elements:"]
        for el in self.elements:
            nodes = ", ".join(str(n) for n in el.node_ids)
            lines.append(f"  {el.source_component_id} ({el.kind}): nodes [{nodes}]")

        lines.append("")
        lines.append("Nodes:")
        for node_id in range(self.node_count):
            suffix = " (Ground)" if node_id == GROUND_NODE_ID else ""
            lines.append(f"  Node {node_id}{suffix}:")
            for label in self.node_terminals.get(node_id, ()):
                lines.append(f"    - {label}")
        return "\n".join(lines)
