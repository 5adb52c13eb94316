# src/dcsim_core/netlist/__init__.py
from .model import GROUND_NODE_ID, Netlist, NetlistElement
from .exceptions import TopologyError
from .builder import NetlistBuilder, build_netlist

__all__ = [
    "GROUND_NODE_ID",
    "Netlist",
    "NetlistElement",
    "TopologyError",
    "NetlistBuilder",
    "build_netlist",
]
