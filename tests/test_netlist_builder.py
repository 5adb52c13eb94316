# tests/test_netlist_builder.py
import logging

import pytest

from dcsim_core.data_structures import ComponentKind
from dcsim_core.errors import FailureKind
from dcsim_core.geometry import ClusteringMode, TerminalSource, TerminalTag
from dcsim_core.netlist import GROUND_NODE_ID, NetlistBuilder, TopologyError, build_netlist
from tests.conftest import divider, ground, resistor, voltage_source, wire


def element(netlist, comp_id):
    return next(el for el in netlist.elements if el.source_component_id == comp_id)


class TestNodeAssignment:

    def test_divider_nodes(self, divider_circuit):
        netlist = build_netlist(*divider_circuit)
        assert netlist.node_count == 3
        assert element(netlist, "V1").node_ids == (1, 0)
        assert element(netlist, "R1").node_ids == (1, 2)
        assert element(netlist, "R2").node_ids == (2, 0)

    def test_ground_is_not_an_element(self, divider_circuit):
        netlist = build_netlist(*divider_circuit)
        assert [el.source_component_id for el in netlist.elements] == ["V1", "R1", "R2"]

    def test_node_terminal_labels(self, divider_circuit):
        netlist = build_netlist(*divider_circuit)
        assert set(netlist.node_terminals[GROUND_NODE_ID]) == {"V1.1", "R2.1", "GND1.0"}
        assert set(netlist.node_terminals[2]) == {"R1.1", "R2.0"}

    def test_terminals_within_tolerance_merge_without_wire(self):
        components = [
            voltage_source("V1", (0, 0), (0, 100)),
            resistor("R1", (10, 0), (10, 90)),
            ground("GND1", (0, 105)),
        ]
        netlist = build_netlist(components, [])
        assert netlist.node_count == 2
        assert element(netlist, "R1").node_ids == (1, 0)

    def test_wire_only_group_gets_no_node(self, divider_circuit):
        components, wires = divider_circuit
        dangling = wires + [wire((1000, 1000), (1100, 1000))]
        assert build_netlist(components, dangling).node_count == 3

    def test_wire_chain_merges_through_intermediate_points(self):
        components = [
            voltage_source("V1", (0, 0), (0, 100)),
            resistor("R1", (300, 0), (300, 100)),
            ground("GND1", (0, 100)),
        ]
        wires = [wire((0, 0), (100, 0)), wire((100, 0), (200, 0)), wire((200, 0), (300, 0)), wire((0, 100), (300, 100))]
        netlist = build_netlist(components, wires)
        assert element(netlist, "R1").node_ids == (1, 0)

    def test_every_ground_maps_to_node_zero(self):
        components = [
            voltage_source("V1", (0, 0), (0, 100)),
            resistor("R1", (100, 0), (100, 100)),
            ground("GND1", (0, 100)),
            ground("GND2", (100, 100)),
        ]
        netlist = build_netlist(components, [wire((0, 0), (100, 0))])
        assert element(netlist, "V1").node_ids == (1, 0)
        assert element(netlist, "R1").node_ids == (1, 0)
        assert netlist.node_count == 2

    def test_clustering_mode_changes_node_count(self):
        components = [
            voltage_source("V1", (0, 0), (0, 100)),
            resistor("R1", (12, 0), (100, 100)),
            resistor("R2", (24, 0), (100, 100)),
            ground("GND1", (0, 100)),
        ]
        wires = [wire((100, 100), (0, 100))]
        single = NetlistBuilder(mode=ClusteringMode.SINGLE_SEED).build(components, wires)
        closed = NetlistBuilder(mode=ClusteringMode.TRANSITIVE).build(components, wires)
        assert single.node_count == 3
        assert closed.node_count == 2

    def test_build_is_deterministic(self, divider_circuit):
        assert build_netlist(*divider_circuit) == build_netlist(*divider_circuit)

    def test_describe_lists_nodes(self, divider_circuit):
        text = build_netlist(*divider_circuit).describe()
        assert "Node 0 (Ground):" in text
        assert "R1 (resistor): nodes [1, 2]" in text


class TestTopologyErrors:

    def test_no_ground(self):
        components, wires = divider()
        components = [c for c in components if not c.is_ground]
        with pytest.raises(TopologyError) as excinfo:
            build_netlist(components, wires)
        assert excinfo.value.kind is FailureKind.NO_GROUND_FOUND
        assert "No ground" in excinfo.value.get_diagnostic_report()

    def test_only_ground(self):
        with pytest.raises(TopologyError) as excinfo:
            build_netlist([ground("GND1", (0, 0))], [])
        assert excinfo.value.kind is FailureKind.EMPTY_CIRCUIT

    def test_component_shorted_to_ground(self):
        components = [resistor("R1", (0, 0), (5, 0)), ground("GND1", (0, 0))]
        netlist = build_netlist(components, [])
        assert netlist.node_count == 1
        assert element(netlist, "R1").kind is ComponentKind.RESISTOR
        assert element(netlist, "R1").node_ids == (0, 0)

    def test_unresolved_terminal_is_logged_and_raised(self, caplog):
        components = [resistor("R1", (0, 0), (100, 0))]
        resolved = TerminalTag(
            source=TerminalSource.COMPONENT, owner_index=0, terminal_index=0, component_id="R1"
        )
        with caplog.at_level(logging.ERROR, logger="dcsim_core.netlist.builder"):
            with pytest.raises(TopologyError) as excinfo:
                NetlistBuilder._rewrite_components(components, {resolved: 1})

        assert excinfo.value.kind is FailureKind.UNRESOLVED_TERMINAL
        assert excinfo.value.stage == "netlist"
        assert "Terminal 1 of component 'R1'" in excinfo.value.details
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "did not resolve to any node" in errors[0].getMessage()
