"""
End-to-end scenarios through the RoutingSimulator command surface.
"""

import pytest

from config import SimulatorSettings
from errors import IdConflict, InvalidEdge, UnknownNode
from orchestrator import OrchestratorState
from routing import NoPathFound, Route, RoutingMode
from simulator import RoutingSimulator


def _diamond() -> RoutingSimulator:
    """N1(0,0), N2(10,0), N3(20,0), N4(10,10) with a cheap and a dear branch."""
    sim = RoutingSimulator()
    sim.add_node("N1", 0, 0)
    sim.add_node("N2", 10, 0)
    sim.add_node("N3", 20, 0)
    sim.add_node("N4", 10, 10)
    sim.add_edge("N1", "N2", 1)
    sim.add_edge("N2", "N3", 1)
    sim.add_edge("N1", "N4", 5)
    sim.add_edge("N4", "N3", 1)
    return sim


def test_hop_count_route():
    sim = _diamond()
    result = sim.compute_route("N1", "N3", RoutingMode.HOP_COUNT)

    assert isinstance(result, Route)
    assert result.hops == 2
    assert result.nodes in {("N1", "N2", "N3"), ("N1", "N4", "N3")}


def test_weighted_route_prefers_cheap_branch():
    sim = _diamond()
    result = sim.compute_route("N1", "N3", RoutingMode.WEIGHTED)

    assert result.nodes == ("N1", "N2", "N3")
    assert result.cost == 2.0


def test_removing_middle_node_reroutes():
    sim = _diamond()
    sim.remove_node("N2")

    for mode in RoutingMode:
        result = sim.compute_route("N1", "N3", mode)
        assert result.nodes == ("N1", "N4", "N3")
    assert sim.compute_route("N1", "N3", RoutingMode.WEIGHTED).cost == 6.0


def test_edgeless_nodes_have_no_path():
    sim = RoutingSimulator()
    sim.add_node("N1", 0, 0)
    sim.add_node("N2", 50, 50)

    for mode in RoutingMode:
        result = sim.compute_route("N1", "N2", mode)
        assert isinstance(result, NoPathFound)
        assert result.mode is mode


def test_same_node_route():
    sim = _diamond()
    for mode in RoutingMode:
        assert sim.compute_route("N4", "N4", mode).nodes == ("N4",)


def test_interactive_selection_and_rerun():
    sim = _diamond()
    sim.select_source("N1")
    assert sim.state is OrchestratorState.SOURCE_CHOSEN

    first = sim.select_destination("N3")
    assert first.hops == 2
    assert sim.current_route == first

    sim.clear_route()
    sim.mode = "weighted"
    assert sim.rerun().cost == 2.0


def test_edge_weight_text_and_default():
    sim = RoutingSimulator(SimulatorSettings(default_weight=2.5))
    a = sim.create_node(0, 0)
    b = sim.create_node(5, 5)
    c = sim.create_node(9, 9)

    sim.add_edge(a.id, b.id, "")
    sim.add_edge(b.id, c.id, " 4 ")

    assert [e.weight for e in sim.edges(b.id)] == [2.5, 4.0]


def test_bad_weight_surfaces_and_is_logged():
    sim = _diamond()
    with pytest.raises(InvalidEdge):
        sim.add_edge("N1", "N3", "abc")

    entry = sim.entries()[-1]
    assert entry.source == "Error"
    assert entry.event == "Edge:Add/Upd"
    assert not sim.graph.has_edge("N1", "N3")


def test_errors_leave_state_unchanged():
    sim = _diamond()
    before = sim.graph.version
    with pytest.raises(IdConflict):
        sim.add_node("N1")
    with pytest.raises(UnknownNode):
        sim.remove_node("N9")
    with pytest.raises(UnknownNode):
        sim.add_edge("N1", "N9", 1)
    with pytest.raises(InvalidEdge):
        sim.add_edge("N1", "N1", 1)
    assert sim.graph.version == before
    assert len(sim.nodes()) == 4


def test_remove_edge_then_route():
    sim = _diamond()
    sim.remove_edge("N2", "N3")
    result = sim.compute_route("N1", "N3", RoutingMode.WEIGHTED)
    assert result.nodes == ("N1", "N4", "N3")


def test_graph_mutation_clears_current_route():
    sim = _diamond()
    sim.compute_route("N1", "N3")
    sim.add_edge("N1", "N3", 9)
    assert sim.current_route is None
    assert sim.state is OrchestratorState.IDLE


def test_event_log_records_session():
    sim = _diamond()
    sim.compute_route("N1", "N3", RoutingMode.WEIGHTED)
    events = [(e.source, e.event) for e in sim.entries()]

    assert ("Graph", "Add") in events
    assert ("Graph", "Add/Upd") in events
    assert events[-2:] == [("Sim", "Start"), ("Sim", "Path")]
    assert "N1 → N2 → N3" in sim.entries()[-1].detail


def test_move_node_keeps_route():
    sim = _diamond()
    sim.compute_route("N1", "N3")
    node = sim.move_node("N4", 30, 30)
    assert (node.x, node.y) == (30.0, 30.0)
    assert sim.current_route is not None
