"""
Unit tests for TopologyGraph.
"""

import pytest

from errors import IdConflict, InvalidEdge, UnknownNode
from topology_graph import TopologyGraph


def _graph(*ids):
    g = TopologyGraph()
    for i, node_id in enumerate(ids):
        g.add_node(node_id, float(i), 0.0)
    return g


def test_add_nodes_and_edges():
    g = _graph("A", "B", "C")

    g.add_edge("A", "B", 1.0)
    g.add_edge("A", "C", 2.0)
    g.add_edge("B", "C", 3.0)

    assert {n.id for n in g.get_nodes()} == {"A", "B", "C"}

    assert g.outgoing("A") == {"B": 1.0, "C": 2.0}
    assert g.outgoing("B") == {"A": 1.0, "C": 3.0}
    assert g.outgoing("C") == {"A": 2.0, "B": 3.0}
    assert g.edge_count() == 3


def test_outgoing_returns_copy():
    g = _graph("A", "B")
    g.add_edge("A", "B", 1.0)

    out = g.outgoing("A")
    out.clear()

    # internal structure must remain intact
    assert g.outgoing("A") == {"B": 1.0}


def test_get_edges_keeps_insertion_order():
    g = _graph("A", "B", "C", "D")
    g.add_edge("A", "D", 1.0)
    g.add_edge("A", "B", 1.0)
    g.add_edge("A", "C", 1.0)

    assert [e.dst for e in g.get_edges("A")] == ["D", "B", "C"]
    assert all(e.src == "A" for e in g.get_edges("A"))


def test_duplicate_node_id_rejected():
    g = _graph("A")
    with pytest.raises(IdConflict):
        g.add_node("A", 5.0, 5.0)
    # original node untouched
    assert g.node("A").x == 0.0
    assert len(g) == 1


def test_create_node_assigns_sequential_ids():
    g = TopologyGraph()
    a = g.create_node(0, 0)
    b = g.create_node(10, 0)
    assert (a.id, b.id) == ("N1", "N2")

    g.remove_node("N2")
    assert g.create_node().id == "N3"


def test_create_node_skips_taken_ids():
    g = TopologyGraph(id_prefix="R")
    g.add_node("R1")
    assert g.create_node().id == "R2"


def test_edge_is_symmetric():
    g = _graph("A", "B")
    g.add_edge("A", "B", 4.0)

    assert g.has_edge("A", "B") and g.has_edge("B", "A")
    assert g.edge_weight("A", "B") == g.edge_weight("B", "A") == 4.0


def test_readding_edge_updates_both_weights_in_place():
    g = _graph("A", "B")
    first = g.add_edge("A", "B", 4.0)
    again = g.add_edge("B", "A", 7.5)

    assert len(g.get_edges("A")) == 1
    assert len(g.get_edges("B")) == 1
    assert g.edge_weight("A", "B") == 7.5
    assert g.edge_weight("B", "A") == 7.5
    assert first.weight == 4.0  # snapshot taken before the update
    assert again.src == "B"
    assert again.weight == 7.5


def test_add_edge_unknown_endpoint():
    g = _graph("A")
    with pytest.raises(UnknownNode) as info:
        g.add_edge("A", "Z", 1.0)
    assert info.value.node_id == "Z"
    assert g.get_edges("A") == []


@pytest.mark.parametrize("weight", [float("nan"), float("inf"), -1.0])
def test_add_edge_rejects_bad_weights(weight):
    g = _graph("A", "B")
    with pytest.raises(InvalidEdge):
        g.add_edge("A", "B", weight)
    assert not g.has_edge("A", "B")


def test_negative_weights_allowed_when_configured():
    g = TopologyGraph(allow_negative_weights=True)
    g.add_node("A")
    g.add_node("B")
    g.add_edge("A", "B", -2.0)
    assert g.edge_weight("A", "B") == -2.0


def test_self_loop_rejected():
    g = _graph("A")
    with pytest.raises(InvalidEdge):
        g.add_edge("A", "A", 1.0)


def test_remove_edge_both_directions():
    g = _graph("A", "B", "C")
    g.add_edge("A", "B", 1.0)
    g.add_edge("A", "C", 1.0)

    g.remove_edge("B", "A")

    assert not g.has_edge("A", "B")
    assert not g.has_edge("B", "A")
    assert g.has_edge("A", "C")


def test_remove_missing_edge_is_noop():
    g = _graph("A", "B")
    version = g.version
    g.remove_edge("A", "B")
    assert g.version == version


def test_remove_node_leaves_no_dangling_edges():
    g = _graph("A", "B", "C", "D")
    g.add_edge("A", "B", 1.0)
    g.add_edge("B", "C", 1.0)
    g.add_edge("B", "D", 1.0)
    g.add_edge("C", "D", 1.0)

    g.remove_node("B")

    assert "B" not in g
    for node_id in g.nodes():
        assert all(e.dst != "B" and e.src != "B" for e in g.get_edges(node_id))
    assert g.has_edge("C", "D")


def test_remove_unknown_node():
    g = _graph("A")
    with pytest.raises(UnknownNode):
        g.remove_node("B")
    with pytest.raises(UnknownNode):
        g.get_edges("B")


def test_move_node_is_not_a_topology_change():
    g = _graph("A")
    version = g.version
    g.move_node("A", 3.0, 4.0)
    assert (g.node("A").x, g.node("A").y) == (3.0, 4.0)
    assert g.version == version


def test_listeners_see_successful_mutations_only():
    g = _graph("A", "B")
    seen = []
    g.subscribe(lambda kind, detail: seen.append(kind))

    g.add_edge("A", "B", 1.0)
    g.add_edge("A", "B", 2.0)
    with pytest.raises(InvalidEdge):
        g.add_edge("A", "A", 1.0)
    g.remove_edge("A", "B")
    g.remove_node("B")

    assert seen == ["edge_added", "edge_updated", "edge_removed", "node_removed"]


def test_returned_edges_cannot_break_symmetry():
    g = _graph("A", "B")
    g.add_edge("A", "B", 1.0)
    version = g.version

    g.get_edges("A")[0].weight = -100.0
    g.add_edge("A", "B", 1.0).weight = 50.0

    assert g.edge_weight("A", "B") == 1.0
    assert g.edge_weight("B", "A") == 1.0
    assert g.version == version + 1


def test_node_id_is_read_only():
    g = _graph("A")
    node = g.node("A")
    with pytest.raises(AttributeError):
        node.id = "Z"
    assert g.has_node("A")
    assert node == g.node("A")
    assert node in g.get_nodes()
