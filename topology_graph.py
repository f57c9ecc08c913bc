"""
Concrete topology graph for aodvsim.

Owns every Node and an adjacency list of directed Edge records. Links are
undirected from the caller's point of view: each one is stored as a pair of
directed records that always carry the same weight.

Not thread-safe. Callers that share a graph between threads must guard all
access with a single external lock.
"""

from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set
import logging

from edges import Edge, validate_weight
from errors import IdConflict, InvalidEdge, UnknownNode
from event_log import LOGGER_NAME
from graph import Graph
from nodes import Node

logger = logging.getLogger(f"{LOGGER_NAME}.{__name__}")

# Called after every successful topology mutation with (kind, detail).
MutationListener = Callable[[str, str], None]


class TopologyGraph(Graph):
    """
    Undirected, weighted topology backed by id -> [Edge] adjacency lists.
    """

    def __init__(self, allow_negative_weights: bool = False, id_prefix: str = "N") -> None:
        self._nodes: Dict[str, Node] = {}
        self._adj: Dict[str, List[Edge]] = {}
        self._allow_negative = allow_negative_weights
        self._id_prefix = id_prefix
        self._id_counter = 0
        self._listeners: List[MutationListener] = []
        self.version = 0

    # --- Mutation API --------------------------------------------------------

    def add_node(self, node_id: str, x: float = 0.0, y: float = 0.0) -> Node:
        """Create a node with an empty adjacency entry."""
        if node_id in self._nodes:
            raise IdConflict(node_id)
        node = Node(node_id, float(x), float(y))
        self._nodes[node_id] = node
        self._adj[node_id] = []
        self._changed("node_added", f"Node {node_id}")
        return node

    def create_node(self, x: float = 0.0, y: float = 0.0) -> Node:
        """
        Create a node with the next free auto-assigned id (N1, N2, ...).

        Numbers are never handed out twice, even after the node is removed.
        """
        while True:
            self._id_counter += 1
            node_id = f"{self._id_prefix}{self._id_counter}"
            if node_id not in self._nodes:
                return self.add_node(node_id, x, y)

    def add_edge(self, src: str, dst: str, weight: float) -> Edge:
        """
        Add the undirected link src <-> dst, or re-weight it if present.

        Returns a copy of the src -> dst record.
        """
        self._require(src)
        self._require(dst)
        if src == dst:
            raise InvalidEdge(f"Self-loop on node '{src}' is not allowed.")
        w = validate_weight(weight, self._allow_negative)

        forward = self._find_edge(src, dst)
        backward = self._find_edge(dst, src)
        if forward is not None and backward is not None:
            forward.weight = w
            backward.weight = w
            self._changed("edge_updated", f"Edge {src}<->{dst} w={w}")
            return replace(forward)

        # Repair a half-present pair.
        if forward is None:
            forward = Edge(src, dst, w)
            self._adj[src].append(forward)
        else:
            forward.weight = w
        if backward is None:
            self._adj[dst].append(Edge(dst, src, w))
        else:
            backward.weight = w
        self._changed("edge_added", f"Edge {src}<->{dst} w={w}")
        return replace(forward)

    def remove_edge(self, a: str, b: str) -> None:
        """Remove the link a <-> b in both directions; no-op if absent."""
        self._require(a)
        self._require(b)
        before = len(self._adj[a]) + len(self._adj[b])
        self._adj[a] = [e for e in self._adj[a] if e.dst != b]
        self._adj[b] = [e for e in self._adj[b] if e.dst != a]
        if len(self._adj[a]) + len(self._adj[b]) != before:
            self._changed("edge_removed", f"Edge {a}<->{b}")

    def remove_node(self, node_id: str) -> Node:
        """Remove a node and every edge that references it."""
        node = self._require(node_id)
        for edge in self._adj[node_id]:
            neighbour = edge.dst
            self._adj[neighbour] = [e for e in self._adj[neighbour] if e.dst != node_id]
        del self._adj[node_id]
        del self._nodes[node_id]
        self._changed("node_removed", f"Node {node_id} and its edges removed")
        return node

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        """Reposition a node. Not a topology change: routes stay valid."""
        node = self._require(node_id)
        node.move_to(x, y)
        return node

    def subscribe(self, listener: MutationListener) -> None:
        """Register a callback run after each successful topology mutation."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: MutationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Queries -------------------------------------------------------------

    def node(self, node_id: str) -> Node:
        return self._require(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def has_edge(self, a: str, b: str) -> bool:
        return a in self._adj and self._find_edge(a, b) is not None

    def edge_weight(self, a: str, b: str) -> Optional[float]:
        """Weight of a -> b, or None if the nodes are not linked."""
        self._require(a)
        self._require(b)
        edge = self._find_edge(a, b)
        return edge.weight if edge else None

    def get_nodes(self) -> Set[Node]:
        return set(self._nodes.values())

    def get_edges(self, node_id: str) -> List[Edge]:
        """
        Outgoing edges of a node in insertion order.

        The records are copies; re-weight links through add_edge.
        """
        self._require(node_id)
        return [replace(e) for e in self._adj[node_id]]

    def edge_count(self) -> int:
        """Number of undirected links."""
        return sum(len(edges) for edges in self._adj.values()) // 2

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    # --- Graph interface -----------------------------------------------------

    def nodes(self) -> Iterable[str]:
        return self._nodes.keys()

    def outgoing(self, node_id: str) -> Mapping[str, float]:
        return {e.dst: e.weight for e in self._adj.get(node_id, [])}  # defensive copy

    # --- Internal helpers ----------------------------------------------------

    def _require(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            raise UnknownNode(node_id)
        return node

    def _find_edge(self, a: str, b: str) -> Optional[Edge]:
        for edge in self._adj.get(a, []):
            if edge.dst == b:
                return edge
        return None

    def _changed(self, kind: str, detail: str) -> None:
        self.version += 1
        logger.debug("%s: %s (version %d)", kind, detail, self.version)
        for listener in list(self._listeners):
            listener(kind, detail)
