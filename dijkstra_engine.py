"""
Heap-based Dijkstra PathFinder for aodvsim.

Uses Python's heapq to compute minimum-weight routes over any Graph
implementation that satisfies the Graph interface.

All edge weights must be non-negative; the topology graph refuses negative
weights unless explicitly told otherwise, and results are undefined then.
"""

from typing import Dict, Optional, Tuple
import heapq
import logging
import math

from algorithms import PathFinder
from errors import UnknownNode
from event_log import LOGGER_NAME
from graph import Graph
from routing import RouteResult, RoutingMode, build_result

logger = logging.getLogger(f"{LOGGER_NAME}.{__name__}")


class SimpleDijkstraEngine(PathFinder):
    """
    Dijkstra using a binary heap.

    Relaxation re-inserts the neighbour instead of decreasing its key, so the
    heap may hold stale entries for a node; they are skipped when popped.
    Settled nodes are never relaxed again, which keeps the predecessor map
    acyclic even when negative weights were let in.

    Complexity:
        O((V + E) log V) over the nodes reachable from the source.
    """

    mode = RoutingMode.WEIGHTED

    def __init__(self) -> None:
        # Instrumentation counters per invocation.
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_heap_pops = 0
        self.last_heap_pushes = 0

    def _reset_counters(self) -> None:
        self.last_edges_examined = 0
        self.last_relaxed = 0
        self.last_heap_pops = 0
        self.last_heap_pushes = 0

    def _search(
        self, graph: Graph, source: str, destination: Optional[str] = None
    ) -> Tuple[Dict[str, float], Dict[str, str]]:
        self._reset_counters()
        dist: Dict[str, float] = {source: 0.0}
        prev: Dict[str, str] = {}
        done = set()
        pq = [(0.0, source)]  # priority queue of (distance, node)

        while pq:
            d_u, u = heapq.heappop(pq)
            self.last_heap_pops += 1

            # Skip outdated entries
            if u in done or d_u != dist.get(u, math.inf):
                continue
            done.add(u)
            if u == destination:
                break

            for v, w in graph.outgoing(u).items():
                self.last_edges_examined += 1
                if v in done:
                    continue
                alt = d_u + w
                if alt < dist.get(v, math.inf):
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(pq, (alt, v))
                    self.last_heap_pushes += 1
                    self.last_relaxed += 1

        return dist, prev

    def shortest_paths(
        self, graph: Graph, source: str
    ) -> Tuple[Dict[str, float], Dict[str, str]]:
        """
        Full single-source run: distance map plus predecessor map.

        Unreachable nodes are absent from both maps. The predecessor map
        omits the source itself because it has no parent.
        """
        if source not in graph:
            raise UnknownNode(source)
        return self._search(graph, source)

    def find_path(self, graph: Graph, source: str, destination: str) -> RouteResult:
        """
        Minimum-weight route; stops as soon as the destination is settled.
        """
        for node_id in (source, destination):
            if node_id not in graph:
                raise UnknownNode(node_id)

        _, prev = self._search(graph, source, destination)
        result = build_result(graph, prev, source, destination, self.mode)
        logger.debug(
            "Dijkstra %s -> %s: %s (pops=%d)", source, destination, result, self.last_heap_pops
        )
        return result
