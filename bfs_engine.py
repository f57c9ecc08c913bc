"""
Breadth-first PathFinder for aodvsim.

Finds the route with the fewest hops, ignoring link weights.
"""

from collections import deque
from typing import Dict
import logging

from algorithms import PathFinder
from errors import UnknownNode
from event_log import LOGGER_NAME
from graph import Graph
from routing import RouteResult, RoutingMode, build_result

logger = logging.getLogger(f"{LOGGER_NAME}.{__name__}")


class BreadthFirstEngine(PathFinder):
    """
    Hop-count search.

    Among several minimum-hop paths the one returned depends on edge
    insertion order; callers must not rely on a particular one.

    Complexity:
        O(V + E) over the nodes reachable from the source.
    """

    mode = RoutingMode.HOP_COUNT

    def __init__(self) -> None:
        # Instrumentation counters per invocation.
        self.last_visited = 0
        self.last_edges_examined = 0

    def find_path(self, graph: Graph, source: str, destination: str) -> RouteResult:
        for node_id in (source, destination):
            if node_id not in graph:
                raise UnknownNode(node_id)

        self.last_visited = 0
        self.last_edges_examined = 0

        prev: Dict[str, str] = {}
        visited = {source}
        queue = deque([source])

        while queue:
            u = queue.popleft()
            self.last_visited += 1
            if u == destination:
                break
            for v in graph.outgoing(u):
                self.last_edges_examined += 1
                if v not in visited:
                    visited.add(v)
                    prev[v] = u
                    queue.append(v)

        result = build_result(graph, prev, source, destination, self.mode)
        logger.debug(
            "BFS %s -> %s: %s (visited=%d)", source, destination, result, self.last_visited
        )
        return result
