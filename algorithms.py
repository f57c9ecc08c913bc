"""
Algorithm interfaces for routing.

Keeps path search separate from the topology container and from the
orchestration that decides which search to run.
"""

from abc import ABC, abstractmethod

from graph import Graph
from routing import RouteResult, RoutingMode


class PathFinder(ABC):
    """
    Interface for single-pair route computation.
    """

    mode: RoutingMode

    @abstractmethod
    def find_path(self, graph: Graph, source: str, destination: str) -> RouteResult:
        """
        Compute a route from source to destination.

        Returns:
            Route (source and destination inclusive) or NoPathFound.

        Raises:
            UnknownNode if either endpoint is not in the graph.
        """
        raise NotImplementedError
