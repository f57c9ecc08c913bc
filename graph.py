"""
Read-only, weighted graph abstraction for aodvsim.

Nodes are addressed by their string id.
Edges are directed: u -> v with float weight.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Mapping


class Graph(ABC):
    """Directed, weighted graph keyed by node id."""

    @abstractmethod
    def nodes(self) -> Iterable[str]:
        """Return the ids of all nodes in the graph."""
        raise NotImplementedError

    @abstractmethod
    def outgoing(self, node_id: str) -> Mapping[str, float]:
        """
        Outgoing neighbours and edge weights for a given node.

        Iteration order follows edge insertion order.

        Returns: dict[str, float]
        """
        raise NotImplementedError

    def __contains__(self, node_id: object) -> bool:
        return node_id in set(self.nodes())
