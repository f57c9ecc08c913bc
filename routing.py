"""
Routing abstractions for aodvsim.

Defines the routing mode switch and the two shapes a route query can
return: a concrete Route, or an explicit NoPathFound value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from graph import Graph


class RoutingMode(Enum):
    """
    Metric a route query minimises.

    HOP_COUNT: fewest links traversed, weights ignored (BFS).
    WEIGHTED: smallest sum of link weights (Dijkstra).
    """

    HOP_COUNT = "hop_count"
    WEIGHTED = "weighted"

    @classmethod
    def parse(cls, value: Union["RoutingMode", str, bool]) -> "RoutingMode":
        """
        Accept an enum member, its value/name, or a ``weighted`` flag.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.WEIGHTED if value else cls.HOP_COUNT
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown routing mode: {value!r}")


@dataclass(frozen=True)
class Route:
    """
    A path found between two nodes.

    ``nodes`` runs from source to destination inclusive. ``cost`` is the sum
    of link weights along the path, whichever mode chose it.
    """

    nodes: Tuple[str, ...]
    cost: float
    mode: RoutingMode

    @property
    def source(self) -> str:
        return self.nodes[0]

    @property
    def destination(self) -> str:
        return self.nodes[-1]

    @property
    def hops(self) -> int:
        return len(self.nodes) - 1

    def __str__(self) -> str:
        return " -> ".join(self.nodes)


@dataclass(frozen=True)
class NoPathFound:
    """
    Result value for a valid query whose destination is unreachable.

    Falsy, so ``if result:`` separates found routes from misses. Invalid
    queries raise instead of returning this.
    """

    source: str
    destination: str
    mode: RoutingMode

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"No path {self.source} -> {self.destination}"


RouteResult = Union[Route, NoPathFound]


def reconstruct_path(
    prev: Dict[str, str], source: str, destination: str
) -> Optional[List[str]]:
    """
    Walk predecessor links back from destination to source.

    Returns None if destination was never reached.
    """
    if destination != source and destination not in prev:
        return None
    path = [destination]
    step = destination
    while step != source:
        step = prev[step]
        path.append(step)
    path.reverse()
    return path


def path_cost(graph: Graph, path: Sequence[str]) -> float:
    """Sum of link weights along ``path``."""
    total = 0.0
    for u, v in zip(path, path[1:]):
        total += graph.outgoing(u)[v]
    return total


def build_result(
    graph: Graph,
    prev: Dict[str, str],
    source: str,
    destination: str,
    mode: RoutingMode,
) -> RouteResult:
    """Turn a predecessor map into a Route or NoPathFound."""
    path = reconstruct_path(prev, source, destination)
    if path is None:
        return NoPathFound(source, destination, mode)
    return Route(tuple(path), path_cost(graph, path), mode)
