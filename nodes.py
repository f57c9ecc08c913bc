"""
Node record for aodvsim.

A node is an id plus a canvas position. The position only matters to
whatever draws the topology; routing never looks at it.
"""

from dataclasses import dataclass


@dataclass(eq=False)
class Node:
    """
    A topology vertex.

    ``id`` is read-only. Equality and hashing use it alone, so a node keeps
    its identity while it is dragged around.
    """

    _id: str
    x: float = 0.0
    y: float = 0.0

    @property
    def id(self) -> str:
        return self._id

    def move_to(self, x: float, y: float) -> None:
        """Reposition the node; does not affect routing."""
        self.x = float(x)
        self.y = float(y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)
