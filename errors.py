"""
Error taxonomy for aodvsim.

Every failure is local to a single command and leaves the topology as it was
before the call. "No path" is not an error: see routing.NoPathFound.
"""


class TopologyError(Exception):
    """Base class for all errors raised by the routing core."""


class UnknownNode(TopologyError, LookupError):
    """An operation referenced a node id that is not in the graph."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Unknown node '{node_id}'.")
        self.node_id = node_id


class IdConflict(TopologyError, ValueError):
    """A node was created with an id that is already in use."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node id '{node_id}' is already in use.")
        self.node_id = node_id


class InvalidEdge(TopologyError, ValueError):
    """Self-loop, disallowed weight, or weight text that does not parse."""


class OrchestrationError(TopologyError):
    """A route command was issued in a state that does not accept it."""
