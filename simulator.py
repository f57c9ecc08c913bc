"""
Command/query surface for aodvsim.

RoutingSimulator is what a front end (canvas, dialogs, log panel) talks to.
It wires one TopologyGraph, one RouteOrchestrator and one EventLog together,
parses user-entered weights, and records every command in the event log.
Errors are logged and then re-raised to the caller unchanged.

No log handlers are installed here; applications call
event_log.configure_logging themselves.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Set, Union
import logging

from config import SimulatorSettings
from edges import Edge, parse_weight
from errors import TopologyError
from event_log import LOGGER_NAME, EventLog, LogEntry
from nodes import Node
from orchestrator import OrchestratorState, RouteOrchestrator
from routing import RouteResult, RoutingMode
from topology_graph import TopologyGraph

WeightInput = Union[str, float, int, None]
ModeInput = Union[RoutingMode, str, bool, None]


class RoutingSimulator:
    """
    In-memory network topology plus hop-count / weighted route queries.

    Single-threaded: guard with one external lock if shared across threads.
    """

    def __init__(self, settings: Optional[SimulatorSettings] = None) -> None:
        self.settings = settings or SimulatorSettings()
        logging.getLogger(LOGGER_NAME).setLevel(self.settings.log_level)

        self.log = EventLog(capacity=self.settings.log_capacity)
        self.graph = TopologyGraph(
            allow_negative_weights=self.settings.allow_negative_weights,
            id_prefix=self.settings.node_id_prefix,
        )
        self.orchestrator = RouteOrchestrator(
            self.graph,
            mode=self.settings.default_mode,
            invalidate_on_mutation=self.settings.invalidate_on_mutation,
            event_log=self.log,
        )

    # --- Mode ----------------------------------------------------------------

    @property
    def mode(self) -> RoutingMode:
        return self.orchestrator.mode

    @mode.setter
    def mode(self, value: Union[RoutingMode, str, bool]) -> None:
        self.orchestrator.mode = value
        self.log.record("UI", "Mode", f"Routing by {self.orchestrator.mode.value}")

    # --- Topology commands ---------------------------------------------------

    def add_node(self, node_id: str, x: float = 0.0, y: float = 0.0) -> Node:
        with self._command("Graph", "Add"):
            node = self.graph.add_node(node_id, x, y)
        self.log.record("Graph", "Add", f"Node {node.id}")
        return node

    def create_node(self, x: float = 0.0, y: float = 0.0) -> Node:
        """Place a node with an auto-assigned id."""
        with self._command("Graph", "Add"):
            node = self.graph.create_node(x, y)
        self.log.record("Graph", "Add", f"Node {node.id}")
        return node

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        with self._command("Graph", "Move"):
            return self.graph.move_node(node_id, x, y)

    def add_edge(self, a: str, b: str, weight: WeightInput = None) -> Edge:
        """
        Create or re-weight the link a <-> b.

        ``weight`` may be a number or the raw text a user typed; blank means
        the configured default weight.
        """
        with self._command("Edge", "Add/Upd"):
            w = parse_weight(
                weight,
                default=self.settings.default_weight,
                allow_negative=self.settings.allow_negative_weights,
            )
            edge = self.graph.add_edge(a, b, w)
        self.log.record("Graph", "Add/Upd", f"Edge {a}↔{b} w={w:g}")
        return edge

    def remove_edge(self, a: str, b: str) -> None:
        with self._command("Edge", "Del"):
            self.graph.remove_edge(a, b)
        self.log.record("Graph", "Del", f"Edge {a}↔{b}")

    def remove_node(self, node_id: str) -> None:
        with self._command("Graph", "Del"):
            self.graph.remove_node(node_id)
        self.log.record("Graph", "Del", f"Node {node_id} and its edges removed")

    # --- Queries -------------------------------------------------------------

    def nodes(self) -> Set[Node]:
        return self.graph.get_nodes()

    def edges(self, node_id: str) -> List[Edge]:
        with self._command("Graph", "Query"):
            return self.graph.get_edges(node_id)

    def entries(self) -> List[LogEntry]:
        return self.log.entries()

    # --- Route commands ------------------------------------------------------

    def compute_route(self, source: str, destination: str, mode: ModeInput = None) -> RouteResult:
        with self._command("Sim", "Route"):
            return self.orchestrator.compute_route(source, destination, mode)

    def select_source(self, node_id: str) -> None:
        with self._command("UI", "Route"):
            self.orchestrator.select_source(node_id)

    def select_destination(self, node_id: str) -> RouteResult:
        with self._command("UI", "Route"):
            return self.orchestrator.select_destination(node_id)

    def clear_route(self) -> None:
        self.orchestrator.clear_route()

    def rerun(self, mode: ModeInput = None) -> Optional[RouteResult]:
        with self._command("Sim", "Rerun"):
            return self.orchestrator.rerun(mode)

    @property
    def state(self) -> OrchestratorState:
        return self.orchestrator.state

    @property
    def current_route(self) -> Optional[RouteResult]:
        return self.orchestrator.result

    # --- Internal helpers ----------------------------------------------------

    @contextmanager
    def _command(self, source: str, event: str) -> Iterator[None]:
        try:
            yield
        except TopologyError as exc:
            self.log.record("Error", f"{source}:{event}", str(exc), level=logging.WARNING)
            raise
