"""
Route orchestration for aodvsim.

Turns a source pick followed by a destination pick into exactly one path
search, using whichever routing mode is current, and remembers the last
(source, destination) pair so the route can be re-run later.

The orchestrator owns no topology data. It listens to the graph and drops
its current route whenever the topology changes, because a stored path may
name nodes or links that no longer exist.
"""

from enum import Enum, auto
from typing import Dict, Mapping, Optional, Tuple, Union
import logging

from algorithms import PathFinder
from bfs_engine import BreadthFirstEngine
from dijkstra_engine import SimpleDijkstraEngine
from errors import OrchestrationError, UnknownNode
from event_log import LOGGER_NAME, EventLog
from routing import NoPathFound, RouteResult, RoutingMode
from topology_graph import TopologyGraph

logger = logging.getLogger(f"{LOGGER_NAME}.{__name__}")


class OrchestratorState(Enum):
    IDLE = auto()
    SOURCE_CHOSEN = auto()
    ROUTE_COMPUTED = auto()


def default_engines() -> Dict[RoutingMode, PathFinder]:
    return {
        RoutingMode.HOP_COUNT: BreadthFirstEngine(),
        RoutingMode.WEIGHTED: SimpleDijkstraEngine(),
    }


class RouteOrchestrator:
    """
    Source/destination state machine over a TopologyGraph.

    IDLE --select_source--> SOURCE_CHOSEN --select_destination--> ROUTE_COMPUTED
    clear_route() returns to IDLE from anywhere.
    """

    def __init__(
        self,
        graph: TopologyGraph,
        engines: Optional[Mapping[RoutingMode, PathFinder]] = None,
        mode: Union[RoutingMode, str, bool] = RoutingMode.HOP_COUNT,
        invalidate_on_mutation: bool = True,
        event_log: Optional[EventLog] = None,
    ) -> None:
        self._graph = graph
        self._engines: Dict[RoutingMode, PathFinder] = dict(engines or default_engines())
        missing = [m for m in RoutingMode if m not in self._engines]
        if missing:
            raise ValueError(f"No engine for routing mode(s): {', '.join(m.value for m in missing)}")
        self._mode = RoutingMode.parse(mode)
        self._events = event_log

        self.state = OrchestratorState.IDLE
        self.source: Optional[str] = None
        self.destination: Optional[str] = None
        self.result: Optional[RouteResult] = None
        # Retained across clear_route() for rerun().
        self.last_pair: Optional[Tuple[str, str]] = None

        self._invalidate = invalidate_on_mutation
        if invalidate_on_mutation:
            graph.subscribe(self._on_topology_changed)

    # --- Mode ----------------------------------------------------------------

    @property
    def mode(self) -> RoutingMode:
        return self._mode

    @mode.setter
    def mode(self, value: Union[RoutingMode, str, bool]) -> None:
        self._mode = RoutingMode.parse(value)

    # --- Commands ------------------------------------------------------------

    def select_source(self, node_id: str) -> None:
        """Pick the route source. Any earlier selection is discarded."""
        self._graph.node(node_id)
        self.state = OrchestratorState.SOURCE_CHOSEN
        self.source = node_id
        self.destination = None
        self.result = None
        self._record("UI", "Route", f"Source = {node_id}")

    def select_destination(self, node_id: str) -> RouteResult:
        """Pick the destination and run one search with the current mode."""
        if self.state is not OrchestratorState.SOURCE_CHOSEN or self.source is None:
            raise OrchestrationError("Select a source before selecting a destination.")
        self._graph.node(node_id)
        self._record("UI", "Route", f"Dest   = {node_id}")
        return self._run(self.source, node_id, self._mode)

    def compute_route(
        self,
        source: str,
        destination: str,
        mode: Union[RoutingMode, str, bool, None] = None,
    ) -> RouteResult:
        """One-shot query; behaves like select_source + select_destination."""
        chosen = self._mode if mode is None else RoutingMode.parse(mode)
        return self._run(source, destination, chosen)

    def clear_route(self) -> None:
        """Forget the current selection and route; the rerun pair is kept."""
        self.state = OrchestratorState.IDLE
        self.source = None
        self.destination = None
        self.result = None

    def rerun(self, mode: Union[RoutingMode, str, bool, None] = None) -> Optional[RouteResult]:
        """
        Recompute the last (source, destination) pair with the current mode.

        Returns None when nothing has been routed yet. Raises UnknownNode if
        either endpoint has been removed since.
        """
        if self.last_pair is None:
            self._record("UI", "Info", "No previous src/dst. Use Select Route first.")
            return None
        source, destination = self.last_pair
        for node_id in (source, destination):
            if not self._graph.has_node(node_id):
                raise UnknownNode(node_id)
        chosen = self._mode if mode is None else RoutingMode.parse(mode)
        return self._run(source, destination, chosen)

    def detach(self) -> None:
        """Stop listening to topology changes."""
        if self._invalidate:
            self._graph.unsubscribe(self._on_topology_changed)
            self._invalidate = False

    # --- Internal helpers ----------------------------------------------------

    def _run(self, source: str, destination: str, mode: RoutingMode) -> RouteResult:
        engine = self._engines[mode]
        self._record("Sim", "Start", f"{mode.value} {source}→{destination}")
        result = engine.find_path(self._graph, source, destination)

        self.state = OrchestratorState.ROUTE_COMPUTED
        self.source = source
        self.destination = destination
        self.result = result
        self.last_pair = (source, destination)

        if isinstance(result, NoPathFound):
            self._record("Sim", "Fail", "No path")
        else:
            self._record(
                "Sim", "Path", f"{' → '.join(result.nodes)} (hops={result.hops}, cost={result.cost:g})"
            )
        return result

    def _on_topology_changed(self, kind: str, detail: str) -> None:
        if self.state is OrchestratorState.ROUTE_COMPUTED:
            logger.debug("Dropping stored route after %s", kind)
            self.clear_route()
        elif self.state is OrchestratorState.SOURCE_CHOSEN and not self._graph.has_node(self.source):
            self.clear_route()

    def _record(self, source: str, event: str, detail: str) -> None:
        if self._events is not None:
            self._events.record(source, event, detail)
        else:
            logger.info("%s:%s %s", source, event, detail)
