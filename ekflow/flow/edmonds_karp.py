"""
Edmonds-Karp maximum flow with multi-path BFS phases.

Each phase runs a breadth-first search over the residual network. The search
stops admitting new vertices once the sink has been reached, but finishes
exploring the vertices already queued, so every augmenting path of the current
shortest length that is visible from the BFS tree is found in one phase. The
phases repeat until the sink is unreachable; by the max-flow/min-cut theorem
the accumulated value is then maximum.

The worst case is O(V E^2). Only simple directed and undirected graphs are
supported; multigraphs and self-loops are not.
"""
from typing import Any, Dict, Hashable, NamedTuple, Optional, Tuple
import logging

from ..graph.base import BaseGraph
from .augmenter import PathAugmenter
from .labeler import BreadthFirstLabeler
from .residual import ResidualNetwork, validate_capacities

# Configure logging for the module
logger = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-9


class MaximumFlow(NamedTuple):
    value: Any
    flow: Dict[Tuple[Hashable, Hashable], Any]


class EdmondsKarpMaxFlow:
    """
    Maximum flow solver over a ``BaseGraph``.

    Capacities are the edge weights, or 1 when the graph is unweighted.
    Internal state is rebuilt on every call and is shared by the phases of
    that call, so one instance must not be used from several threads at once.
    """

    def __init__(self, network: BaseGraph, epsilon: float = DEFAULT_EPSILON):
        if network is None:
            raise ValueError("network is None")
        if epsilon <= 0:
            raise ValueError(f"invalid epsilon {epsilon} (must be positive)")
        validate_capacities(network, epsilon)

        self.network = network
        self.epsilon = epsilon
        self.logger = logging.getLogger(__name__)

        self._residual: Optional[ResidualNetwork] = None
        self._source = None
        self._sink = None
        self._max_flow_value = None
        self._flow_map = None
        self.phase_count = 0

    def calculate_maximum_flow(self, source: Hashable, sink: Hashable) -> Any:
        """
        Calculate the maximum flow value from source to sink.

        The flow realised on each edge stays queryable through
        ``get_flow_map`` without running the algorithm again.
        """
        if source is None or not self.network.has_vertex(source):
            raise ValueError(f"invalid source {source!r} (None or not from this network)")
        if sink is None or not self.network.has_vertex(sink):
            raise ValueError(f"invalid sink {sink!r} (None or not from this network)")
        if source == sink:
            raise ValueError("source is equal to sink")

        residual = ResidualNetwork(self.network, self.epsilon)
        self._residual = residual
        self._source = source
        self._sink = sink
        self._flow_map = None
        self.phase_count = 0

        s = residual.index_of(source)
        t = residual.index_of(sink)
        labeler = BreadthFirstLabeler(residual)
        augmenter = PathAugmenter(residual)

        flow_value = 0
        while True:
            labels = labeler.label(s, t)
            if not labels.visited[t]:
                break

            flow_value += augmenter.augment(labels, s, t)
            self.phase_count += 1

        self._max_flow_value = flow_value
        self.logger.debug(
            f"Maximum flow {source} -> {sink}: {flow_value} "
            f"after {self.phase_count} augmenting phase(s)"
        )
        return flow_value

    def build_maximum_flow(self, source: Hashable, sink: Hashable) -> MaximumFlow:
        """Calculate the maximum flow and compose the flow carried by every edge."""
        self.calculate_maximum_flow(source, sink)
        return MaximumFlow(self._max_flow_value, self.get_flow_map())

    def _require_result(self) -> ResidualNetwork:
        if self._residual is None:
            raise RuntimeError("maximum flow has not been calculated yet")
        return self._residual

    def get_maximum_flow_value(self) -> Any:
        self._require_result()
        return self._max_flow_value

    def get_flow_map(self) -> Dict[Tuple[Hashable, Hashable], Any]:
        residual = self._require_result()
        if self._flow_map is None:
            self._flow_map = {edge: residual.edge_flow(edge) for edge in residual.edges}
        return self._flow_map

    def get_flow_dict(self) -> Dict[Hashable, Dict[Hashable, Any]]:
        """Positive edge flows as ``{u: {v: flow}}``, oriented the way the flow travels."""
        residual = self._require_result()
        flow_dict = {}
        for edge, flow in self.get_flow_map().items():
            if flow <= self.epsilon:
                continue
            head = residual.edge_flow_direction(edge)
            tail = edge[0] if head == edge[1] else edge[1]
            flow_dict.setdefault(tail, {})[head] = flow
        return flow_dict

    def get_flow_direction(self, edge: Tuple[Hashable, Hashable]) -> Hashable:
        """Return the endpoint of edge that its flow enters."""
        residual = self._require_result()
        if not residual.has_edge(edge):
            raise ValueError(f"edge {edge!r} does not exist in the input graph")
        return residual.edge_flow_direction(edge)

    def get_current_source(self) -> Hashable:
        self._require_result()
        return self._source

    def get_current_sink(self) -> Hashable:
        self._require_result()
        return self._sink

    @property
    def residual_network(self) -> ResidualNetwork:
        return self._require_result()
