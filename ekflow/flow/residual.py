from typing import Any, Dict, Hashable, List, Tuple
import logging

from ..graph.base import BaseGraph

# Configure logging for the module
logger = logging.getLogger(__name__)


def validate_capacities(graph: BaseGraph, epsilon: float) -> None:
    """Reject networks holding a capacity below -epsilon."""
    for u, v, _ in graph.get_edges():
        capacity = graph.get_edge_weight((u, v))
        if capacity < -epsilon:
            raise ValueError(
                f"invalid capacity {capacity} on edge ({u}, {v}) (must be non-negative)"
            )


class ResidualNetwork:
    """
    Residual view of a flow network.

    Vertices and arcs live in flat arrays addressed by dense integer indices.
    Every edge of the input graph owns a forward arc and a paired reverse arc;
    the pair always satisfies ``flow[a] + flow[reverse[a]] == 0``.
    """

    def __init__(self, graph: BaseGraph, epsilon: float):
        self.epsilon = epsilon
        self.directed = graph.is_directed()

        validate_capacities(graph, epsilon)

        self.vertices: List[Hashable] = list(graph.get_vertices())
        self.vertex_index: Dict[Hashable, int] = {
            vertex: idx for idx, vertex in enumerate(self.vertices)
        }
        self.outgoing: List[List[int]] = [[] for _ in self.vertices]

        self.tail: List[int] = []
        self.head: List[int] = []
        self.capacity: List[Any] = []
        self.flow: List[Any] = []
        self.reverse: List[int] = []

        self.edges: List[Tuple[Hashable, Hashable]] = []
        self.edge_arc: Dict[Tuple[Hashable, Hashable], int] = {}

        self._build(graph)
        logger.debug(
            f"Residual network built: {self.num_vertices} vertices, "
            f"{self.num_arcs} arcs ({'directed' if self.directed else 'undirected'})"
        )

    def _build(self, graph: BaseGraph) -> None:
        for u, v, _ in graph.get_edges():
            edge = (u, v)
            capacity = graph.get_edge_weight(edge)
            u_idx = self.vertex_index[graph.get_edge_source(edge)]
            v_idx = self.vertex_index[graph.get_edge_target(edge)]

            forward = self._add_arc(u_idx, v_idx, capacity)
            # Undirected edges carry their capacity in both directions
            backward = self._add_arc(v_idx, u_idx, 0 if self.directed else capacity)
            self.reverse.extend((backward, forward))

            self.edges.append(edge)
            self.edge_arc[edge] = forward

    def _add_arc(self, tail: int, head: int, capacity: Any) -> int:
        arc = len(self.tail)
        self.tail.append(tail)
        self.head.append(head)
        self.capacity.append(capacity)
        self.flow.append(0)
        self.outgoing[tail].append(arc)
        return arc

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def num_arcs(self) -> int:
        return len(self.tail)

    def index_of(self, vertex: Hashable) -> int:
        return self.vertex_index[vertex]

    def residual(self, arc: int) -> Any:
        return self.capacity[arc] - self.flow[arc]

    def has_capacity(self, arc: int) -> bool:
        return self.capacity[arc] - self.flow[arc] > self.epsilon

    def push(self, arc: int, delta: Any) -> None:
        """Send delta units along arc, cancelling the same amount on its pair."""
        if delta > self.capacity[arc] - self.flow[arc] + self.epsilon:
            raise AssertionError(
                f"push of {delta} exceeds residual capacity "
                f"{self.capacity[arc] - self.flow[arc]} on arc {arc}"
            )
        self.flow[arc] += delta
        self.flow[self.reverse[arc]] -= delta

    def has_edge(self, edge: Tuple[Hashable, Hashable]) -> bool:
        if edge in self.edge_arc:
            return True
        return not self.directed and (edge[1], edge[0]) in self.edge_arc

    def arc_of(self, edge: Tuple[Hashable, Hashable]) -> int:
        """Forward arc of an input edge; undirected edges match either orientation."""
        if edge in self.edge_arc or self.directed:
            return self.edge_arc[edge]
        return self.edge_arc[(edge[1], edge[0])]

    def edge_flow(self, edge: Tuple[Hashable, Hashable]) -> Any:
        """Flow carried by an input edge; the magnitude for undirected edges."""
        arc = self.arc_of(edge)
        if self.directed:
            return self.flow[arc]
        return max(self.flow[arc], self.flow[self.reverse[arc]])

    def edge_flow_direction(self, edge: Tuple[Hashable, Hashable]) -> Hashable:
        """Vertex the flow of an input edge enters."""
        arc = self.arc_of(edge)
        if self.directed or self.flow[arc] > self.flow[self.reverse[arc]]:
            return self.vertices[self.head[arc]]
        return self.vertices[self.tail[arc]]
