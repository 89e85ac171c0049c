import networkx as nx
from networkx.algorithms.flow import preflow_push
import time
from typing import List, Tuple, Dict, Any, Optional, Hashable, Iterable

from .base import BaseGraph
import logging

# Configure logging for the module
logger = logging.getLogger(__name__)

class NetworkXGraph(BaseGraph):
    def __init__(self, edges: List[Tuple[Hashable, Hashable]], capacities: List[float],
                 directed: bool = True, weighted: bool = True,
                 vertices: Optional[Iterable[Hashable]] = None):
        """
        Initialize NetworkX graph implementation.

        Args:
            edges: List of (source, target) node pairs
            capacities: List of edge capacities
            directed: Build a DiGraph if True, an undirected Graph otherwise
            weighted: If False every edge has capacity one
            vertices: Extra vertices to add, e.g. isolated ones
        """
        self.logger = logging.getLogger(__name__)
        self.directed = directed
        self.weighted = weighted
        self.g_nx = self._create_graph(edges, capacities, vertices)

    def _create_graph(self, edges: List[Tuple[Hashable, Hashable]], capacities: List[float],
                      vertices: Optional[Iterable[Hashable]]) -> nx.Graph:
        """Create NetworkX graph with edge properties."""
        if len(edges) != len(capacities):
            raise ValueError(f"Got {len(edges)} edges but {len(capacities)} capacities")

        g = nx.DiGraph() if self.directed else nx.Graph()
        if vertices is not None:
            g.add_nodes_from(vertices)

        for u, v in edges:
            if u == v:
                raise ValueError(f"Self-loop on {u!r} is not supported")
            if g.has_edge(u, v):
                raise ValueError(f"Duplicate edge ({u!r}, {v!r}) is not supported")
            g.add_edge(u, v)

        # Add all capacities in a single batch
        nx.set_edge_attributes(
            g, {(u, v): capacity for (u, v), capacity in zip(edges, capacities)}, 'capacity'
        )
        return g

    @classmethod
    def from_networkx(cls, g: nx.Graph, capacity: str = 'capacity',
                      weighted: bool = True) -> 'NetworkXGraph':
        """Wrap an existing NetworkX graph, reading capacities from the given attribute."""
        if g.is_multigraph():
            raise ValueError("Multigraphs are not supported")
        edges = [(u, v) for u, v in g.edges()]
        capacities = [d.get(capacity, 1) for _, _, d in g.edges(data=True)]
        return cls(edges, capacities, directed=g.is_directed(), weighted=weighted,
                   vertices=g.nodes())

    def reference_flow_value(self, source: Hashable, sink: Hashable) -> float:
        """Maximum flow value computed with networkx's preflow-push."""
        graph = self.g_nx
        if not self.weighted:
            graph = self.g_nx.copy()
            nx.set_edge_attributes(graph, 1, 'capacity')

        start = time.time()
        flow_value = nx.maximum_flow_value(
            graph, source, sink, capacity='capacity', flow_func=preflow_push
        )
        self.logger.debug(f"networkx solver time: {time.time() - start}")
        return flow_value

    # Required BaseGraph interface methods
    def num_vertices(self) -> int:
        return self.g_nx.number_of_nodes()

    def num_edges(self) -> int:
        return self.g_nx.number_of_edges()

    def get_vertices(self) -> List[Hashable]:
        return list(self.g_nx.nodes())

    def get_edges(self) -> List[Tuple[Hashable, Hashable, Dict[str, Any]]]:
        return [(u, v, d) for u, v, d in self.g_nx.edges(data=True)]

    def has_vertex(self, vertex_id: Hashable) -> bool:
        return vertex_id in self.g_nx

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        return self.g_nx.has_edge(u, v)

    def get_edge_capacity(self, u: Hashable, v: Hashable) -> Optional[float]:
        if self.has_edge(u, v):
            return self.g_nx[u][v].get('capacity')
        return None

    def is_directed(self) -> bool:
        return self.directed

    def is_weighted(self) -> bool:
        return self.weighted
