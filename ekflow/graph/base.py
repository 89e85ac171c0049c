from abc import abstractmethod
from typing import Any, Dict, Hashable, List, Optional, Tuple

DEFAULT_EDGE_WEIGHT = 1

class BaseGraph:
    """Abstract base class defining the flow network interface for all graph implementations."""

    @abstractmethod
    def num_vertices(self) -> int:
        """Return the total number of vertices in the graph."""
        pass

    @abstractmethod
    def num_edges(self) -> int:
        """Return the total number of edges in the graph."""
        pass

    @abstractmethod
    def has_vertex(self, vertex_id: Hashable) -> bool:
        """Check if a vertex exists in the graph."""
        pass

    @abstractmethod
    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        """Check if an edge exists between two vertices."""
        pass

    @abstractmethod
    def get_vertices(self) -> List[Hashable]:
        """Return all vertex IDs, in the same order on every call."""
        pass

    @abstractmethod
    def get_edges(self) -> List[Tuple[Hashable, Hashable, Dict[str, Any]]]:
        """Return all edges with their data, in the same order on every call."""
        pass

    @abstractmethod
    def get_edge_capacity(self, u: Hashable, v: Hashable) -> Optional[float]:
        """Get capacity of edge between u and v."""
        pass

    @abstractmethod
    def is_directed(self) -> bool:
        """Whether edges only carry flow from their source to their target."""
        pass

    @abstractmethod
    def is_weighted(self) -> bool:
        """Whether edge capacities are read from the graph or all equal to one."""
        pass

    @abstractmethod
    def reference_flow_value(self, source: Hashable, sink: Hashable) -> float:
        """Maximum flow value computed by the backend's own solver."""
        pass

    def get_edge_source(self, edge: Tuple[Hashable, Hashable]) -> Hashable:
        return edge[0]

    def get_edge_target(self, edge: Tuple[Hashable, Hashable]) -> Hashable:
        return edge[1]

    def get_edge_weight(self, edge: Tuple[Hashable, Hashable]) -> float:
        """Capacity used by the flow algorithms: the edge capacity, or 1 if unweighted."""
        if not self.is_weighted():
            return DEFAULT_EDGE_WEIGHT
        capacity = self.get_edge_capacity(*edge)
        return DEFAULT_EDGE_WEIGHT if capacity is None else capacity

    def compute_flow(self, source: Hashable, sink: Hashable,
                     epsilon: Optional[float] = None) -> Tuple[float, Dict[Hashable, Dict[Hashable, float]]]:
        """
        Compute maximum flow between source and sink nodes.

        Returns the flow value and a nested ``{u: {v: flow}}`` dictionary
        holding only positive flows, oriented the way the flow travels.
        """
        from ..flow.edmonds_karp import DEFAULT_EPSILON, EdmondsKarpMaxFlow

        algorithm = EdmondsKarpMaxFlow(self, DEFAULT_EPSILON if epsilon is None else epsilon)
        flow_value = algorithm.calculate_maximum_flow(source, sink)
        return flow_value, algorithm.get_flow_dict()

class GraphCreator:
    @staticmethod
    def create_graph(graph_type: str, edges: List[Tuple[Hashable, Hashable]], capacities: List[float],
                     directed: bool = True, weighted: bool = True) -> BaseGraph:
        """Factory method to create appropriate graph implementation."""
        if graph_type == 'networkx':
            from .networkx_graph import NetworkXGraph
            return NetworkXGraph(edges, capacities, directed=directed, weighted=weighted)
        elif graph_type == 'ortools':
            if not directed or not weighted:
                raise ValueError("OR-Tools graphs are always directed and weighted")
            from .ortools_graph import ORToolsGraph
            return ORToolsGraph(edges, capacities)
        else:
            raise ValueError(f"Unsupported graph type: {graph_type}")
