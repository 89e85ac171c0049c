from ortools.graph.python import max_flow
import time
from typing import List, Tuple, Dict, Any, Optional, Hashable

from .base import BaseGraph
import logging

# Configure logging for the module
logger = logging.getLogger(__name__)

class ORToolsGraph(BaseGraph):
    def __init__(self, edges: List[Tuple[Hashable, Hashable]], capacities: List[float]):
        """
        Initialize OR-Tools graph implementation.

        OR-Tools works on directed arcs with integer capacities, so the graph is
        always directed and weighted and capacities are truncated to integers.

        Args:
            edges: List of (source, target) node pairs
            capacities: List of edge capacities
        """
        self.logger = logging.getLogger(__name__)
        # Create mappings and data structures
        self._initialize_data_structures(edges, capacities)

        # Initialize OR-Tools solver
        self.solver = max_flow.SimpleMaxFlow()
        self._initialize_solver()

    def _initialize_data_structures(self, edges: List[Tuple[Hashable, Hashable]],
                                    capacities: List[float]):
        """Initialize internal data structures."""
        if len(edges) != len(capacities):
            raise ValueError(f"Got {len(edges)} edges but {len(capacities)} capacities")

        # Create node index mappings, keeping first-seen order
        self.node_to_index = {}
        for u, v in edges:
            for node in (u, v):
                if node not in self.node_to_index:
                    self.node_to_index[node] = len(self.node_to_index)

        # Store edge data
        self.edges = []
        self.edge_data = {}  # (u, v) -> {capacity}

        for (u, v), capacity in zip(edges, capacities):
            if u == v:
                raise ValueError(f"Self-loop on {u!r} is not supported")
            if (u, v) in self.edge_data:
                raise ValueError(f"Duplicate edge ({u!r}, {v!r}) is not supported")
            self.edges.append((u, v))
            self.edge_data[(u, v)] = {'capacity': int(capacity)}

    def _initialize_solver(self):
        """Initialize OR-Tools solver with edges."""
        for u, v in self.edges:
            capacity = self.edge_data[(u, v)]['capacity']
            if capacity < 0:
                # OR-Tools rejects these; the flow algorithms report them instead
                continue
            self.solver.add_arc_with_capacity(
                self.node_to_index[u], self.node_to_index[v], capacity
            )

    def reference_flow_value(self, source: Hashable, sink: Hashable) -> int:
        """Maximum flow value computed with OR-Tools' SimpleMaxFlow."""
        if not self.has_vertex(source) or not self.has_vertex(sink):
            raise ValueError(f"Source node '{source}' or sink node '{sink}' not in graph.")

        if self.solver.num_arcs() == 0:
            self.logger.info("No edges in graph. No flow is possible.")
            return 0

        start_time = time.time()
        status = self.solver.solve(self.node_to_index[source], self.node_to_index[sink])
        self.logger.debug(f"OR-Tools solver time: {time.time() - start_time}")

        if status == self.solver.OPTIMAL:
            return int(self.solver.optimal_flow())
        raise RuntimeError(f"OR-Tools solver failed to find optimal solution (status {status})")

    # Required BaseGraph interface methods
    def num_vertices(self) -> int:
        return len(self.node_to_index)

    def num_edges(self) -> int:
        return len(self.edges)

    def get_vertices(self) -> List[Hashable]:
        return list(self.node_to_index)

    def get_edges(self) -> List[Tuple[Hashable, Hashable, Dict[str, Any]]]:
        return [(u, v, self.edge_data[(u, v)]) for u, v in self.edges]

    def has_vertex(self, vertex_id: Hashable) -> bool:
        try:
            return vertex_id in self.node_to_index
        except TypeError:
            return False

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        return (u, v) in self.edge_data

    def get_edge_capacity(self, u: Hashable, v: Hashable) -> Optional[int]:
        if self.has_edge(u, v):
            return self.edge_data[(u, v)]['capacity']
        return None

    def is_directed(self) -> bool:
        return True

    def is_weighted(self) -> bool:
        return True
