from typing import Dict, Hashable, List, Optional, Tuple
import logging
import time

from ..graph.base import BaseGraph
from .decomposition import decompose_flow
from .edmonds_karp import DEFAULT_EPSILON, EdmondsKarpMaxFlow
from .utils import has_residual_path, values_match, verify_capacity_bounds, verify_flow_conservation

# Configure logging for the module
logger = logging.getLogger(__name__)

class NetworkFlowAnalysis:
    """Handle flow analysis for all graph implementations."""

    def __init__(self, graph: BaseGraph, epsilon: Optional[float] = None):
        self.graph = graph
        self.epsilon = DEFAULT_EPSILON if epsilon is None else epsilon
        self.algorithm = EdmondsKarpMaxFlow(graph, self.epsilon)
        self.logger = logging.getLogger(__name__)

    def analyze_flow(self, source: Hashable, sink: Hashable, cross_check: bool = False
                     ) -> Tuple[float, List[Tuple[List[Hashable], float]], Dict[Tuple[Hashable, Hashable], float]]:
        """
        Analyze flow between source and sink nodes.

        Args:
            source: Source node ID
            sink: Sink node ID
            cross_check: Compare the value against the backend's own solver

        Returns:
            Tuple containing:
            - Flow value
            - Flow paths as (path, amount) pairs
            - Edge flows of the decomposed paths
        """
        self.logger.info(f"Computing flow from {source} to {sink}")

        start = time.time()
        flow_value, flow_map = self.algorithm.build_maximum_flow(source, sink)
        self.logger.info(
            f"Flow value {flow_value} found in {self.algorithm.phase_count} phase(s), "
            f"{time.time() - start:.6f}s"
        )

        flow_dict = self.algorithm.get_flow_dict()
        self._verify(flow_dict, flow_map, source, sink)

        if cross_check:
            self._cross_check(flow_value, source, sink)

        paths, edge_flows = decompose_flow(flow_dict, source, sink, self.epsilon)
        self.logger.info(f"Decomposed flow into {len(paths)} path(s)")
        return flow_value, paths, edge_flows

    def _verify(self, flow_dict: Dict[Hashable, Dict[Hashable, float]],
                flow_map: Dict[Tuple[Hashable, Hashable], float],
                source: Hashable, sink: Hashable) -> None:
        """Check the computed flow; any failure is a defect of the algorithm."""
        if not verify_capacity_bounds(self.graph, flow_map, self.epsilon):
            raise AssertionError(f"flow {source} -> {sink} violates an edge capacity")
        if not verify_flow_conservation(flow_dict, source, sink, self.epsilon):
            raise AssertionError(f"flow {source} -> {sink} violates flow conservation")
        if has_residual_path(self.algorithm.residual_network, source, sink):
            raise AssertionError(f"augmenting path {source} -> {sink} left after termination")

    def _cross_check(self, flow_value: float, source: Hashable, sink: Hashable) -> None:
        reference = self.graph.reference_flow_value(source, sink)
        tolerance = self.epsilon * max(1, self.graph.num_edges())
        if not values_match(flow_value, reference, tolerance):
            raise RuntimeError(
                f"Flow value {flow_value} differs from reference solver value {reference}"
            )
        self.logger.info(f"Reference solver agrees: {reference}")
