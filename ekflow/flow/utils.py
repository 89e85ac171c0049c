from typing import Any, Dict, Hashable, List, Tuple
import math
from collections import deque

from ..graph.base import BaseGraph
from .residual import ResidualNetwork

# Floating-point sums of large capacities drift by a few ulps
RELATIVE_TOLERANCE = 1e-9

def find_flow_path(flow_dict: Dict[Hashable, Dict[Hashable, float]], source: Hashable,
                   sink: Hashable, epsilon: float = 0) -> List[Hashable]:
    """Find a path with positive flow using iterative DFS."""
    visited = {source}
    path = [source]
    stack = [(source, iter(flow_dict.get(source, {}).items()))]

    while stack:
        current, edges = stack[-1]
        try:
            next_node, flow = next(edges)
            if flow > epsilon and next_node not in visited:
                if next_node == sink:
                    path.append(next_node)
                    return path
                visited.add(next_node)
                path.append(next_node)
                stack.append((next_node, iter(flow_dict.get(next_node, {}).items())))
        except StopIteration:
            stack.pop()
            if path:
                path.pop()

    return []

def update_residual_graph(residual_flow: Dict[Hashable, Dict[Hashable, float]], path: List[Hashable],
                          path_flow: float, epsilon: float = 0) -> None:
    """Remove path_flow from every edge of path, dropping exhausted edges."""
    for u, v in zip(path[:-1], path[1:]):
        residual_flow[u][v] -= path_flow
        if residual_flow[u][v] <= epsilon:
            del residual_flow[u][v]
        if not residual_flow[u]:
            del residual_flow[u]

def values_match(a: float, b: float, epsilon: float) -> bool:
    """Compare two flow amounts within epsilon or RELATIVE_TOLERANCE of their size."""
    return math.isclose(a, b, rel_tol=RELATIVE_TOLERANCE, abs_tol=epsilon)

def verify_flow_conservation(flow_dict: Dict[Hashable, Dict[Hashable, float]], source: Hashable,
                             sink: Hashable, epsilon: float = 1e-10) -> bool:
    """Verify flow conservation at intermediate nodes."""
    nodes = set(flow_dict)
    for flows in flow_dict.values():
        nodes.update(flows)

    for node in nodes:
        if node not in (source, sink):
            in_flow = sum(flows.get(node, 0) for flows in flow_dict.values())
            out_flow = sum(flow_dict.get(node, {}).values())
            if not values_match(in_flow, out_flow, epsilon * max(1, len(nodes))):
                return False
    return True

def verify_capacity_bounds(graph: BaseGraph, flow_map: Dict[Tuple[Hashable, Hashable], float],
                           epsilon: float) -> bool:
    """Verify 0 <= flow <= capacity on every edge, up to rounding at the capacity's scale."""
    for edge, flow in flow_map.items():
        capacity = graph.get_edge_weight(edge)
        tolerance = max(epsilon, RELATIVE_TOLERANCE * abs(capacity))
        if flow < -tolerance or flow > capacity + tolerance:
            return False
    return True

def has_residual_path(network: ResidualNetwork, source: Hashable, sink: Hashable) -> bool:
    """Check whether sink is reachable from source through arcs with residual capacity."""
    s = network.index_of(source)
    t = network.index_of(sink)
    visited = {s}
    queue = deque([s])

    while queue:
        u = queue.popleft()
        for arc in network.outgoing[u]:
            v = network.head[arc]
            if v not in visited and network.has_capacity(arc):
                if v == t:
                    return True
                visited.add(v)
                queue.append(v)
    return False

def calculate_flow_metrics(paths: List[Tuple[List[Hashable], float]],
                           edge_flows: Dict[Tuple[Hashable, Hashable], float]) -> Dict[str, Any]:
    """Calculate flow metrics."""
    if not paths:
        return {
            'total_flow': 0,
            'average_path_flow': 0,
            'max_path_flow': 0,
            'min_path_flow': 0,
            'unique_edges': 0,
            'average_edge_flow': 0,
        }

    flows = [flow for _, flow in paths]
    total_flow = sum(flows)

    metrics = {
        'total_flow': total_flow,
        'average_path_flow': total_flow / len(paths),
        'max_path_flow': max(flows),
        'min_path_flow': min(flows),
        'unique_edges': len(edge_flows),
        'average_edge_flow': total_flow / len(edge_flows) if edge_flows else 0,
    }

    # Add path length statistics, counted in edges
    path_lengths = [len(path) - 1 for path, _ in paths]
    metrics.update({
        'average_path_length': sum(path_lengths) / len(path_lengths),
        'max_path_length': max(path_lengths),
        'min_path_length': min(path_lengths),
    })

    return metrics
