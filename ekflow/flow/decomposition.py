from typing import Dict, Hashable, List, Tuple
from .utils import find_flow_path, update_residual_graph

def decompose_flow(flow_dict: Dict[Hashable, Dict[Hashable, float]], source: Hashable, sink: Hashable,
                   epsilon: float = 0) -> Tuple[List[Tuple[List[Hashable], float]],
                                                Dict[Tuple[Hashable, Hashable], float]]:
    """
    Decompose a flow into source-sink paths.

    Returns the (path, amount) pairs in discovery order and the total amount
    routed over each edge by those paths. Flow circulating on cycles that do
    not touch a source-sink path is left out.
    """
    paths = []
    edge_flows = {}

    # Build residual flow graph
    residual_flow = {u: {v: f for v, f in flows.items() if f > epsilon}
                     for u, flows in flow_dict.items()}

    while True:
        # Find a path from source to sink with positive flow
        path = find_flow_path(residual_flow, source, sink, epsilon)
        if not path:
            break

        path_flow = min(residual_flow[u][v] for u, v in zip(path[:-1], path[1:]))

        for u, v in zip(path[:-1], path[1:]):
            edge_flows[(u, v)] = edge_flows.get((u, v), 0) + path_flow

        update_residual_graph(residual_flow, path, path_flow, epsilon)
        paths.append((path, path_flow))

    return paths, edge_flows


__all__ = ['decompose_flow']
