from .edmonds_karp import DEFAULT_EPSILON, EdmondsKarpMaxFlow, MaximumFlow
from .analysis import NetworkFlowAnalysis
from .decomposition import decompose_flow
from .residual import ResidualNetwork
from .utils import (
    find_flow_path,
    update_residual_graph,
    verify_flow_conservation,
    verify_capacity_bounds,
    has_residual_path,
    calculate_flow_metrics,
    values_match
)

__all__ = [
    'DEFAULT_EPSILON',
    'EdmondsKarpMaxFlow',
    'MaximumFlow',
    'NetworkFlowAnalysis',
    'ResidualNetwork',
    'decompose_flow',
    'find_flow_path',
    'update_residual_graph',
    'verify_flow_conservation',
    'verify_capacity_bounds',
    'has_residual_path',
    'calculate_flow_metrics',
    'values_match',
]
