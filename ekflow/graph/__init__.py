from .base import BaseGraph, GraphCreator
from .networkx_graph import NetworkXGraph
from .ortools_graph import ORToolsGraph

__all__ = [
    'BaseGraph',
    'GraphCreator',
    'NetworkXGraph',
    'ORToolsGraph',
]
