from .graph import BaseGraph, GraphCreator, NetworkXGraph, ORToolsGraph
from .flow import EdmondsKarpMaxFlow, MaximumFlow, NetworkFlowAnalysis
from .graph_manager import GraphManager
from .data_ingestion import EdgeListIngestion

__all__ = [
    'BaseGraph',
    'GraphCreator',
    'NetworkXGraph',
    'ORToolsGraph',
    'EdmondsKarpMaxFlow',
    'MaximumFlow',
    'NetworkFlowAnalysis',
    'GraphManager',
    'EdgeListIngestion'
]
