import pandas as pd
from typing import Dict, Hashable, List, Optional, Tuple, Union
import logging

from .data_ingestion import EdgeListIngestion
from .graph import GraphCreator
from .flow import NetworkFlowAnalysis

# Configure logging for the module
logger = logging.getLogger(__name__)

class GraphManager:
    def __init__(self, data_source: Union[str, pd.DataFrame], graph_type: str = 'networkx',
                 directed: bool = True, weighted: bool = True, epsilon: Optional[float] = None,
                 **column_names):
        """
        Initialize the GraphManager from an edge list.

        Args:
            data_source: Either a CSV file path or a DataFrame of edges
            graph_type: Type of graph to create ('networkx' or 'ortools')
            directed: Whether edges carry flow in one direction only
            weighted: If False every edge has capacity one
            epsilon: Tolerance used when comparing flows and capacities
            column_names: source_col, target_col and capacity_col overrides
        """
        try:
            self.data_ingestion = self._initialize_data_ingestion(data_source, directed, column_names)

            self.graph = GraphCreator.create_graph(
                graph_type,
                self.data_ingestion.edges,
                self.data_ingestion.capacities,
                directed=directed,
                weighted=weighted
            )

            self.flow_analysis = NetworkFlowAnalysis(self.graph, epsilon)
        except Exception as e:
            logger.error(f"Error building {graph_type} graph: {str(e)}")
            raise

        logger.info(
            f"Built {graph_type} graph with {self.graph.num_vertices()} vertices "
            f"and {self.graph.num_edges()} edges"
        )

    def _initialize_data_ingestion(self, data_source, directed: bool, column_names: Dict[str, str]):
        """
        Initialize the appropriate data ingestion based on the data source type.
        """
        if isinstance(data_source, pd.DataFrame):
            return EdgeListIngestion(data_source, directed=directed, **column_names)
        elif isinstance(data_source, str):
            return EdgeListIngestion.from_csv(data_source, directed=directed, **column_names)
        else:
            raise ValueError("data_source must be a CSV file path or a DataFrame")

    def analyze_flow(self, source: Hashable, sink: Hashable, cross_check: bool = False
                     ) -> Tuple[float, List[Tuple[List[Hashable], float]], Dict[Tuple[Hashable, Hashable], float]]:
        """Analyze flow between source and sink nodes."""
        source_id = str(source).strip()
        sink_id = str(sink).strip()

        if not self.graph.has_vertex(source_id) or not self.graph.has_vertex(sink_id):
            raise ValueError(f"Source node '{source_id}' or sink node '{sink_id}' not in graph.")

        try:
            return self.flow_analysis.analyze_flow(source_id, sink_id, cross_check)
        except Exception as e:
            logger.error(f"Error in flow computation: {str(e)}")
            raise

    def get_graph_info(self) -> str:
        """Get information about nodes and edges in the graph."""
        vertices = self.graph.get_vertices()
        capacities = [self.graph.get_edge_weight((u, v)) for u, v, _ in self.graph.get_edges()]
        info = [
            f"Total nodes: {len(vertices)}",
            f"Total edges: {len(capacities)}",
            f"Directed: {self.graph.is_directed()}",
            f"Weighted: {self.graph.is_weighted()}",
        ]
        if capacities:
            info.append(f"Total capacity: {sum(capacities):,}")
        info.append("Sample nodes: " + ", ".join(str(v) for v in vertices[:5]))
        return "\n".join(info)
