import numpy as np
import pandas as pd
from typing import List, Tuple
import logging

# Configure logging for the module
logger = logging.getLogger(__name__)

class EdgeListIngestion:
    def __init__(self, df_edges: pd.DataFrame, source_col: str = 'source', target_col: str = 'target',
                 capacity_col: str = 'capacity', directed: bool = True):
        """
        Turn an edge list into the simple graph the flow algorithms expect.

        Self-loops and rows without a usable capacity are dropped. Among
        duplicate edges the one with the largest capacity is kept; for
        undirected data (u, v) and (v, u) count as the same edge.
        """
        missing = [c for c in (source_col, target_col, capacity_col) if c not in df_edges.columns]
        if missing:
            raise ValueError(f"Edge list is missing column(s): {', '.join(missing)}")

        self.source_col = source_col
        self.target_col = target_col
        self.capacity_col = capacity_col
        self.directed = directed

        self.edges: List[Tuple[str, str]] = []
        self.capacities: List[float] = []
        self._process_edges(df_edges)

    def _process_edges(self, df_edges: pd.DataFrame):
        edges = pd.DataFrame({
            'from': df_edges[self.source_col].astype(str).str.strip(),
            'to': df_edges[self.target_col].astype(str).str.strip(),
            'capacity': df_edges[self.capacity_col].apply(self._convert_capacity),
        })

        invalid = edges['capacity'].isna()
        if invalid.any():
            logger.warning(f"Dropping {int(invalid.sum())} edge(s) without a usable capacity")
            edges = edges[~invalid].copy()

        loops = edges['from'] == edges['to']
        if loops.any():
            logger.warning(f"Dropping {int(loops.sum())} self-loop(s)")
            edges = edges[~loops].copy()

        if self.directed:
            edges['key_u'] = edges['from']
            edges['key_v'] = edges['to']
        else:
            in_order = (edges['from'] <= edges['to']).to_numpy()
            edges['key_u'] = np.where(in_order, edges['from'], edges['to'])
            edges['key_v'] = np.where(in_order, edges['to'], edges['from'])

        # For duplicate edges, keep the one with maximum capacity
        unique_edges = edges.sort_values('capacity', ascending=False, kind='stable').drop_duplicates(
            subset=['key_u', 'key_v'],
            keep='first'
        ).sort_index()
        if len(unique_edges) < len(edges):
            logger.warning(f"Merged {len(edges) - len(unique_edges)} duplicate edge(s)")

        self.edges = list(zip(unique_edges['from'], unique_edges['to']))
        self.capacities = unique_edges['capacity'].tolist()

    @staticmethod
    def _convert_capacity(value):
        if pd.isna(value):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            logger.warning(f"Unable to convert capacity: {value}")
            return None

    @classmethod
    def from_csv(cls, path: str, **kwargs) -> 'EdgeListIngestion':
        try:
            df_edges = pd.read_csv(path)
        except Exception as e:
            raise ValueError(f"Error reading CSV file {path}: {str(e)}")
        return cls(df_edges, **kwargs)

    def get_vertices(self) -> List[str]:
        seen = {}
        for u, v in self.edges:
            seen.setdefault(u, None)
            seen.setdefault(v, None)
        return list(seen)
