from typing import Dict, List, Optional, Tuple
import argparse
import logging
import os
import sys
import time
from datetime import datetime

from .config import GRAPH_TYPES, load_config
from .flow.utils import calculate_flow_metrics
from .graph_manager import GraphManager

logger = logging.getLogger(__name__)

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='ekflow',
        description='Compute the maximum flow between two vertices of an edge-list network.'
    )
    parser.add_argument('edges', help='CSV file with one edge per row')
    parser.add_argument('source', help='Source vertex')
    parser.add_argument('sink', help='Sink vertex')
    parser.add_argument('--graph-type', choices=GRAPH_TYPES, default=None,
                        help='Graph implementation (default: EKFLOW_GRAPH_TYPE or networkx)')
    parser.add_argument('--undirected', action='store_true', help='Treat edges as undirected')
    parser.add_argument('--unweighted', action='store_true', help='Give every edge capacity one')
    parser.add_argument('--epsilon', type=float, default=None,
                        help='Tolerance for comparing flows (default: EKFLOW_EPSILON or 1e-9)')
    parser.add_argument('--cross-check', action='store_true', default=None,
                        help='Compare the result against the graph backend solver')
    parser.add_argument('--source-col', default='source')
    parser.add_argument('--target-col', default='target')
    parser.add_argument('--capacity-col', default='capacity')
    parser.add_argument('--output-dir', default=None, help='Write a results file to this directory')
    return parser.parse_args(argv)

def write_results(flow_value: float, execution_time: float, paths: List[Tuple[List[str], float]],
                  edge_flows: Dict[Tuple[str, str], float], output_dir: str) -> str:
    """Write analysis results to file."""
    os.makedirs(output_dir, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"{output_dir}/flow_results_{timestamp}.txt"

    metrics = calculate_flow_metrics(paths, edge_flows)
    with open(filename, 'w') as f:
        f.write("Flow Computation Results\n")
        f.write("=" * 50 + "\n\n")

        f.write(f"Total Flow: {flow_value:,}\n")
        f.write(f"Computation Time: {execution_time:.6f}s\n")
        f.write(f"Number of Paths: {len(paths)}\n")
        f.write(f"Number of Edges Used: {metrics['unique_edges']}\n\n")

        f.write("Paths:\n")
        f.write("-" * 50 + "\n")
        for path, amount in paths:
            f.write(f"{' -> '.join(map(str, path))}: {amount:,}\n")

        f.write("\nEdge Flows:\n")
        f.write("-" * 50 + "\n")
        for (u, v), amount in edge_flows.items():
            f.write(f"{u} -> {v}: {amount:,}\n")

    return filename

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config()
    except ValueError as e:
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config['log_level'],
        format='[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    graph_type = args.graph_type or config['graph_type']
    epsilon = args.epsilon if args.epsilon is not None else config['epsilon']
    cross_check = config['cross_check'] if args.cross_check is None else args.cross_check

    try:
        graph_manager = GraphManager(
            args.edges,
            graph_type,
            directed=not args.undirected,
            weighted=not args.unweighted,
            epsilon=epsilon,
            source_col=args.source_col,
            target_col=args.target_col,
            capacity_col=args.capacity_col
        )
        print("\nGraph information:")
        print(graph_manager.get_graph_info())

        start_time = time.time()
        flow_value, paths, edge_flows = graph_manager.analyze_flow(
            args.source, args.sink, cross_check=cross_check
        )
        execution_time = time.time() - start_time

        print(f"\nExecution time: {execution_time:.4f} seconds")
        print(f"Flow value: {flow_value:,}")
        for path, amount in paths:
            print(f"  {' -> '.join(map(str, path))}: {amount:,}")

        if args.output_dir:
            filename = write_results(flow_value, execution_time, paths, edge_flows, args.output_dir)
            print(f"\nResults written to {filename}")

    except Exception as e:
        logger.error(f"Error during analysis: {str(e)}")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
