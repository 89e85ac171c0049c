import os
import tempfile
import unittest
from unittest.mock import patch

import numpy as np
import pandas as pd
import pytest

from ekflow.flow import (
    NetworkFlowAnalysis,
    calculate_flow_metrics,
    decompose_flow,
    find_flow_path,
    values_match,
    verify_capacity_bounds,
    verify_flow_conservation,
)
from ekflow.graph import NetworkXGraph, ORToolsGraph
from ekflow.main import main

class TestFlowAnalysis(unittest.TestCase):
    """
    End-to-end analysis over every graph implementation.

    Tests:
    1. Flow computation and verification
    2. Decomposition into source-sink paths
    3. Agreement with the backend's own solver
    """

    def setUp(self):
        edges = [('s', 'a'), ('s', 'b'), ('a', 't'), ('b', 't'), ('a', 'b')]
        capacities = [10, 10, 5, 10, 15]
        self.analyzers = {
            'networkx': NetworkFlowAnalysis(NetworkXGraph(edges, capacities)),
            'ortools': NetworkFlowAnalysis(ORToolsGraph(edges, capacities)),
        }

    def test_analyze_flow(self):
        for impl_type, analyzer in self.analyzers.items():
            flow_value, paths, edge_flows = analyzer.analyze_flow('s', 't', cross_check=True)

            self.assertEqual(flow_value, 15, f"{impl_type}: wrong flow value")
            self.assertEqual(sorted(paths), [(['s', 'a', 't'], 5), (['s', 'b', 't'], 10)],
                             f"{impl_type}: wrong paths")
            self.assertEqual(edge_flows, {('s', 'a'): 5, ('a', 't'): 5, ('s', 'b'): 10, ('b', 't'): 10})

    def test_paths_are_simple(self):
        for impl_type, analyzer in self.analyzers.items():
            _, paths, _ = analyzer.analyze_flow('s', 'b')
            for path, _ in paths:
                self.assertEqual(len(path), len(set(path)), f"{impl_type}: cycle in path {path}")
                self.assertEqual(path[0], 's')
                self.assertEqual(path[-1], 'b')

    def test_no_path(self):
        for impl_type, analyzer in self.analyzers.items():
            flow_value, paths, edge_flows = analyzer.analyze_flow('t', 's')
            self.assertEqual(flow_value, 0, f"{impl_type}: non-zero flow without a path")
            self.assertEqual(paths, [])
            self.assertEqual(edge_flows, {})

    def test_cross_check_mismatch(self):
        analyzer = self.analyzers['networkx']
        with patch.object(analyzer.graph, 'reference_flow_value', return_value=14):
            with pytest.raises(RuntimeError, match="reference solver"):
                analyzer.analyze_flow('s', 't', cross_check=True)

    def test_invalid_epsilon(self):
        with self.assertRaises(ValueError):
            NetworkFlowAnalysis(NetworkXGraph([('s', 't')], [1]), epsilon=0)

    def test_undirected_network(self):
        graph = NetworkXGraph(
            [('s', 'a'), ('a', 't'), ('s', 'b'), ('b', 't'), ('a', 'b')],
            [3, 1, 1, 3, 5],
            directed=False
        )
        flow_value, paths, edge_flows = NetworkFlowAnalysis(graph).analyze_flow('s', 't', cross_check=True)

        self.assertEqual(flow_value, 4)
        self.assertEqual(sum(amount for _, amount in paths), 4)
        self.assertEqual(edge_flows[('a', 'b')], 2)

    def test_large_fractional_capacities(self):
        """Rounding at the scale of 1e9 capacities is not reported as a defect."""
        num_vertices = 12
        for seed in range(20):
            rng = np.random.default_rng(seed)
            edges = [(u, v) for u in range(num_vertices) for v in range(num_vertices)
                     if u != v and rng.random() < 0.35]
            capacities = list(rng.uniform(0, 1e9, size=len(edges)))
            graph = NetworkXGraph(edges, capacities, vertices=range(num_vertices))

            flow_value, paths, _ = NetworkFlowAnalysis(graph).analyze_flow(
                0, num_vertices - 1, cross_check=True
            )
            self.assertAlmostEqual(flow_value / 1e9,
                                   graph.reference_flow_value(0, num_vertices - 1) / 1e9,
                                   places=6, msg=f"seed {seed}")
            self.assertAlmostEqual(sum(amount for _, amount in paths) / 1e9, flow_value / 1e9,
                                   places=6, msg=f"seed {seed}")

    def test_cross_check_tolerates_last_digit(self):
        analyzer = NetworkFlowAnalysis(NetworkXGraph([('s', 't')], [1032141690.8228042]))
        with patch.object(analyzer.graph, 'reference_flow_value', return_value=1032141690.8228041):
            flow_value, _, _ = analyzer.analyze_flow('s', 't', cross_check=True)
        self.assertEqual(flow_value, 1032141690.8228042)


class TestFlowUtils(unittest.TestCase):

    def setUp(self):
        self.flow_dict = {'s': {'a': 5, 'b': 10}, 'a': {'t': 5}, 'b': {'t': 10}}

    def test_find_flow_path(self):
        self.assertEqual(find_flow_path(self.flow_dict, 's', 't'), ['s', 'a', 't'])
        self.assertEqual(find_flow_path(self.flow_dict, 't', 's'), [])
        self.assertEqual(find_flow_path({'s': {'a': 1e-12}, 'a': {'t': 1}}, 's', 't', 1e-9), [])

    def test_decompose_flow(self):
        paths, edge_flows = decompose_flow(self.flow_dict, 's', 't')
        self.assertEqual(paths, [(['s', 'a', 't'], 5), (['s', 'b', 't'], 10)])
        self.assertEqual(edge_flows[('s', 'b')], 10)
        # The input is left untouched
        self.assertEqual(self.flow_dict['s'], {'a': 5, 'b': 10})

    def test_decompose_ignores_detached_cycles(self):
        flow_dict = {'s': {'t': 2}, 'x': {'y': 1}, 'y': {'x': 1}}
        paths, edge_flows = decompose_flow(flow_dict, 's', 't')
        self.assertEqual(paths, [(['s', 't'], 2)])
        self.assertEqual(edge_flows, {('s', 't'): 2})

    def test_verify_flow_conservation(self):
        self.assertTrue(verify_flow_conservation(self.flow_dict, 's', 't'))
        broken = {'s': {'a': 5}, 'a': {'t': 4}}
        self.assertFalse(verify_flow_conservation(broken, 's', 't'))

    def test_verify_large_flows(self):
        rounded = {'s': {'a': 1e9 + 0.1}, 'a': {'t': 1e9 + 0.1 + 2.4e-7}}
        self.assertTrue(verify_flow_conservation(rounded, 's', 't', 1e-9))
        leaking = {'s': {'a': 1e9 + 0.1}, 'a': {'t': 1e9 - 99.9}}
        self.assertFalse(verify_flow_conservation(leaking, 's', 't', 1e-9))

        capacity = 1e9 + 0.5
        graph = NetworkXGraph([('s', 't')], [capacity])
        self.assertTrue(verify_capacity_bounds(graph, {('s', 't'): capacity + 1.2e-7}, 1e-9))
        self.assertTrue(verify_capacity_bounds(graph, {('s', 't'): -1.2e-7}, 1e-9))
        self.assertFalse(verify_capacity_bounds(graph, {('s', 't'): capacity + 100}, 1e-9))

        self.assertTrue(values_match(1032141690.8228042, 1032141690.8228041, 1e-9))
        self.assertFalse(values_match(1032141690.8, 1032141590.8, 1e-9))

    def test_verify_capacity_bounds(self):
        graph = NetworkXGraph([('s', 'a'), ('a', 't')], [5, 4])
        self.assertTrue(verify_capacity_bounds(graph, {('s', 'a'): 4, ('a', 't'): 4}, 1e-9))
        self.assertFalse(verify_capacity_bounds(graph, {('s', 'a'): 5, ('a', 't'): 5}, 1e-9))
        self.assertFalse(verify_capacity_bounds(graph, {('s', 'a'): -1, ('a', 't'): 0}, 1e-9))

    def test_calculate_flow_metrics(self):
        paths = [(['s', 'a', 't'], 5), (['s', 'b', 'c', 't'], 10)]
        edge_flows = {('s', 'a'): 5, ('a', 't'): 5, ('s', 'b'): 10, ('b', 'c'): 10, ('c', 't'): 10}
        metrics = calculate_flow_metrics(paths, edge_flows)

        self.assertEqual(metrics['total_flow'], 15)
        self.assertEqual(metrics['average_path_flow'], 7.5)
        self.assertEqual(metrics['max_path_flow'], 10)
        self.assertEqual(metrics['min_path_flow'], 5)
        self.assertEqual(metrics['unique_edges'], 5)
        self.assertEqual(metrics['min_path_length'], 2)
        self.assertEqual(metrics['max_path_length'], 3)
        self.assertEqual(calculate_flow_metrics([], {})['total_flow'], 0)


class TestCommandLine(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.edges_file = os.path.join(self.tmp_dir.name, 'edges.csv')
        pd.DataFrame({
            'source': ['s', 's', 'a', 'b', 'a'],
            'target': ['a', 'b', 't', 't', 'b'],
            'capacity': [10, 10, 5, 10, 15],
        }).to_csv(self.edges_file, index=False)

        self.env = patch.dict(os.environ, {}, clear=True)
        self.dotenv = patch('ekflow.config.load_dotenv')
        self.env.start()
        self.dotenv.start()

    def tearDown(self):
        self.dotenv.stop()
        self.env.stop()
        self.tmp_dir.cleanup()

    def test_writes_results(self):
        output_dir = os.path.join(self.tmp_dir.name, 'output')
        status = main([self.edges_file, 's', 't', '--cross-check', '--output-dir', output_dir])

        self.assertEqual(status, 0)
        results = os.listdir(output_dir)
        self.assertEqual(len(results), 1)
        with open(os.path.join(output_dir, results[0])) as f:
            content = f.read()
        self.assertIn("Total Flow: 15", content)
        self.assertIn("s -> b -> t: 10", content)

    def test_graph_options(self):
        self.assertEqual(main([self.edges_file, 's', 't', '--graph-type', 'ortools']), 0)
        self.assertEqual(main([self.edges_file, 's', 't', '--undirected', '--unweighted']), 0)

    def test_errors_return_one(self):
        self.assertEqual(main([self.edges_file, 's', 'nowhere']), 1)
        self.assertEqual(main([self.edges_file, 's', 's']), 1)
        self.assertEqual(main([self.edges_file, 's', 't', '--epsilon', '-1']), 1)

    def test_invalid_config(self):
        os.environ['EKFLOW_EPSILON'] = 'tiny'
        self.assertEqual(main([self.edges_file, 's', 't']), 1)


if __name__ == '__main__':
    unittest.main()
