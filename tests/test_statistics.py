"""
Unit tests for run and experiment statistics
"""

import io

import numpy as np
import pytest

from wsn_trilateration.core.topology import Node
from wsn_trilateration.exceptions import EmptyResultError
from wsn_trilateration.simulation.statistics import (
    RunStatistics, aggregate, compute_run_statistics
)


def sample_nodes():
    nodes = [
        Node(node_id=0, position=[0.0, 0.0], is_anchor=True),
        Node(node_id=1, position=[10.0, 0.0], is_anchor=True),
        Node(node_id=2, position=[5.0, 5.0]),
        Node(node_id=3, position=[1.0, 1.0]),
        Node(node_id=4, position=[7.0, 2.0]),
        Node(node_id=5, position=[3.0, 8.0]),
    ]
    nodes[2].locate(np.array([5.0, 6.0]), depth=1)   # error 1
    nodes[3].locate(np.array([4.0, 5.0]), depth=2)   # error 5
    return nodes


class TestRunStatistics:
    """Per-run statistics"""

    def test_counts_and_error(self):
        stats = compute_run_statistics(sample_nodes())
        assert stats.n_non_anchor == 4
        assert stats.located_count == 2
        assert stats.percent_located == pytest.approx(50.0)
        assert stats.average_error == pytest.approx(3.0)

    def test_anchors_excluded(self):
        nodes = sample_nodes()
        stats = compute_run_statistics(nodes[:2] + nodes[2:3])
        assert stats.n_non_anchor == 1
        assert stats.average_error == pytest.approx(1.0)

    def test_nothing_located(self):
        nodes = [
            Node(node_id=0, position=[0.0, 0.0], is_anchor=True),
            Node(node_id=1, position=[5.0, 5.0]),
        ]
        with pytest.raises(EmptyResultError):
            compute_run_statistics(nodes)


class TestAggregate:
    """Cross-run means"""

    def test_means(self):
        runs = [
            RunStatistics(n_non_anchor=10, located_count=4, percent_located=40.0, average_error=1.0),
            RunStatistics(n_non_anchor=10, located_count=7, percent_located=70.0, average_error=2.0),
            RunStatistics(n_non_anchor=10, located_count=10, percent_located=100.0, average_error=6.0),
        ]
        summary = aggregate(runs)
        assert summary.n_non_anchor == 10
        assert summary.runs == 3
        assert summary.mean_located == pytest.approx(7.0)
        assert summary.mean_percent_located == pytest.approx(70.0)
        assert summary.mean_error == pytest.approx(3.0)

    def test_empty(self):
        with pytest.raises(ValueError):
            aggregate([])

    def test_report(self):
        summary = aggregate([
            RunStatistics(n_non_anchor=255, located_count=200, percent_located=200 * 100.0 / 255,
                          average_error=2.5),
        ])
        stream = io.StringIO()
        summary.write(stream)
        lines = stream.getvalue().splitlines()
        assert lines[0] == "Number of non-anchor nodes = 255"
        assert lines[1] == "Number of located nodes = 200.0"
        assert lines[2].startswith("Fraction of located nodes = 78.43")
        assert lines[2].endswith("%")
        assert lines[3] == "Average localization error = 2.5"
