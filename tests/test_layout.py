"""Tests for the force-directed layout."""
from __future__ import annotations

import random

import pytest

from kinship_titles.graph import get_graph_snapshot
from kinship_titles.layout import Point, compute_layout


def _within(point: Point, width: float, height: float, padding: float) -> bool:
    return padding <= point.x <= width - padding and padding <= point.y <= height - padding


class TestComputeLayout:
    """Tests for compute_layout."""

    def test_full_graph_default_settings(self):
        """Test root is centred and every node stays inside the padded canvas."""
        snapshot = get_graph_snapshot()
        positions = compute_layout(snapshot.nodes, snapshot.edges, 800, 600, rng=random.Random(42))

        assert set(positions) == set(snapshot.node_ids)
        assert positions["我"].as_tuple() == (400.0, 300.0)
        for node_id, point in positions.items():
            assert _within(point, 800, 600, 30), node_id

    @pytest.mark.parametrize(("width", "height"), [(300, 200), (1024, 768), (50, 500)])
    def test_bounds_for_canvas_sizes(self, width, height):
        """Test the root pin and clamp hold for different canvases."""
        snapshot = get_graph_snapshot()
        positions = compute_layout(
            snapshot.nodes, snapshot.edges, width, height, iterations=10, rng=random.Random(1)
        )
        assert positions["我"] == Point(width / 2, height / 2)
        for point in positions.values():
            assert _within(point, width, height, min(30, width / 2, height / 2))

    def test_seeded_runs_repeat(self):
        """Test the same seed gives the same layout."""
        snapshot = get_graph_snapshot()
        a = compute_layout(snapshot.nodes, snapshot.edges, 640, 480, iterations=15, rng=random.Random(7))
        b = compute_layout(snapshot.nodes, snapshot.edges, 640, 480, iterations=15, rng=random.Random(7))
        assert a == b

    def test_mapping_inputs(self):
        """Test plain dict nodes and edges are accepted."""
        nodes = [{"id": "我"}, {"id": "a"}, {"id": "b"}]
        edges = [{"from": "我", "to": "a"}, {"from": "a", "to": "b"}]
        positions = compute_layout(nodes, edges, 200, 100, rng=random.Random(3))
        assert positions["我"] == Point(100, 50)
        assert set(positions) == {"我", "a", "b"}

    def test_unknown_edge_endpoints_skipped(self):
        """Test edges to nodes outside the snapshot are ignored."""
        positions = compute_layout(["我", "a"], [("我", "ghost"), ("我", "a")], 100, 100, rng=random.Random(0))
        assert set(positions) == {"我", "a"}

    def test_custom_root(self):
        """Test another node can be pinned."""
        positions = compute_layout(["x", "y"], [("x", "y")], 100, 80, root_id="x", rng=random.Random(0))
        assert positions["x"] == Point(50, 40)

    def test_zero_iterations(self):
        """Test initial placement already respects the padding."""
        positions = compute_layout(
            ["我", "a", "b"], [], 100, 100, iterations=0, padding=10, rng=random.Random(5)
        )
        assert positions["我"] == Point(50, 50)
        assert all(_within(p, 100, 100, 10) for p in positions.values())

    def test_empty(self):
        """Test an empty snapshot gives an empty layout."""
        assert compute_layout([], [], 100, 100) == {}

    @pytest.mark.parametrize(("width", "height"), [(0, 100), (100, -1)])
    def test_invalid_canvas(self, width, height):
        """Test non-positive canvas sizes are rejected."""
        with pytest.raises(ValueError):
            compute_layout(["我"], [], width, height)

    def test_point_to_dict(self):
        """Test Point serialization."""
        assert Point(1.5, 2.0).to_dict() == {"x": 1.5, "y": 2.0}
