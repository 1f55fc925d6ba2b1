"""Force-directed placement of graph nodes for rendering.

A plain Fruchterman-Reingold style simulation: every pair of nodes repels
with k^2/d, every edge attracts its endpoints with d^2/k, where
k = sqrt(area / node count). Each step moves every free node by a damped
fraction of its net force and clamps it into the canvas inset by the
padding.

The root node is a special case. It is pinned at the canvas centre for the
whole run, takes no displacement, and only acts on the other nodes.
"""
from __future__ import annotations

import math
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from .config import CONFIG
from .vocabulary import ROOT_TITLE

logger = structlog.get_logger(__name__)


@dataclass
class Point:
    """Canvas coordinates of a node."""
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


def _node_id(node: Any) -> str:
    if isinstance(node, str):
        return node
    if isinstance(node, Mapping):
        return node["id"]
    return node.id


def _edge_ends(edge: Any) -> tuple[str, str]:
    if isinstance(edge, Mapping):
        return edge["from"], edge["to"]
    if isinstance(edge, tuple):
        return edge[0], edge[1]
    return edge.source, edge.to


def compute_layout(
    nodes: Iterable[Any],
    edges: Iterable[Any],
    width: float,
    height: float,
    *,
    root_id: str = ROOT_TITLE,
    iterations: int | None = None,
    damping: float | None = None,
    padding: float | None = None,
    rng: random.Random | None = None,
) -> dict[str, Point]:
    """Compute 2-D positions for a node/edge snapshot.

    Args:
        nodes: Snapshot nodes, mappings with an ``id`` key, or bare ids
        edges: Snapshot edges, mappings with ``from``/``to`` keys, or (from, to) tuples
        width: Canvas width
        height: Canvas height
        root_id: Node pinned at the canvas centre
        iterations: Simulation steps (default from CONFIG)
        damping: Fraction of the net force applied per step (default from CONFIG)
        padding: Inset of the clamp rectangle (default from CONFIG)
        rng: Random source for initial placement; seed it for reproducible output

    Returns:
        Mapping of node id to Point. The root, when present, is exactly at
        (width / 2, height / 2).
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas size must be positive, got {width}x{height}")

    iterations = CONFIG.iterations if iterations is None else iterations
    damping = CONFIG.damping if damping is None else damping
    padding = CONFIG.padding if padding is None else padding
    if rng is None:
        rng = random.Random(CONFIG.seed) if CONFIG.seed is not None else random.Random()

    ids = list(dict.fromkeys(_node_id(n) for n in nodes))
    if not ids:
        return {}

    # Keep the clamp rectangle non-empty on small canvases
    pad_x = min(padding, width / 2)
    pad_y = min(padding, height / 2)

    positions: dict[str, list[float]] = {}
    for node_id in ids:
        if node_id == root_id:
            positions[node_id] = [width / 2, height / 2]
        else:
            positions[node_id] = [
                pad_x + rng.random() * (width - 2 * pad_x),
                pad_y + rng.random() * (height - 2 * pad_y),
            ]

    links = [(a, b) for a, b in map(_edge_ends, edges) if a in positions and b in positions]

    k = math.sqrt((width * height) / len(ids))
    for _ in range(iterations):
        forces = {node_id: [0.0, 0.0] for node_id in ids}

        # Repulsion between every pair
        for a in ids:
            ax, ay = positions[a]
            fa = forces[a]
            for b in ids:
                if a == b:
                    continue
                dx = positions[b][0] - ax
                dy = positions[b][1] - ay
                distance = math.hypot(dx, dy) or CONFIG.min_distance
                force = (k * k) / distance
                fa[0] -= force * dx / distance
                fa[1] -= force * dy / distance

        # Attraction along edges
        for a, b in links:
            dx = positions[b][0] - positions[a][0]
            dy = positions[b][1] - positions[a][1]
            distance = math.hypot(dx, dy) or CONFIG.min_distance
            force = (distance * distance) / k
            fx = force * dx / distance
            fy = force * dy / distance
            forces[a][0] += fx
            forces[a][1] += fy
            forces[b][0] -= fx
            forces[b][1] -= fy

        for node_id in ids:
            if node_id == root_id:
                continue
            pos = positions[node_id]
            fx, fy = forces[node_id]
            pos[0] = max(pad_x, min(width - pad_x, pos[0] + fx * damping))
            pos[1] = max(pad_y, min(height - pad_y, pos[1] + fy * damping))

    logger.debug("layout.computed", nodes=len(ids), edges=len(links), iterations=iterations)
    return {node_id: Point(x, y) for node_id, (x, y) in positions.items()}
