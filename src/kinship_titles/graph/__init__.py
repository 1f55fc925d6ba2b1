"""Kinship graph: the static network of named roles reachable from self."""
from .kinship_graph import (
    GraphBuilder,
    KinshipGraph,
    build_graph,
    get_graph,
    get_graph_snapshot,
    iter_root_hops,
)
from .models import (
    GraphSnapshot,
    KinshipEdge,
    KinshipNode,
    SnapshotEdge,
    SnapshotNode,
)

__all__ = [
    # Graph
    "GraphBuilder",
    "KinshipGraph",
    "build_graph",
    "get_graph",
    "get_graph_snapshot",
    "iter_root_hops",
    # Models
    "KinshipNode",
    "KinshipEdge",
    "GraphSnapshot",
    "SnapshotNode",
    "SnapshotEdge",
]
