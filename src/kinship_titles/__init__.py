"""Kinship Titles - colloquial Chinese kinship term resolver.

Resolves a chain of elementary relations such as 妻的父 ("wife's father")
to the title used for that relative (岳父), using a static kinship graph, a
generation/gender title table and a table of literal overrides.
"""

__version__ = "0.1.0"

from .logging import configure_logging, get_logger
from .graph import GraphSnapshot, KinshipGraph, build_graph, get_graph, get_graph_snapshot
from .layout import Point, compute_layout
from .resolver import ChainResolver, Resolution, ResolutionSource, explain, resolve
from .vocabulary import ElementaryRelation, Gender

__all__ = [
    "ChainResolver",
    "ElementaryRelation",
    "Gender",
    "GraphSnapshot",
    "KinshipGraph",
    "Point",
    "Resolution",
    "ResolutionSource",
    "build_graph",
    "compute_layout",
    "configure_logging",
    "explain",
    "get_graph",
    "get_graph_snapshot",
    "get_logger",
    "resolve",
]


# cli pulls in typer and rich, so it is only imported on demand
def __getattr__(name: str):
    if name == "cli":
        from kinship_titles import cli
        return cli
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
