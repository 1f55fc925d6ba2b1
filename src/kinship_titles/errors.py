"""Exceptions raised while building the kinship graph and resolving chains.

Only GraphConstructionError escapes to callers. The resolution errors are
either mapped to sentinel titles at the resolver boundary or recovered by
falling through to the next strategy.
"""
from __future__ import annotations

# Titles returned in place of a kinship term
EMPTY_INPUT_SENTINEL = "请输入关系"
UNRECOGNIZED_SENTINEL = "无法识别的关系"
UNKNOWN_RELATION_SENTINEL = "未知关系"
INTERNAL_ERROR_SENTINEL = "计算错误，请检查输入"


class KinshipError(Exception):
    """Base exception for kinship title errors."""


class GraphConstructionError(KinshipError):
    """Raised when the graph builder is used incorrectly.

    Adding an edge whose endpoint does not exist yet, or adding a duplicate
    title, is a programming error in the graph definition.
    """


class ResolutionError(KinshipError):
    """Base for errors raised while resolving a chain."""

    sentinel: str = UNKNOWN_RELATION_SENTINEL


class UserInputEmpty(ResolutionError):
    """Raised when the chain text is blank."""

    sentinel = EMPTY_INPUT_SENTINEL


class UnparseableChain(ResolutionError):
    """Raised when no vocabulary token survives tokenization."""

    sentinel = UNRECOGNIZED_SENTINEL

    def __init__(self, text: str):
        super().__init__(f"no relation tokens in {text!r}")
        self.text = text


class UnresolvedGraphPath(ResolutionError):
    """Raised when a traversal hop has no matching outgoing edge."""

    def __init__(self, hop: int, relation: str, at_title: str):
        super().__init__(f"hop {hop} ({relation}) has no edge from {at_title!r}")
        self.hop = hop
        self.relation = relation
        self.at_title = at_title


class NoTitleMapping(ResolutionError):
    """Raised when the title table has no entry for a folded chain."""

    def __init__(self, key: tuple):
        super().__init__(f"no title for {key!r}")
        self.key = key


class InternalComputationFault(ResolutionError):
    """Wraps any unexpected failure during resolution."""

    sentinel = INTERNAL_ERROR_SENTINEL
