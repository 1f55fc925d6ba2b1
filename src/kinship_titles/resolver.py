"""Chain resolution: relation chain text -> kinship title.

Three strategies are tried in order and the first one that produces a title
wins:

1. Override lookup on the literal chain text, first as typed (whitespace
   removed) and then with 丈夫 rewritten to 夫.
2. Graph traversal of the tokenized chain from self.
3. Generation/gender arithmetic: fold the chain into
   (generation, gender, last relation), look that up in the title table and
   otherwise synthesize a generic label from generation and gender.

``resolve`` is total. Blank and unparseable input map to their own sentinel
titles and any unexpected failure maps to the internal-error sentinel.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

import structlog

from .errors import (
    InternalComputationFault,
    NoTitleMapping,
    ResolutionError,
    UnparseableChain,
    UnresolvedGraphPath,
    UserInputEmpty,
)
from .graph import KinshipGraph, get_graph
from .tables import OVERRIDES, generic_title, lookup_title
from .vocabulary import CONNECTIVE, HUSBAND_SYNONYM, ElementaryRelation, Gender

logger = structlog.get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


class ResolutionSource(str, Enum):
    """Which strategy produced a title."""
    OVERRIDE = "override"
    GRAPH = "graph"
    TITLE_TABLE = "title_table"
    GENERIC = "generic"
    SENTINEL = "sentinel"


@dataclass(frozen=True)
class ChainSummary:
    """Result of folding a chain: where it ends up relative to self."""
    generation: int
    gender: Gender
    last: ElementaryRelation


@dataclass(frozen=True)
class Resolution:
    """A resolved title together with how it was obtained.

    ``chain`` is the parsed relation chain; sentinel results leave it empty.
    """
    title: str
    source: ResolutionSource
    chain: tuple[ElementaryRelation, ...] = field(default_factory=tuple)

    @property
    def tokens(self) -> str:
        return "".join(r.value for r in self.chain)


def canonicalize(text: str) -> str:
    """Remove all whitespace and rewrite the 丈夫 synonym to 夫."""
    return _WHITESPACE.sub("", text).replace(HUSBAND_SYNONYM, ElementaryRelation.HUSBAND.value)


def tokenize(text: str) -> list[ElementaryRelation]:
    """Map chain text to relations.

    The connective and any character outside the vocabulary are dropped
    rather than rejected.
    """
    relations = []
    for ch in text.replace(CONNECTIVE, ""):
        relation = ElementaryRelation.from_token(ch)
        if relation is not None:
            relations.append(relation)
    return relations


def fold_chain(relations: Sequence[ElementaryRelation]) -> ChainSummary:
    """Fold a chain left to right into generation, gender and last hop.

    The first relation sets the starting gender and generation. Every later
    hop adds its generation delta. Spouse and parent/child hops take on the
    hop's own gender; sibling hops keep the inherited one.
    """
    if not relations:
        raise ValueError("cannot fold an empty relation chain")

    first = relations[0]
    generation = first.generation_delta
    gender = first.gender
    for relation in relations[1:]:
        if relation.is_spouse or (relation.is_lineal and relation.gender != gender):
            gender = relation.gender
        generation += relation.generation_delta
    return ChainSummary(generation=generation, gender=gender, last=relations[-1])


class ChainResolver:
    """Resolves chain text against a graph and the static tables.

    Holds only references to immutable data, so one instance can serve
    concurrent callers.

    Example:
        >>> resolver = ChainResolver()
        >>> resolver.resolve("妻的父")
        '岳父'
    """

    def __init__(
        self,
        graph: KinshipGraph | None = None,
        overrides: Mapping[str, str] = OVERRIDES,
    ) -> None:
        self.graph = graph if graph is not None else get_graph()
        self.overrides = overrides

    def resolve(self, text: str) -> str:
        """Resolve chain text to a title. Never raises."""
        return self.explain(text).title

    def explain(self, text: str) -> Resolution:
        """Resolve chain text and report which strategy produced the title.

        Never raises: user errors and internal faults become sentinel
        resolutions.
        """
        try:
            return self._resolve(text)
        except ResolutionError as e:
            logger.info("resolver.rejected", chain=text, error=type(e).__name__)
            return Resolution(title=e.sentinel, source=ResolutionSource.SENTINEL)
        except Exception:
            logger.exception("resolver.internal_fault", chain=text)
            return Resolution(
                title=InternalComputationFault.sentinel,
                source=ResolutionSource.SENTINEL,
            )

    def lookup_override(self, text: str) -> str | None:
        """Check the override table with the raw and the canonical spelling."""
        stripped = _WHITESPACE.sub("", text)
        for key in (stripped, canonicalize(stripped)):
            title = self.overrides.get(key)
            if title is not None:
                return title
        return None

    def override_divergences(self) -> dict[str, tuple[str, str | None]]:
        """Override keys whose graph traversal gives a different answer.

        Maps each key to ``(override title, graph title or None)``.
        """
        divergent = {}
        for key, title in self.overrides.items():
            try:
                reached = self.graph.walk(tokenize(canonicalize(key))).title
            except UnresolvedGraphPath:
                reached = None
            if reached != title:
                divergent[key] = (title, reached)
        return divergent

    def _resolve(self, text: str) -> Resolution:
        if text is None or not text.strip():
            raise UserInputEmpty("empty relation chain")

        title = self.lookup_override(text)
        if title is not None:
            logger.debug("resolver.override_hit", chain=text, title=title)
            chain = tuple(tokenize(canonicalize(text)))
            return Resolution(title=title, source=ResolutionSource.OVERRIDE, chain=chain)

        relations = tokenize(canonicalize(text))
        if not relations:
            raise UnparseableChain(text)
        chain = tuple(relations)

        try:
            node = self.graph.walk(relations)
            return Resolution(title=node.title, source=ResolutionSource.GRAPH, chain=chain)
        except UnresolvedGraphPath as e:
            logger.debug("resolver.fallback", chain=text, hop=e.hop, at=e.at_title)

        summary = fold_chain(relations)
        try:
            title = lookup_title(summary.generation, summary.gender, summary.last)
            return Resolution(title=title, source=ResolutionSource.TITLE_TABLE, chain=chain)
        except NoTitleMapping:
            title = generic_title(summary.generation, summary.gender)
            return Resolution(title=title, source=ResolutionSource.GENERIC, chain=chain)


_DEFAULT_RESOLVER = ChainResolver()


def resolve(text: str) -> str:
    """Resolve chain text with the process-wide resolver. Never raises."""
    return _DEFAULT_RESOLVER.resolve(text)


def explain(text: str) -> Resolution:
    """Like ``resolve`` but also reports the strategy used."""
    return _DEFAULT_RESOLVER.explain(text)
