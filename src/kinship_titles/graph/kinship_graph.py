"""Kinship graph construction and traversal.

The graph is defined once by ``build_graph`` and frozen. Nodes are kinship
titles; edges are elementary relation hops. Several roles that people address
the same way share one node, so e.g. the children of a father's elder and
younger brothers all point at the same cousin nodes.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from types import MappingProxyType

import structlog

from ..errors import GraphConstructionError, UnresolvedGraphPath
from ..vocabulary import ROOT_TITLE, ElementaryRelation, Gender
from .models import GraphSnapshot, KinshipEdge, KinshipNode, SnapshotEdge, SnapshotNode

logger = structlog.get_logger(__name__)

R = ElementaryRelation
M = Gender.MALE
F = Gender.FEMALE


class KinshipGraph:
    """Immutable directed graph of kinship roles rooted at self.

    Only ``GraphBuilder.freeze`` creates instances. Adjacency lists keep
    insertion order, which decides the edge a traversal hop follows when
    several edges share a relation.
    """

    def __init__(
        self,
        nodes: dict[str, KinshipNode],
        outgoing: dict[str, list[KinshipEdge]],
        incoming: dict[str, list[KinshipEdge]],
        edges: list[KinshipEdge],
        root: str,
    ) -> None:
        self._nodes = MappingProxyType(dict(nodes))
        self._outgoing = MappingProxyType({k: tuple(v) for k, v in outgoing.items()})
        self._incoming = MappingProxyType({k: tuple(v) for k, v in incoming.items()})
        self._edges = tuple(edges)
        self._root = root

    def __contains__(self, title: object) -> bool:
        return title in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> KinshipNode:
        return self._nodes[self._root]

    @property
    def nodes(self) -> tuple[KinshipNode, ...]:
        return tuple(self._nodes.values())

    @property
    def edges(self) -> tuple[KinshipEdge, ...]:
        return self._edges

    def titles(self) -> list[str]:
        return list(self._nodes)

    def node(self, title: str) -> KinshipNode:
        """Get a node by title. Raises KeyError for unknown titles."""
        return self._nodes[title]

    def edges_from(self, title: str) -> tuple[KinshipEdge, ...]:
        """Outgoing edges of a node, in definition order."""
        return self._outgoing.get(title, ())

    def edges_to(self, title: str) -> tuple[KinshipEdge, ...]:
        """Incoming edges of a node, in definition order."""
        return self._incoming.get(title, ())

    def walk(self, relations: Sequence[ElementaryRelation]) -> KinshipNode:
        """Follow a relation chain outward from the root.

        At every hop the first outgoing edge carrying the hop's relation is
        taken. An empty chain resolves to the root itself.

        Raises:
            UnresolvedGraphPath: if a hop has no matching outgoing edge
        """
        current = self._root
        for hop, relation in enumerate(relations):
            edge = next((e for e in self.edges_from(current) if e.relation == relation), None)
            if edge is None:
                raise UnresolvedGraphPath(hop, relation.value, current)
            current = edge.target
        return self._nodes[current]

    def snapshot(self) -> GraphSnapshot:
        """Export nodes and edges for rendering."""
        return GraphSnapshot(
            nodes=[
                SnapshotNode(id=n.title, title=n.title, gender=n.gender, generation=n.generation)
                for n in self._nodes.values()
            ],
            edges=[
                SnapshotEdge(source=e.source, to=e.target, relation=e.relation)
                for e in self._edges
            ],
        )


class GraphBuilder:
    """Accumulates nodes and edges, then freezes them into a KinshipGraph."""

    def __init__(self, root: str = ROOT_TITLE) -> None:
        self._root = root
        self._nodes: dict[str, KinshipNode] = {}
        self._outgoing: dict[str, list[KinshipEdge]] = {}
        self._incoming: dict[str, list[KinshipEdge]] = {}
        self._edges: list[KinshipEdge] = []
        self._frozen = False
        self.add_node(root, Gender.UNKNOWN, 0)

    @property
    def root(self) -> str:
        return self._root

    def add_node(self, title: str, gender: Gender, generation: int) -> KinshipNode:
        self._check_open()
        if title in self._nodes:
            raise GraphConstructionError(f"duplicate node {title!r}")
        node = KinshipNode(title=title, gender=gender, generation=generation)
        self._nodes[title] = node
        self._outgoing[title] = []
        self._incoming[title] = []
        return node

    def add_nodes(self, *entries: tuple[str, Gender, int]) -> None:
        for title, gender, generation in entries:
            self.add_node(title, gender, generation)

    def add_edge(
        self,
        source: str,
        target: str,
        relation: ElementaryRelation,
        reverse: ElementaryRelation | None = None,
    ) -> KinshipEdge:
        """Add a directed hop. Both endpoints must already exist."""
        self._check_open()
        for endpoint in (source, target):
            if endpoint not in self._nodes:
                raise GraphConstructionError(
                    f"edge {source!r} -{relation.value}-> {target!r} references missing node {endpoint!r}"
                )
        edge = KinshipEdge(source=source, target=target, relation=relation, reverse=reverse)
        self._outgoing[source].append(edge)
        self._incoming[target].append(edge)
        self._edges.append(edge)
        return edge

    def add_edges(self, source: str, *hops: tuple[ElementaryRelation, str]) -> None:
        """Add several hops leaving the same node."""
        for relation, target in hops:
            self.add_edge(source, target, relation)

    def freeze(self) -> KinshipGraph:
        self._check_open()
        self._frozen = True
        return KinshipGraph(self._nodes, self._outgoing, self._incoming, self._edges, self._root)

    def _check_open(self) -> None:
        if self._frozen:
            raise GraphConstructionError("graph builder already frozen")


# =============================================================================
# Graph definition
# =============================================================================


def _add_immediate_family(b: GraphBuilder) -> None:
    me = b.root

    b.add_nodes(("父亲", M, 1), ("母亲", F, 1))
    b.add_edge(me, "父亲", R.FATHER)
    b.add_edge(me, "母亲", R.MOTHER)
    b.add_edge("父亲", me, R.SON, R.FATHER)
    b.add_edge("母亲", me, R.DAUGHTER, R.MOTHER)

    b.add_nodes(("丈夫", M, 0), ("妻子", F, 0))
    b.add_edge(me, "丈夫", R.HUSBAND)
    b.add_edge(me, "妻子", R.WIFE)
    b.add_edge("丈夫", me, R.WIFE, R.HUSBAND)
    b.add_edge("妻子", me, R.HUSBAND, R.WIFE)

    b.add_nodes(("哥哥", M, 0), ("弟弟", M, 0), ("姐姐", F, 0), ("妹妹", F, 0))
    b.add_edges(
        me,
        (R.ELDER_BROTHER, "哥哥"),
        (R.YOUNGER_BROTHER, "弟弟"),
        (R.ELDER_SISTER, "姐姐"),
        (R.YOUNGER_SISTER, "妹妹"),
    )

    b.add_nodes(("儿子", M, -1), ("女儿", F, -1))
    b.add_edge(me, "儿子", R.SON)
    b.add_edge(me, "女儿", R.DAUGHTER)
    b.add_edge("儿子", me, R.FATHER, R.SON)
    b.add_edge("女儿", me, R.MOTHER, R.DAUGHTER)


def _add_extended_family(b: GraphBuilder) -> None:
    # Father's side
    b.add_nodes(("爷爷", M, 2), ("奶奶", F, 2))
    b.add_edges("父亲", (R.FATHER, "爷爷"), (R.MOTHER, "奶奶"))
    b.add_nodes(("伯父", M, 1), ("叔父", M, 1), ("姑妈", F, 1))
    b.add_edges("父亲", (R.ELDER_BROTHER, "伯父"), (R.YOUNGER_BROTHER, "叔父"), (R.ELDER_SISTER, "姑妈"))

    # Mother's side
    b.add_nodes(("外公", M, 2), ("外婆", F, 2))
    b.add_edges("母亲", (R.FATHER, "外公"), (R.MOTHER, "外婆"))
    b.add_nodes(("舅舅", M, 1), ("姨妈", F, 1))
    b.add_edges("母亲", (R.ELDER_BROTHER, "舅舅"), (R.ELDER_SISTER, "姨妈"))

    # Parents-in-law
    b.add_nodes(("岳父", M, 1), ("岳母", F, 1))
    b.add_edges("妻子", (R.FATHER, "岳父"), (R.MOTHER, "岳母"))
    b.add_nodes(("公公", M, 1), ("婆婆", F, 1))
    b.add_edges("丈夫", (R.FATHER, "公公"), (R.MOTHER, "婆婆"))

    # Siblings' spouses
    b.add_nodes(("嫂子", F, 0), ("弟媳", F, 0), ("姐夫", M, 0), ("妹夫", M, 0))
    b.add_edge("哥哥", "嫂子", R.WIFE)
    b.add_edge("弟弟", "弟媳", R.WIFE)
    b.add_edge("姐姐", "姐夫", R.HUSBAND)
    b.add_edge("妹妹", "妹夫", R.HUSBAND)

    # Siblings' children
    b.add_nodes(("侄子", M, -1), ("侄女", F, -1), ("外甥", M, -1), ("外甥女", F, -1))
    b.add_edges("哥哥", (R.SON, "侄子"), (R.DAUGHTER, "侄女"))
    b.add_edges("姐姐", (R.SON, "外甥"), (R.DAUGHTER, "外甥女"))

    # Children's spouses and children
    b.add_nodes(("儿媳", F, -1), ("女婿", M, -1))
    b.add_edge("儿子", "儿媳", R.WIFE)
    b.add_edge("女儿", "女婿", R.HUSBAND)
    b.add_nodes(("孙子", M, -2), ("孙女", F, -2), ("外孙", M, -2), ("外孙女", F, -2))
    b.add_edges("儿子", (R.SON, "孙子"), (R.DAUGHTER, "孙女"))
    b.add_edges("女儿", (R.SON, "外孙"), (R.DAUGHTER, "外孙女"))

    # Wife's siblings
    b.add_nodes(("大舅子", M, 0), ("小舅子", M, 0), ("大姨子", F, 0), ("小姨子", F, 0))
    b.add_edges(
        "妻子",
        (R.ELDER_BROTHER, "大舅子"),
        (R.YOUNGER_BROTHER, "小舅子"),
        (R.ELDER_SISTER, "大姨子"),
        (R.YOUNGER_SISTER, "小姨子"),
    )

    # Husband's siblings
    b.add_nodes(("大伯", M, 0), ("小叔", M, 0), ("大姑", F, 0), ("小姑", F, 0))
    b.add_edges(
        "丈夫",
        (R.ELDER_BROTHER, "大伯"),
        (R.YOUNGER_BROTHER, "小叔"),
        (R.ELDER_SISTER, "大姑"),
        (R.YOUNGER_SISTER, "小姑"),
    )

    # Parents are each other's spouse
    b.add_edge("母亲", "父亲", R.HUSBAND)
    b.add_edge("父亲", "母亲", R.WIFE)


def _add_collateral_family(b: GraphBuilder) -> None:
    # Spouses and children of the wife's siblings
    b.add_nodes(("大舅嫂", F, 0), ("小舅嫂", F, 0), ("大姨夫", M, 0), ("小姨夫", M, 0))
    b.add_edge("大舅子", "大舅嫂", R.WIFE)
    b.add_edge("小舅子", "小舅嫂", R.WIFE)
    b.add_edge("大姨子", "大姨夫", R.HUSBAND)
    b.add_edge("小姨子", "小姨夫", R.HUSBAND)
    b.add_nodes(("内侄", M, -1), ("内侄女", F, -1))
    for brother in ("大舅子", "小舅子"):
        b.add_edges(brother, (R.SON, "内侄"), (R.DAUGHTER, "内侄女"))

    # Spouses of the husband's siblings
    b.add_nodes(("大伯母", F, 0), ("小婶", F, 0), ("大姑父", M, 0), ("小姑父", M, 0))
    b.add_edge("大伯", "大伯母", R.WIFE)
    b.add_edge("小叔", "小婶", R.WIFE)
    b.add_edge("大姑", "大姑父", R.HUSBAND)
    b.add_edge("小姑", "小姑父", R.HUSBAND)

    # Spouses of the parents' siblings
    b.add_nodes(("伯母", F, 1), ("婶婶", F, 1), ("姑父", M, 1))
    b.add_edge("伯父", "伯母", R.WIFE)
    b.add_edge("叔父", "婶婶", R.WIFE)
    b.add_edge("姑妈", "姑父", R.HUSBAND)
    b.add_nodes(("舅母", F, 1), ("姨父", M, 1))
    b.add_edge("舅舅", "舅母", R.WIFE)
    b.add_edge("姨妈", "姨父", R.HUSBAND)

    # Paternal-line cousins share the 堂 nodes
    b.add_nodes(("堂兄", M, 0), ("堂弟", M, 0), ("堂姐", F, 0), ("堂妹", F, 0))
    for uncle in ("伯父", "叔父"):
        b.add_edges(uncle, (R.SON, "堂兄"), (R.SON, "堂弟"), (R.DAUGHTER, "堂姐"), (R.DAUGHTER, "堂妹"))

    # All other cousins share the 表 nodes
    b.add_nodes(("表兄", M, 0), ("表弟", M, 0), ("表姐", F, 0), ("表妹", F, 0))
    for parent_sibling in ("姑妈", "舅舅", "姨妈"):
        b.add_edges(
            parent_sibling,
            (R.SON, "表兄"),
            (R.SON, "表弟"),
            (R.DAUGHTER, "表姐"),
            (R.DAUGHTER, "表妹"),
        )

    # Great-grandparents
    b.add_nodes(("太爷爷", M, 3), ("太奶奶", F, 3), ("太外公", M, 3), ("太外婆", F, 3))
    b.add_edge("爷爷", "太爷爷", R.FATHER)
    b.add_edge("奶奶", "太奶奶", R.MOTHER)
    b.add_edge("外公", "太外公", R.FATHER)
    b.add_edge("外婆", "太外婆", R.MOTHER)


def build_graph() -> KinshipGraph:
    """Build the kinship graph from scratch.

    Deterministic and input-independent; callers normally use ``get_graph``
    instead of building a fresh copy.
    """
    builder = GraphBuilder()
    _add_immediate_family(builder)
    _add_extended_family(builder)
    _add_collateral_family(builder)
    graph = builder.freeze()
    logger.debug("graph.built", nodes=len(graph), edges=len(graph.edges))
    return graph


_GRAPH = build_graph()


def get_graph() -> KinshipGraph:
    """The process-wide kinship graph."""
    return _GRAPH


def get_graph_snapshot() -> GraphSnapshot:
    """Read-only export of the process-wide graph for rendering."""
    return _GRAPH.snapshot()


def iter_root_hops(graph: KinshipGraph | None = None) -> Iterator[KinshipEdge]:
    """One-hop edges leaving the root."""
    if graph is None:
        graph = _GRAPH
    yield from graph.edges_from(graph.root.title)

