"""Node, edge and snapshot models for the kinship graph."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..vocabulary import ElementaryRelation, Gender


@dataclass(frozen=True)
class KinshipNode:
    """A named kinship role. The title doubles as the node id."""
    title: str
    gender: Gender
    generation: int  # 0=self's generation, positive=elders, negative=juniors

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.title,
            "title": self.title,
            "gender": self.gender.value,
            "generation": self.generation,
        }


@dataclass(frozen=True)
class KinshipEdge:
    """A directed relation hop between two roles.

    ``reverse`` names the hop that leads back from ``target`` to ``source``
    when the graph definition records it.
    """
    source: str
    target: str
    relation: ElementaryRelation
    reverse: ElementaryRelation | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "from": self.source,
            "to": self.target,
            "relation": self.relation.value,
        }


class SnapshotNode(BaseModel):
    """Read-only view of a node for rendering."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    gender: Gender
    generation: int


class SnapshotEdge(BaseModel):
    """Read-only view of an edge for rendering."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="from")
    to: str
    relation: ElementaryRelation


class GraphSnapshot(BaseModel):
    """Export of the whole graph: ``{nodes: [...], edges: [...]}``."""
    model_config = ConfigDict(frozen=True)

    nodes: list[SnapshotNode] = Field(default_factory=list)
    edges: list[SnapshotEdge] = Field(default_factory=list)

    @property
    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]
