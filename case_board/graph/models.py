"""Graph data models for the investigation board."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional


NodeKind = Literal["case", "person", "evidence", "location", "event", "statute"]

NODE_KINDS: tuple[str, ...] = ("case", "person", "evidence", "location", "event", "statute")


@dataclass
class NodeMetadata:
    """Optional analyst-facing details attached to an entity."""

    role: Optional[str] = None           # e.g. "Plaintiff", "Hostile Witness"
    impact_score: Optional[float] = None  # 1-10 case relevance
    tags: list[str] = field(default_factory=list)
    key_quote: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.role or self.impact_score is not None or self.tags or self.key_quote)


@dataclass
class Node:
    """Entity extracted from the case file.

    Positions and velocities are not stored here; they belong to the
    layout engine's buffer and are rebuilt on every graph replacement.
    """

    id: str
    label: str
    kind: NodeKind
    description: str = ""
    metadata: NodeMetadata = field(default_factory=NodeMetadata)

    def deep_dive_query(self, include_description: bool = True) -> str:
        """Plain-text context forwarded to the case chat."""
        if include_description and self.description:
            return f"{self.label}: {self.description}"
        return self.label


@dataclass
class Edge:
    """Labelled relationship between two entities."""

    source: str
    target: str
    relation: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)


@dataclass
class Graph:
    """Snapshot of entities and relationships."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node_ids(self) -> set[str]:
        return {node.id for node in self.nodes}

    def node_index(self) -> dict[str, int]:
        """Map node id to its position in ``nodes``."""
        return {node.id: i for i, node in enumerate(self.nodes)}

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def counts_by_kind(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for node in self.nodes:
            counts[node.kind] = counts.get(node.kind, 0) + 1
        return counts
