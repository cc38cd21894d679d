"""Ingestion of graph snapshots delivered by the analysis service.

Snapshots arrive as JSON-shaped dicts produced by a language model, so
individual entries are frequently incomplete. Each entry is validated on
its own: a bad node or edge is dropped and counted, it never fails the
whole snapshot.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from case_board.graph.merge import validate
from case_board.graph.models import NODE_KINDS, Edge, Graph, Node, NodeMetadata

logger = logging.getLogger(__name__)

DEFAULT_KIND = "evidence"


class GraphPayloadError(ValueError):
    """Raised when a snapshot cannot be interpreted as a graph at all."""


def _required_text(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError("expected a string")
    text = str(value).strip()
    if not text:
        raise ValueError("must not be empty")
    return text


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class NodeMetadataPayload(BaseModel):
    """Metadata block; every field degrades to empty instead of failing."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    role: Optional[str] = None
    impact_score: Optional[float] = Field(default=None, alias="impactScore")
    tags: list[str] = Field(default_factory=list)
    key_quote: Optional[str] = Field(default=None, alias="keyQuote")

    @field_validator("role", "key_quote", mode="before")
    @classmethod
    def clean_text(cls, v: Any) -> Optional[str]:
        return _optional_text(v)

    @field_validator("impact_score", mode="before")
    @classmethod
    def clamp_score(cls, v: Any) -> Optional[float]:
        """Coerce to float and clamp to the 1-10 relevance scale."""
        if v is None or isinstance(v, bool):
            return None
        try:
            score = float(v)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(score):
            return None
        return min(10.0, max(1.0, score))

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, v: Any) -> list[str]:
        if not isinstance(v, (list, tuple)):
            return []
        return [tag.strip() for tag in v if isinstance(tag, str) and tag.strip()]

    def to_metadata(self) -> NodeMetadata:
        return NodeMetadata(
            role=self.role,
            impact_score=self.impact_score,
            tags=list(self.tags),
            key_quote=self.key_quote,
        )


class NodePayload(BaseModel):
    """A single node entry as sent by the analysis service."""

    model_config = ConfigDict(extra="ignore")

    id: str
    label: str
    kind: str = Field(default=DEFAULT_KIND, validation_alias=AliasChoices("type", "kind"))
    description: str = ""
    metadata: NodeMetadataPayload = Field(default_factory=NodeMetadataPayload)

    @field_validator("id", "label", mode="before")
    @classmethod
    def require_text(cls, v: Any) -> str:
        return _required_text(v)

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v: Any) -> str:
        kind = v.strip().lower() if isinstance(v, str) else ""
        if kind not in NODE_KINDS:
            logger.debug(f"Unknown node kind {v!r}, using {DEFAULT_KIND!r}")
            return DEFAULT_KIND
        return kind

    @field_validator("description", mode="before")
    @classmethod
    def clean_description(cls, v: Any) -> str:
        return v.strip() if isinstance(v, str) else ""

    @field_validator("metadata", mode="before")
    @classmethod
    def metadata_mapping(cls, v: Any) -> Any:
        return v if isinstance(v, Mapping) else {}

    def to_node(self) -> Node:
        return Node(
            id=self.id,
            label=self.label,
            kind=self.kind,
            description=self.description,
            metadata=self.metadata.to_metadata(),
        )


class EdgePayload(BaseModel):
    """A single edge entry as sent by the analysis service."""

    model_config = ConfigDict(extra="ignore")

    source: str
    target: str
    relation: str = ""

    @field_validator("source", "target", mode="before")
    @classmethod
    def require_text(cls, v: Any) -> str:
        return _required_text(v)

    @field_validator("relation", mode="before")
    @classmethod
    def clean_relation(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list)):
            return ""
        return str(v).strip()

    def to_edge(self) -> Edge:
        return Edge(source=self.source, target=self.target, relation=self.relation)


def _entries(payload: Mapping, key: str) -> list:
    value = payload.get(key)
    return value if isinstance(value, list) else []


def parse_graph(payload: Any) -> Graph:
    """Build a validated Graph from a snapshot dict.

    Args:
        payload: ``{"nodes": [...], "edges": [...]}`` as delivered by the
            analysis service, or an existing Graph.

    Returns:
        Graph with malformed entries, duplicate ids and dangling edges removed

    Raises:
        GraphPayloadError: If payload is not a mapping
    """
    if isinstance(payload, Graph):
        return validate(payload)
    if not isinstance(payload, Mapping):
        raise GraphPayloadError(
            f"Graph snapshot must be a mapping, got {type(payload).__name__}"
        )

    nodes: list[Node] = []
    seen: set[str] = set()
    dropped_nodes = 0
    duplicates = 0
    for entry in _entries(payload, "nodes"):
        if not isinstance(entry, Mapping):
            dropped_nodes += 1
            continue
        try:
            parsed = NodePayload.model_validate(dict(entry))
        except ValidationError as e:
            logger.debug(f"Dropping malformed node {entry!r}: {e.error_count()} error(s)")
            dropped_nodes += 1
            continue
        if parsed.id in seen:
            duplicates += 1
            continue
        seen.add(parsed.id)
        nodes.append(parsed.to_node())

    edges: list[Edge] = []
    dropped_edges = 0
    for entry in _entries(payload, "edges"):
        if not isinstance(entry, Mapping):
            dropped_edges += 1
            continue
        try:
            edges.append(EdgePayload.model_validate(dict(entry)).to_edge())
        except ValidationError:
            dropped_edges += 1

    if dropped_nodes or dropped_edges:
        logger.warning(
            f"Snapshot ingestion dropped {dropped_nodes} malformed node(s) "
            f"and {dropped_edges} malformed edge(s)"
        )
    if duplicates:
        logger.info(f"Snapshot contained {duplicates} duplicate node id(s); kept first occurrence")

    return validate(Graph(nodes=nodes, edges=edges))
