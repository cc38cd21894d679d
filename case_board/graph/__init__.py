"""Graph model: entities, relationships, ingestion and merging."""

from case_board.graph.models import Edge, Graph, Node, NodeKind, NodeMetadata
from case_board.graph.merge import merge, validate
from case_board.graph.schema import GraphPayloadError, parse_graph
from case_board.graph.snapshot import load_snapshot

__all__ = [
    "Edge",
    "Graph",
    "Node",
    "NodeKind",
    "NodeMetadata",
    "GraphPayloadError",
    "merge",
    "validate",
    "parse_graph",
    "load_snapshot",
]
