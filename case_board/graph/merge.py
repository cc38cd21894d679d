"""Snapshot merging and validation."""

from __future__ import annotations

import logging

from case_board.graph.models import Edge, Graph, Node

logger = logging.getLogger(__name__)


def validate(graph: Graph) -> Graph:
    """Return a copy of ``graph`` without edges that reference unknown nodes.

    Runs before any graph reaches the layout engine, so physics and
    rendering only ever see edges whose endpoints exist.
    """
    node_ids = graph.node_ids()
    edges = [e for e in graph.edges if e.source in node_ids and e.target in node_ids]
    dropped = len(graph.edges) - len(edges)
    if dropped:
        logger.debug(f"Dropped {dropped} edge(s) with a dangling endpoint")
    return Graph(nodes=list(graph.nodes), edges=edges)


def merge(existing: Graph, incoming: Graph) -> Graph:
    """Additively merge an incremental snapshot into an existing graph.

    A node is appended only when neither its id nor its label matches a
    node already present (including nodes appended earlier from the same
    snapshot). An edge is appended only when its ``(source, target)`` pair
    is new, whatever its relation text. Nothing is ever removed and the
    inputs are not mutated.

    Args:
        existing: Graph currently on the board
        incoming: Partial snapshot to fold in

    Returns:
        New validated Graph
    """
    nodes: list[Node] = list(existing.nodes)
    known_ids = {n.id for n in nodes}
    known_labels = {n.label for n in nodes}

    for node in incoming.nodes:
        if node.id in known_ids or node.label in known_labels:
            continue
        nodes.append(node)
        known_ids.add(node.id)
        known_labels.add(node.label)

    edges: list[Edge] = list(existing.edges)
    known_pairs = {e.key for e in edges}
    for edge in incoming.edges:
        if edge.key in known_pairs:
            continue
        edges.append(edge)
        known_pairs.add(edge.key)

    merged = validate(Graph(nodes=nodes, edges=edges))
    logger.debug(
        f"Merged snapshot: +{len(merged.nodes) - len(existing.nodes)} node(s), "
        f"+{len(merged.edges) - len(existing.edges)} edge(s)"
    )
    return merged
