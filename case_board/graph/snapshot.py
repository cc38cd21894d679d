"""Reading graph snapshots from disk for the standalone viewer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from case_board.graph.merge import merge
from case_board.graph.models import Graph
from case_board.graph.schema import GraphPayloadError, parse_graph

logger = logging.getLogger(__name__)


def iter_snapshot_records(path: str | Path) -> Iterable[dict]:
    """Iterate over snapshot records in a ``.json`` or ``.jsonl`` file.

    A ``.json`` file holds a single snapshot; a ``.jsonl`` file holds one
    incremental snapshot per line, in delivery order.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".jsonl":
        for line_no, line in enumerate(text.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise GraphPayloadError(f"{path}:{line_no}: invalid JSON ({e.msg})") from e
        return

    try:
        yield json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphPayloadError(f"{path}: invalid JSON ({e.msg})") from e


def load_snapshot(path: str | Path) -> Graph:
    """Load a snapshot file, merging JSONL records in order."""
    graph = Graph()
    records = 0
    for record in iter_snapshot_records(path):
        graph = merge(graph, parse_graph(record))
        records += 1
    logger.info(
        f"Loaded {len(graph.nodes)} nodes and {len(graph.edges)} edges "
        f"from {records} record(s) in {path}"
    )
    return graph
