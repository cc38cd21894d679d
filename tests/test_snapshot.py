"""Tests for loading snapshot files."""

import json
from pathlib import Path

import pytest

from case_board.graph.schema import GraphPayloadError
from case_board.graph.snapshot import iter_snapshot_records, load_snapshot


def test_load_json_snapshot(test_data_dir: Path):
    """Test loading a single-document snapshot."""
    path = test_data_dir / "board.json"
    path.write_text(
        json.dumps({
            "nodes": [
                {"id": "a", "label": "Alice", "type": "person"},
                {"id": "b", "label": "Knife", "type": "evidence"},
            ],
            "edges": [
                {"source": "a", "target": "b", "relation": "owned"},
                {"source": "a", "target": "missing", "relation": "knows"},
            ],
        }),
        encoding="utf-8",
    )

    graph = load_snapshot(path)

    assert [n.id for n in graph.nodes] == ["a", "b"]
    assert [e.key for e in graph.edges] == [("a", "b")]


def test_load_jsonl_merges_in_order(test_data_dir: Path):
    """Test each JSONL line is merged as an incremental snapshot."""
    path = test_data_dir / "stream.jsonl"
    records = [
        {"nodes": [{"id": "A", "label": "A"}, {"id": "B", "label": "B"}],
         "edges": [{"source": "A", "target": "B", "relation": "knows"}]},
        {"nodes": [{"id": "B", "label": "B"}, {"id": "C", "label": "C"}],
         "edges": [{"source": "B", "target": "C", "relation": "owns"}]},
    ]
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n\n", encoding="utf-8")

    graph = load_snapshot(path)

    assert [n.id for n in graph.nodes] == ["A", "B", "C"]
    assert [e.key for e in graph.edges] == [("A", "B"), ("B", "C")]


def test_iter_records_skips_blank_lines(test_data_dir: Path):
    """Test blank lines in JSONL are ignored."""
    path = test_data_dir / "stream.jsonl"
    path.write_text('{"nodes": []}\n\n   \n{"edges": []}\n', encoding="utf-8")

    assert list(iter_snapshot_records(path)) == [{"nodes": []}, {"edges": []}]


def test_missing_file_raises(test_data_dir: Path):
    """Test a missing snapshot file."""
    with pytest.raises(FileNotFoundError):
        load_snapshot(test_data_dir / "nope.json")


def test_invalid_json_raises(test_data_dir: Path):
    """Test unreadable JSON surfaces as a payload error."""
    path = test_data_dir / "broken.json"
    path.write_text("{nodes: [", encoding="utf-8")

    with pytest.raises(GraphPayloadError):
        load_snapshot(path)


def test_invalid_jsonl_line_reports_line_number(test_data_dir: Path):
    """Test the failing line is named in the error."""
    path = test_data_dir / "stream.jsonl"
    path.write_text('{"nodes": []}\nnot json\n', encoding="utf-8")

    with pytest.raises(GraphPayloadError, match=":2:"):
        load_snapshot(path)


def test_non_object_document_raises(test_data_dir: Path):
    """Test a JSON document that is not an object."""
    path = test_data_dir / "list.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    with pytest.raises(GraphPayloadError):
        load_snapshot(path)
