"""Tests for the node-link JSON export."""

from __future__ import annotations

import json
from pathlib import Path

from closuregraph.export.json import export_json
from closuregraph.pipeline import build_graph


def test_export_json_node_link_format(tmp_path: Path) -> None:
    sizes = {"/R": 10, "/A": 20, "/B": 30}
    graph = build_graph("/R\n├───/A\n└───/B\n", sizes.__getitem__)
    output = tmp_path / "graph.json"

    export_json(graph, output)

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["directed"] is True
    assert [node["id"] for node in data["nodes"]] == [0, 1, 2]
    assert data["nodes"][1]["path"] == "/A"
    assert data["nodes"][1]["level"] == 1
    assert {(edge["source"], edge["target"]) for edge in data["edges"]} == {(0, 1), (0, 2)}
    assert data["graph"] == {"total_size_bytes": 60, "levels": 2}
