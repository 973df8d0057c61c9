"""Tests for DOT export and rank chunking."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from closuregraph.export.dot import chunk_level, export_dot, rank_chunk_size
from closuregraph.graph import PackageGraph, PackageSpec, calculate_graph_properties
from closuregraph.pipeline import build_graph

NODE_RE = re.compile(r"^\d+ \[fixedsize = true, height = [\d.]+, width = [\d.]+, penwidth = 2, label = \".*\"\];$")
EDGE_RE = re.compile(r"^\d+ -> \d+ \[penwidth = 0\.5\];$")


def _export(graph: PackageGraph, tmp_path: Path) -> list[str]:
    output = tmp_path / "out" / "graph.dot"
    export_dot(graph, output)
    return output.read_text(encoding="utf-8").splitlines()


@pytest.mark.parametrize("population,expected", [(0, 20), (5, 20), (19, 20), (50, 20), (1000, 20)])
def test_rank_chunk_size(population: int, expected: int) -> None:
    assert rank_chunk_size(population) == expected


def test_chunk_level_preserves_order() -> None:
    chunks = chunk_level(list(range(45)))

    assert [len(chunk) for chunk in chunks] == [20, 20, 5]
    assert [pos for chunk in chunks for pos in chunk] == list(range(45))


def test_end_to_end_root_with_two_children(tmp_path: Path) -> None:
    graph = build_graph("/R\n├───/A\n└───/B\n", lambda path: 10)

    lines = _export(graph, tmp_path)

    assert lines[0] == "digraph {"
    assert lines[-1] == "}"
    assert sum(1 for line in lines if NODE_RE.match(line)) == 3
    assert [line for line in lines if EDGE_RE.match(line)] == [
        "0 -> 1 [penwidth = 0.5];",
        "0 -> 2 [penwidth = 0.5];",
    ]
    assert lines[1] == (
        '0 [fixedsize = true, height = 0.200, width = 0.200, penwidth = 2, label = "R"];'
    )


def test_rank_subgraphs_and_invisible_chain(tmp_path: Path) -> None:
    graph = build_graph("/R\n├───/A\n└───/B\n", lambda path: 10)

    text = "\n".join(_export(graph, tmp_path))

    assert 'subgraph level_0_0 {\nrank = same;\n0; lnode0_0 [style="invis"];\n}' in text
    assert 'subgraph level_1_0 {\nrank = same;\n1; 2; lnode1_0 [style="invis"];\n}' in text
    assert text.endswith('lnode0_0 -> lnode1_0 [style="invis"];\n}')


def test_large_level_is_split_into_chained_chunks(tmp_path: Path) -> None:
    graph = PackageGraph()
    root = graph.add_package(PackageSpec(path="/root", size_bytes=1))
    for i in range(45):
        pos = graph.add_package(PackageSpec(path=f"/leaf{i}", size_bytes=i))
        graph.register_dependency(root, pos)
    calculate_graph_properties(graph)

    lines = _export(graph, tmp_path)

    subgraphs = [line for line in lines if line.startswith("subgraph")]
    assert subgraphs == [
        "subgraph level_0_0 {",
        "subgraph level_1_0 {",
        "subgraph level_1_1 {",
        "subgraph level_1_2 {",
    ]
    chain = [line for line in lines if line.startswith("lnode")]
    assert chain == [
        'lnode0_0 -> lnode1_0 [style="invis"];',
        'lnode1_0 -> lnode1_1 [style="invis"];',
        'lnode1_1 -> lnode1_2 [style="invis"];',
    ]


def test_labels_are_escaped(tmp_path: Path) -> None:
    graph = build_graph('/R\n└───/we"ird\n', lambda path: 1)

    lines = _export(graph, tmp_path)

    assert 'label = "we\\"ird"' in lines[3]
