"""Tests for the annotation pass."""

from __future__ import annotations

import pytest

from closuregraph.config import AnalyzerConfig
from closuregraph.graph import PackageGraph, PackageSpec, calculate_graph_properties


def store_path(name: str, hash_char: str = "a") -> str:
    return "/nix/store/" + hash_char * 32 + "-" + name


def _star(sizes: dict[str, int]) -> PackageGraph:
    """Root (first entry) depending directly on every other entry."""
    graph = PackageGraph()
    positions = [
        graph.add_package(PackageSpec(path=path, size_bytes=size))
        for path, size in sizes.items()
    ]
    for pos in positions[1:]:
        graph.register_dependency(positions[0], pos)
    return graph


def test_graph_size_is_normalized_between_bounds() -> None:
    graph = _star(
        {
            store_path("root", "r"): 100,
            store_path("big", "b"): 300,
            store_path("mid", "m"): 200,
        }
    )

    props = calculate_graph_properties(graph)

    assert props.smallest_size_bytes == 100
    assert props.largest_size_bytes == 300
    sizes = [graph.get_package(pos)["graph_size"] for pos in graph.positions()]
    assert sizes == pytest.approx([0.2, 2.2, 1.2])
    assert all(0.2 <= size <= 2.2 for size in sizes)


def test_identical_sizes_give_minimum_graph_size() -> None:
    graph = _star({store_path("root", "r"): 42, store_path("a", "a"): 42})

    calculate_graph_properties(graph)

    assert [graph.get_package(pos)["graph_size"] for pos in graph.positions()] == [
        0.2,
        0.2,
    ]


def test_by_level_buckets_in_arena_order() -> None:
    graph = PackageGraph()
    root, a, b, c = (
        graph.add_package(PackageSpec(path=f"/{name}", size_bytes=1))
        for name in "rabc"
    )
    graph.register_dependency(root, a)
    graph.register_dependency(a, c)
    graph.register_dependency(root, b)

    props = calculate_graph_properties(graph)

    assert props.largest_level == 2
    assert props.by_level == [[root], [a, b], [c]]
    assert graph.by_level == props.by_level


def test_unique_names_use_symbolic_name() -> None:
    graph = _star({store_path("root", "r"): 1, store_path("hello-2.12", "a"): 2})

    calculate_graph_properties(graph)

    assert graph.get_package(0)["short_name"] == "root"
    assert graph.get_package(1)["short_name"] == "hello-2.12"


def test_name_collisions_are_resolved_pairwise_only() -> None:
    """The first two holders get full names, a third keeps the bare name."""
    first = store_path("glibc-2.39", "a")
    second = store_path("glibc-2.39", "b")
    third = store_path("glibc-2.39", "c")
    graph = _star({store_path("root", "r"): 1, first: 1, second: 1, third: 1})

    calculate_graph_properties(graph)

    assert graph.get_package(1)["short_name"] == "a" * 32 + "-glibc-2.39"
    assert graph.get_package(2)["short_name"] == "b" * 32 + "-glibc-2.39"
    assert graph.get_package(3)["short_name"] == "glibc-2.39"


def test_custom_store_dir_and_size_range() -> None:
    config = AnalyzerConfig(
        store_dir="/gnu/store", hash_length=4, min_graph_size=1.0, graph_size_span=1.0
    )
    graph = PackageGraph(config)
    root = graph.add_package(PackageSpec(path="/gnu/store/abcd-root", size_bytes=0))
    leaf = graph.add_package(PackageSpec(path="/gnu/store/efgh-leaf", size_bytes=10))
    graph.register_dependency(root, leaf)

    calculate_graph_properties(graph)

    assert graph.get_package(leaf)["short_name"] == "leaf"
    assert graph.get_package(leaf)["graph_size"] == pytest.approx(2.0)
    assert graph.get_package(root)["graph_size"] == pytest.approx(1.0)


def test_empty_graph() -> None:
    props = calculate_graph_properties(PackageGraph())

    assert props.by_level == []
