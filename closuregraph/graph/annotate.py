"""Annotation pass over a fully built package graph.

Computes everything the exporters need in a single sweep over the arena:
the per-level buckets, a normalized visual size for every package and the
short names used as labels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from closuregraph.graph.identifiers import strip_store_root, symbolic_name
from closuregraph.graph.manager import PackageGraph

logger = logging.getLogger("closuregraph.graph.annotate")


@dataclass
class GraphProperties:
    """Summary of an annotated graph."""

    smallest_size_bytes: int
    largest_size_bytes: int
    largest_level: int
    by_level: List[List[int]] = field(default_factory=list)


def calculate_graph_properties(graph: PackageGraph) -> GraphProperties:
    """Annotate every package of ``graph`` in place.

    ``graph_size`` maps ``size_bytes`` linearly onto
    ``[min_graph_size, min_graph_size + graph_size_span]``; when all sizes are
    equal every package gets ``min_graph_size``.

    Short names start out as the symbolic name (store directory and hash
    stripped). When a second package produces a symbolic name already held
    by another, the entry is dropped and both packages are labelled with
    their store path minus the store directory. Deduplication is pairwise
    only: a third package with the same symbolic name finds no entry and
    keeps the bare name.

    Args:
        graph: Graph with all packages and dependencies registered.

    Returns:
        GraphProperties: Size range, deepest level and level buckets.
    """
    config = graph.config
    if graph.node_count() == 0:
        graph.by_level = []
        return GraphProperties(0, 0, 0, [])

    graph_names: Dict[str, int] = {}
    smallest = None
    largest = None
    largest_level = 0

    for pos in graph.positions():
        pkg = graph.get_package(pos)
        size = pkg["size_bytes"]
        smallest = size if smallest is None else min(smallest, size)
        largest = size if largest is None else max(largest, size)
        largest_level = max(largest_level, pkg["level"])

        name = symbolic_name(pkg["path"], config)
        if name in graph_names:
            other_pos = graph_names.pop(name)
            other = graph.get_package(other_pos)
            graph_names[strip_store_root(other["path"], config)] = other_pos
            graph_names[strip_store_root(pkg["path"], config)] = pos
            logger.debug(
                "Short name %r shared by packages %d and %d", name, other_pos, pos
            )
        else:
            graph_names[name] = pos

    by_level: List[List[int]] = [[] for _ in range(largest_level + 1)]
    span = largest - smallest
    for pos in graph.positions():
        pkg = graph.get_package(pos)
        by_level[pkg["level"]].append(pos)

        if span == 0:
            ratio = 0.0
        else:
            ratio = min(max((pkg["size_bytes"] - smallest) / span, 0.0), 1.0)
        pkg["graph_size"] = config.min_graph_size + config.graph_size_span * ratio

    for name, pos in graph_names.items():
        graph.get_package(pos)["short_name"] = name

    graph.by_level = by_level
    logger.info(
        "Annotated %d packages across %d levels (sizes %d..%d bytes)",
        graph.node_count(),
        len(by_level),
        smallest,
        largest,
    )
    return GraphProperties(smallest, largest, largest_level, by_level)
