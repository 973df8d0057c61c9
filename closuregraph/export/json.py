"""JSON export for annotated package graphs."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import networkx as nx

from closuregraph.graph.manager import PackageGraph

logger = logging.getLogger("closuregraph.export.json")


def graph_to_dict(graph: PackageGraph) -> Dict[str, Any]:
    """Node-link representation of the graph plus closure totals."""
    data = nx.readwrite.json_graph.node_link_data(graph.native_graph, edges="edges")
    data["graph"] = {
        "total_size_bytes": graph.sum_package_bytes(),
        "levels": len(graph.by_level),
    }
    return data


def export_json(graph: PackageGraph, output_path: Path) -> None:
    """Export graph to JSON format.

    Args:
        graph: Annotated package graph.
        output_path: Output file path.
    """
    logger.info("Exporting graph to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(graph_to_dict(graph), f, indent=2, ensure_ascii=False)

    logger.info("JSON export completed: %d nodes, %d edges",
                graph.node_count(), graph.edge_count())
