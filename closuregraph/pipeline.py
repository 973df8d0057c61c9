"""End-to-end pipeline: tree text in, annotated package graph out."""

import logging
from typing import Optional

from closuregraph.config import AnalyzerConfig
from closuregraph.graph.annotate import calculate_graph_properties
from closuregraph.graph.manager import PackageGraph
from closuregraph.nix.store import NixStoreClient
from closuregraph.parsers.tree_text import SizeLookup, TreeTextParser

logger = logging.getLogger("closuregraph.pipeline")


def build_graph(
    tree_text: str,
    size_lookup: SizeLookup,
    config: Optional[AnalyzerConfig] = None,
) -> PackageGraph:
    """Parse ``tree_text`` and run the annotation pass on the result.

    Args:
        tree_text: Output of a closure tree query.
        size_lookup: Returns the size in bytes of a store path.
        config: Analyzer configuration.

    Returns:
        PackageGraph: Fully annotated graph, ready for export.
    """
    graph = TreeTextParser(size_lookup, config).parse(tree_text)
    calculate_graph_properties(graph)
    return graph


def analyze(
    store_path: str,
    client: Optional[NixStoreClient] = None,
    config: Optional[AnalyzerConfig] = None,
) -> PackageGraph:
    """Query the closure of ``store_path`` and build its annotated graph."""
    config = config or AnalyzerConfig()
    client = client or NixStoreClient(config)
    tree_text = client.query_tree(store_path)
    return build_graph(tree_text, client.query_size, config)
