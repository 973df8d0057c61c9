"""Public graph API surface."""

from closuregraph.graph.annotate import GraphProperties, calculate_graph_properties
from closuregraph.graph.backend import ArenaBackend
from closuregraph.graph.identifiers import strip_store_root, symbolic_name
from closuregraph.graph.manager import PackageGraph
from closuregraph.graph.models import PackageSpec

__all__ = [
    "ArenaBackend",
    "GraphProperties",
    "PackageGraph",
    "PackageSpec",
    "calculate_graph_properties",
    "strip_store_root",
    "symbolic_name",
]
