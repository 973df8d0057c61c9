"""Package graph for a single closure analysis.

PackageGraph is the unique graph instance of a run. It stores every store
path of the closure as an arena node addressed by a stable integer position,
together with dependency edges and per-node levels.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import networkx as nx

from closuregraph.config import AnalyzerConfig
from closuregraph.exceptions import LookupAssertionError
from closuregraph.graph.backend import ArenaBackend
from closuregraph.graph.identifiers import symbolic_name
from closuregraph.graph.models import PackageSpec

logger = logging.getLogger("closuregraph.graph.manager")


class PackageGraph:
    """Arena-indexed dependency graph of store paths.

    The first package added is the root and stays at level 0. Every other
    node gets its level from ``register_dependency``: one more than the
    deepest parent known at the moment an edge into it is registered.
    Levels are never pushed down to a node's own dependants afterwards, so a
    node that gains a deeper parent late leaves its children where they were.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        """Initialize an empty package graph.

        Args:
            config: Analyzer configuration, defaults are used when omitted.
        """
        self.config = config or AnalyzerConfig()
        self._backend = ArenaBackend()
        self._path_index: Dict[str, int] = {}
        # Filled in by the annotation pass: index = level, arena order inside.
        self.by_level: List[List[int]] = []

    @property
    def native_graph(self) -> nx.DiGraph:
        """NetworkX view of the graph, keyed by arena position."""
        return self._backend.native_graph

    def add_package(self, spec: PackageSpec) -> int:
        """Append a package node.

        Args:
            spec: Validated package data.

        Returns:
            int: Stable arena position of the new node.
        """
        pos = self._backend.append_node(
            **spec.to_backend_attrs(symbolic_name(spec.path, self.config))
        )
        # Duplicate paths resolve to their first occurrence.
        self._path_index.setdefault(spec.path, pos)
        logger.debug("Added package %d: %s (%d bytes)", pos, spec.path, spec.size_bytes)
        return pos

    def register_dependency(self, package_pos: int, depends_pos: int) -> None:
        """Record that ``package_pos`` depends on ``depends_pos``.

        The dependency is re-leveled against all of its current parents.

        Args:
            package_pos: Position of the depending (parent) package.
            depends_pos: Position of the dependency (child) package.

        Raises:
            LookupAssertionError: If either position is unknown.
        """
        self._check_pos(package_pos)
        self._check_pos(depends_pos)
        if package_pos == depends_pos:
            logger.debug("Skipping self dependency on package %d", package_pos)
            return

        self._backend.add_edge(package_pos, depends_pos)

        max_parent_level = max(
            self._backend.node_data(parent)["level"]
            for parent in self._backend.predecessors(depends_pos)
        )
        self._backend.node_data(depends_pos)["level"] = max_parent_level + 1
        logger.debug(
            "Registered dependency %d -> %d (level=%d)",
            package_pos,
            depends_pos,
            max_parent_level + 1,
        )

    def find_index_by_path(self, path: str) -> int:
        """Return the position of the package with exactly this path.

        Raises:
            LookupAssertionError: If no package has this path.
        """
        try:
            return self._path_index[path]
        except KeyError:
            raise LookupAssertionError(f"No package registered for path: {path}") from None

    def get_package(self, pos: int) -> Dict[str, Any]:
        """Get the attribute dict of a package.

        The dict is live: the annotation pass writes ``short_name`` and
        ``graph_size`` into it.

        Raises:
            LookupAssertionError: If the position is unknown.
        """
        self._check_pos(pos)
        return self._backend.node_data(pos)

    def level(self, pos: int) -> int:
        return self.get_package(pos)["level"]

    def dependencies(self, pos: int) -> List[int]:
        """Dependency positions of a package, sorted ascending."""
        self._check_pos(pos)
        return sorted(self._backend.successors(pos))

    def used_by(self, pos: int) -> List[int]:
        """Positions of the packages depending on ``pos``, in registration order."""
        self._check_pos(pos)
        return list(self._backend.predecessors(pos))

    def positions(self) -> Iterable[int]:
        return range(self._backend.node_count())

    def node_count(self) -> int:
        return self._backend.node_count()

    def edge_count(self) -> int:
        return self._backend.edge_count()

    def sum_package_bytes(self) -> int:
        return sum(data["size_bytes"] for _, data in self._backend.nodes(data=True))

    def _check_pos(self, pos: int) -> None:
        if not isinstance(pos, int) or not self._backend.has_node(pos):
            raise LookupAssertionError(f"Unknown package position: {pos!r}")
