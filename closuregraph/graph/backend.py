"""Graph backend abstraction layer.

Wraps NetworkX as an append-only arena: node keys are the integer
positions handed out by ``append_node`` and are never reused.
"""

import logging
from typing import Any, Dict, Iterable

import networkx as nx

logger = logging.getLogger("closuregraph.graph.backend")


class ArenaBackend:
    """Arena-style graph backend wrapping a NetworkX ``DiGraph``.

    Positions are contiguous, starting at 0, in insertion order. Nodes are
    never removed, so a position stays valid for the lifetime of the backend.
    """

    def __init__(self) -> None:
        """Initialize backend with an empty NetworkX DiGraph."""
        self._graph = nx.DiGraph()
        logger.debug("Arena backend initialized with NetworkX")

    @property
    def native_graph(self) -> nx.DiGraph:
        """Get native NetworkX graph for export and analysis.

        Returns:
            nx.DiGraph: Native graph instance.
        """
        return self._graph

    def append_node(self, **attributes: Any) -> int:
        """Append a node at the next free position.

        Args:
            **attributes: Node attributes.

        Returns:
            int: Position of the new node.
        """
        pos = self._graph.number_of_nodes()
        self._graph.add_node(pos, **attributes)
        return pos

    def add_edge(self, source: int, target: int) -> None:
        self._graph.add_edge(source, target)

    def has_node(self, pos: int) -> bool:
        return self._graph.has_node(pos)

    def node_data(self, pos: int) -> Dict[str, Any]:
        """Get the mutable attribute dict of a node.

        Args:
            pos: Node position.

        Returns:
            Dict[str, Any]: Live attribute mapping.
        """
        return self._graph.nodes[pos]

    def nodes(self, data: bool = False) -> Iterable:
        """Iterate over nodes in position order.

        Args:
            data: If True, return (position, attributes) tuples.

        Returns:
            Iterable: Node iterator.
        """
        return self._graph.nodes(data=data)

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def successors(self, pos: int) -> Iterable[int]:
        return self._graph.successors(pos)

    def predecessors(self, pos: int) -> Iterable[int]:
        return self._graph.predecessors(pos)
