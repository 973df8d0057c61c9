"""Parser for ``nix-store --query --tree`` output.

The tree text looks like::

    /nix/store/...-root
    ├───/nix/store/...-a
    │   └───/nix/store/...-b
    └───/nix/store/...-c
        └───/nix/store/...-b [...]

The first line is the root. Every other line of a parenting context starts
with a branch marker; lines drawn beneath a child carry one extra level of
indentation (``│`` while siblings follow, blanks after the last sibling).
A ``[...]`` suffix marks a path that was already printed earlier.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError

from closuregraph.config import AnalyzerConfig
from closuregraph.exceptions import CollaboratorError, ParseError
from closuregraph.graph.manager import PackageGraph
from closuregraph.graph.models import PackageSpec

logger = logging.getLogger("closuregraph.parsers.tree_text")

BRANCH_MARKERS = ("├", "└")
BRANCH_FILL = "─"
CONTINUATION = "│"
BACK_REFERENCE = "[...]"

_NESTING_PREFIX = re.compile(r"[│ ]*")
_LEADING_BLANKS = re.compile(r" *")

SizeLookup = Callable[[str], int]


class TreeTextParser:
    """Turns tree text into ``PackageGraph`` construction calls.

    One indentation level is a ``│`` or a blank followed by up to
    ``indent_width - 1`` blanks. Each line's nesting depth is measured once,
    and parsing keeps a stack holding the parent position of every open
    depth. A line at depth ``d`` belongs to the package most recently created
    at depth ``d - 1``, which gives the same result as recursively draining
    the lines nested under each child. Neither the call stack nor the
    per-line work grows with the depth of the tree.
    """

    def __init__(
        self,
        size_lookup: SizeLookup,
        config: Optional[AnalyzerConfig] = None,
    ) -> None:
        """Initialize parser.

        Args:
            size_lookup: Returns the size in bytes of a store path.
            config: Analyzer configuration.
        """
        self.size_lookup = size_lookup
        self.config = config or AnalyzerConfig()
        self._wide_gap = re.compile(" {%d,}" % self.config.indent_width)

    def parse(self, tree_text: str) -> PackageGraph:
        """Build a graph from complete tree text.

        Args:
            tree_text: Tree output, root path on the first line.

        Returns:
            PackageGraph: Graph with all packages and edges registered.

        Raises:
            ParseError: If the text is empty or malformed.
            CollaboratorError: If the size lookup returns an invalid size.
        """
        lines = tree_text.splitlines()
        if not lines or not lines[0].startswith("/"):
            raise ParseError("Got an unexpected output from the tree query, no root path found")

        graph = PackageGraph(self.config)
        root_path = lines[0].strip()
        root_pos = graph.add_package(self._new_spec(root_path))
        logger.info("Parsing closure tree of %s (%d lines)", root_path, len(lines))

        self.process_lines(graph, root_pos, lines[1:])
        logger.info(
            "Parsed %d packages and %d dependencies",
            graph.node_count(),
            graph.edge_count(),
        )
        return graph

    def process_lines(
        self, graph: PackageGraph, parent_pos: int, lines: List[str]
    ) -> None:
        """Register the subtree described by ``lines`` under ``parent_pos``.

        Args:
            graph: Graph to populate.
            parent_pos: Position of the package the lines belong to.
            lines: Lines of this parenting context, indentation relative to
                ``parent_pos``'s children.

        Raises:
            ParseError: On a line without a branch marker, a non-absolute
                path, or indentation deeper than any open package.
        """
        # parents[d] is the package that lines at depth d attach to.
        parents: List[int] = [parent_pos]

        for line in lines:
            depth, offset = self.measure_nesting(line)
            if depth >= len(parents):
                raise ParseError(f"Unexpected line in tree output: {line!r}")
            del parents[depth + 1:]
            parent = parents[depth]

            object_path = self._strip_branch(line, offset)

            if object_path.endswith(BACK_REFERENCE):
                # Already processed, only the edge is new.
                object_path = object_path[: -len(BACK_REFERENCE)].strip()
                object_pos = graph.find_index_by_path(object_path)
                if object_pos != parent:
                    graph.register_dependency(parent, object_pos)
                continue

            pos = graph.add_package(self._new_spec(object_path))
            graph.register_dependency(parent, pos)
            parents.append(pos)

    def measure_nesting(self, line: str) -> Tuple[int, int]:
        """Return ``(depth, offset)`` of a line's indentation.

        ``offset`` is where the branch marker is expected. Blanks before the
        first ``│`` form ``indent_width``-wide levels; every ``│`` opens a
        level that absorbs up to ``indent_width - 1`` following blanks.

        >>> TreeTextParser(len).measure_nesting("│       └───/c")
        (2, 8)
        """
        width = self.config.indent_width
        end = _NESTING_PREFIX.match(line).end()
        lead = _LEADING_BLANKS.match(line, 0, end).end()

        depth = -(-lead // width) + line.count(CONTINUATION, lead, end)
        for gap in self._wide_gap.finditer(line, lead, end):
            depth += -(-(gap.end() - gap.start() - (width - 1)) // width)
        return depth, end

    def _strip_branch(self, line: str, offset: int) -> str:
        if not line.startswith(BRANCH_MARKERS, offset):
            raise ParseError(f"Unexpected line in tree output: {line!r}")

        object_path = line[offset + 1:].lstrip(BRANCH_FILL)
        if not object_path.startswith("/"):
            raise ParseError(
                f"Found a store path with unexpected format (not an absolute path): {object_path!r}"
            )
        return object_path

    def _new_spec(self, path: str) -> PackageSpec:
        size_bytes = self.size_lookup(path)
        try:
            return PackageSpec(path=path, size_bytes=size_bytes)
        except ValidationError as e:
            raise CollaboratorError(
                f"Invalid size reported for {path}: {size_bytes!r}"
            ) from e


def parse_tree(
    tree_text: str,
    size_lookup: SizeLookup,
    config: Optional[AnalyzerConfig] = None,
) -> PackageGraph:
    """Convenience wrapper around ``TreeTextParser.parse``."""
    return TreeTextParser(size_lookup, config).parse(tree_text)
