"""Parsers turning store query output into package graphs."""

from closuregraph.parsers.tree_text import TreeTextParser, parse_tree

__all__ = ["TreeTextParser", "parse_tree"]
