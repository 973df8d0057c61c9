"""Helpers for deriving display names from store paths."""

from __future__ import annotations

from closuregraph.config import AnalyzerConfig


def strip_store_root(path: str, config: AnalyzerConfig) -> str:
    """Return ``path`` without the store directory prefix.

    >>> strip_store_root("/nix/store/abc-hello-2.12", AnalyzerConfig())
    'abc-hello-2.12'
    """
    if path.startswith(config.store_dir):
        return path[len(config.store_dir):]
    return path.lstrip("/")


def symbolic_name(path: str, config: AnalyzerConfig) -> str:
    """Return the path with store directory and hash segment removed.

    Paths that are not long enough to carry a hash, or that live outside
    the store directory, fall back to ``strip_store_root``.

    >>> symbolic_name(
    ...     "/nix/store/" + "e" * 32 + "-hello-2.12", AnalyzerConfig()
    ... )
    'hello-2.12'
    """
    if path.startswith(config.store_dir) and len(path) > config.hash_prefix_length:
        return path[config.hash_prefix_length:]
    return strip_store_root(path, config)
