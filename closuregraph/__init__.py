"""Dependency closure graphs for Nix store paths."""

__version__ = "0.1.0"
