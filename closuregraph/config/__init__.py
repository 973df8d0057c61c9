"""Configuration schema and validation for closuregraph."""

from .schema import AnalyzerConfig

__all__ = [
    "AnalyzerConfig",
]
