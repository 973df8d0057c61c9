"""Configuration schema definitions using Pydantic for validation.

All tunables of a run live in a single ``AnalyzerConfig``. There is no
configuration file: the CLI builds the model from its flags and every other
entry point falls back to the defaults below.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator


class AnalyzerConfig(BaseModel):
    """Top-level configuration for a closure analysis run.

    Attributes:
        nix_store_command: Executable used for ``--query`` calls.
        store_dir: Store root prefix, stripped from paths for display.
        hash_length: Width of the hash segment that follows ``store_dir``.
        indent_width: Columns occupied by one level of tree indentation.
        min_chunk_size: Lower bound for the rank chunk size.
        chunk_divisor: Target population used when splitting a level.
        min_graph_size: Visual size of the smallest package.
        graph_size_span: Extra visual size given to the largest package.
    """

    nix_store_command: str = "nix-store"
    store_dir: str = "/nix/store/"
    hash_length: int = Field(default=32, ge=0)
    indent_width: int = Field(default=4, ge=1)
    min_chunk_size: int = Field(default=20, ge=1)
    chunk_divisor: int = Field(default=20, ge=1)
    min_graph_size: float = Field(default=0.2, gt=0.0)
    graph_size_span: float = Field(default=2.0, ge=0.0)

    @field_validator("store_dir")
    @classmethod
    def validate_store_dir(cls, v: str) -> str:
        """Validate that the store directory is an absolute directory prefix."""
        if not v.startswith("/"):
            raise ValueError(f"store_dir must be absolute, got '{v}'")
        if not v.endswith("/"):
            v = v + "/"
        return v

    @field_validator("nix_store_command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("nix_store_command must not be empty")
        return v

    @property
    def hash_prefix_length(self) -> int:
        """Length of ``<store_dir><hash>-``, the part dropped from symbolic names."""
        return len(self.store_dir) + self.hash_length + 1

    @property
    def max_graph_size(self) -> float:
        return self.min_graph_size + self.graph_size_span

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary.

        Returns:
            AnalyzerConfig instance.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
