"""Validated input model for package nodes."""

from __future__ import annotations

from typing import Annotated, Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PackageSpec(BaseModel):
    """Data needed to create a package node.

    Everything else a node carries (level, short name, visual size) is
    derived by the graph and the annotation pass.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Annotated[str, Field(..., description="Absolute store path")]
    size_bytes: Annotated[
        int, Field(..., ge=0, description="Closure-independent size on disk")
    ]

    @field_validator("path")
    @classmethod
    def _validate_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"package path must be absolute: {v!r}")
        return v

    def to_backend_attrs(self, short_name: str) -> Dict[str, Any]:
        """Convert to the attribute dict stored on a backend node."""
        return {
            "path": self.path,
            "size_bytes": self.size_bytes,
            "level": 0,
            "short_name": short_name,
            "graph_size": 0.5,
        }
