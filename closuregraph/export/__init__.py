"""Exporters for annotated package graphs."""

from closuregraph.export.csv import export_csv
from closuregraph.export.dot import export_dot, rank_chunk_size
from closuregraph.export.json import export_json

__all__ = ["export_csv", "export_dot", "export_json", "rank_chunk_size"]
