"""CSV export of the package list, grouped by level."""

import logging
from pathlib import Path
from typing import TextIO

from closuregraph.graph.manager import PackageGraph

logger = logging.getLogger("closuregraph.export.csv")

CSV_HEADER = "pos,level,package_name,size_bytes,dependencies,path"


def write_package_list(graph: PackageGraph, out: TextIO) -> None:
    """Write one row per package, levels in increasing order.

    The dependency column is always quoted since it is itself a
    comma-separated list.
    """
    out.write(CSV_HEADER + "\n")
    for level, bucket in enumerate(graph.by_level):
        for pos in bucket:
            pkg = graph.get_package(pos)
            deps = ",".join(str(dep) for dep in graph.dependencies(pos))
            out.write(
                f"{pos},{level},{pkg['short_name']},{pkg['size_bytes']},"
                f"\"{deps}\",{pkg['path']}\n"
            )


def export_csv(graph: PackageGraph, output_path: Path) -> None:
    """Export the package list to a CSV file.

    Args:
        graph: Annotated package graph.
        output_path: Output file path.
    """
    logger.info("Exporting package list to CSV: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        write_package_list(graph, f)

    logger.info("CSV export completed: %d packages", graph.node_count())
