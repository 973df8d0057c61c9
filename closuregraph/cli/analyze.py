"""Analyze command implementation."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console

from closuregraph.config import AnalyzerConfig
from closuregraph.exceptions import ClosureGraphError
from closuregraph.export import export_csv, export_dot, export_json
from closuregraph.nix.store import NixStoreClient
from closuregraph.pipeline import analyze

logger = logging.getLogger("closuregraph.cli.analyze")


def analyze_command(args, console: Optional[Console] = None) -> int:
    """Execute the analyze command.

    Args:
        args: Parsed command-line arguments containing:
            - store_path: Store path whose closure is analyzed
            - dot_file_path: DOT output path (optional)
            - csv_file_path: CSV output path (optional)
            - json_file_path: JSON output path (optional)
            - nix_store: nix-store executable
            - store_dir: Store root directory
        console: Rich console for the summary line.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()

    try:
        config = AnalyzerConfig(
            nix_store_command=args.nix_store,
            store_dir=args.store_dir,
        )
    except ValidationError as err:
        logger.error("Invalid configuration: %s", err)
        return 1

    try:
        store_path = str(args.store_path)
        if not store_path.startswith("/"):
            store_path = str(Path(store_path).absolute())

        graph = analyze(store_path, NixStoreClient(config), config)

        if args.dot_file_path:
            export_dot(graph, Path(args.dot_file_path))
        if args.csv_file_path:
            export_csv(graph, Path(args.csv_file_path))
        if getattr(args, "json_file_path", None):
            export_json(graph, Path(args.json_file_path))

    except (ClosureGraphError, OSError) as err:
        logger.error("Analysis failed: %s", err)
        return 1

    console.print(
        f"Total bytes calculated for this store path: {graph.sum_package_bytes()}"
    )
    return 0
