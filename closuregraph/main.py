"""Main CLI entry point for closuregraph."""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from closuregraph.cli.analyze import analyze_command

logger = logging.getLogger("closuregraph.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    level = logging.DEBUG if verbose else logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="closuregraph",
        description="Closuregraph - visualize the dependency closure of a Nix store path",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "store_path",
        help="Store path whose closure is analyzed",
    )
    parser.add_argument(
        "-d",
        "--dot-file-path",
        help=(
            "Path to the graphviz dot file to generate. "
            "If not specified, no dot file will be generated."
        ),
    )
    parser.add_argument(
        "-c",
        "--csv-file-path",
        help=(
            "Path to the csv file to generate. "
            "If not specified, no csv file will be generated."
        ),
    )
    parser.add_argument(
        "-j",
        "--json-file-path",
        help="Path to a node-link JSON dump of the annotated graph (optional)",
    )
    parser.add_argument(
        "--nix-store",
        default="nix-store",
        help="nix-store executable used for queries (default: nix-store)",
    )
    parser.add_argument(
        "--store-dir",
        default="/nix/store/",
        help="Store directory stripped from package names (default: /nix/store/)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    setup_logging(args.verbose, console)

    return analyze_command(args, console)


if __name__ == "__main__":
    sys.exit(main())
