"""Blocking wrapper around the ``nix-store`` command line tool.

Both queries run synchronously with no timeout and no retry; any failure
is surfaced as ``CollaboratorError`` and aborts the run.
"""

import logging
import subprocess
from typing import List, Optional

from closuregraph.config import AnalyzerConfig
from closuregraph.exceptions import CollaboratorError

logger = logging.getLogger("closuregraph.nix.store")


class NixStoreClient:
    """Runs ``nix-store --query`` subcommands."""

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        self.config = config or AnalyzerConfig()

    def query_size(self, path: str) -> int:
        """Return the size in bytes of a single store path.

        Args:
            path: Store path to measure.

        Returns:
            int: Size reported by ``nix-store --query --size``.

        Raises:
            CollaboratorError: If the query fails or its output is not a
                non-negative integer.
        """
        output = self._run(["--query", "--size", path]).strip()
        try:
            size_bytes = int(output)
        except ValueError as e:
            raise CollaboratorError(
                f"Unexpected size output for {path}: {output!r}"
            ) from e
        if size_bytes < 0:
            raise CollaboratorError(f"Negative size reported for {path}: {size_bytes}")
        return size_bytes

    def query_tree(self, root_path: str) -> str:
        """Return the tree text of a closure.

        Args:
            root_path: Store path whose closure is printed.

        Returns:
            str: Output of ``nix-store --query --tree``.

        Raises:
            CollaboratorError: If the query fails.
        """
        logger.info("Querying closure tree of %s", root_path)
        return self._run(["--query", "--tree", root_path])

    def _run(self, args: List[str]) -> str:
        cmd = [self.config.nix_store_command, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise CollaboratorError(
                f"Could not run {self.config.nix_store_command}: {e}"
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else ""
            logger.error("%s failed: %s", " ".join(cmd), stderr)
            raise CollaboratorError(
                f"{' '.join(cmd)} exited with status {e.returncode}: {stderr}"
            ) from e

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CollaboratorError(f"{' '.join(cmd)} produced non UTF-8 output") from e
