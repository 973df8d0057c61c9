"""Access to the Nix store through its command line tools."""

from closuregraph.nix.store import NixStoreClient

__all__ = ["NixStoreClient"]
