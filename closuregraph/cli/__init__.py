"""Command implementations for the closuregraph CLI."""
