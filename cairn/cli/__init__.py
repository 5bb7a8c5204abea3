"""Command-line interface for Cairn."""
