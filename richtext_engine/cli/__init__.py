"""Command-line interface for the richtext-engine tool."""
