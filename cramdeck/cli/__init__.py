"""Command-line interface for cramdeck."""
