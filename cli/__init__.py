"""Command-line interface for flowmap."""
