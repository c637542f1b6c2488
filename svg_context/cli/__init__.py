"""Command-line interface for svg-context."""
