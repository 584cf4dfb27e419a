"""Command-line interface for gitpeek."""
