"""Command-line interface for slackreader."""
