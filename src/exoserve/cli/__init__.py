"""Command-line interface for exoserve."""
