"""CLI commands for exoserve."""
