"""Command-line interface for spendwise."""
