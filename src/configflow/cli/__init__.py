"""Command-line interface for configflow."""
