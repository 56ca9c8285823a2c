"""Command-line interface for ghkit."""
